"""BaseService: shared event plumbing for the core components.

Every component can run with or without an event bus; without one,
events are simply not emitted. Warnings from failed subscribers are
buffered until the facade collects them with :meth:`take_warnings`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from storefront.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)

# Oldest warnings are dropped once this many are buffered.
MAX_BUFFERED_WARNINGS = 100


class BaseService:
    """Abstract base for CartStore, CheckoutProcess, and ViewController."""

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self._event_bus = event_bus
        self._warnings: list[str] = []

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Emit a state-change event. No-op if no event bus is attached.

        INVARIANT: Subscriber failures are warnings, never errors.
        """
        if self._event_bus is None:
            return
        logger.debug("Dispatching %s", hook_name)
        self._warnings.extend(self._event_bus.dispatch(hook_name, payload))
        del self._warnings[:-MAX_BUFFERED_WARNINGS]

    def take_warnings(self) -> list[str]:
        """Return and clear the newest warnings buffered since the last call."""
        warnings, self._warnings = self._warnings, []
        return warnings

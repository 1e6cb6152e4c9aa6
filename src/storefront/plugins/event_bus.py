"""Synchronous event fan-out to registered subscribers.

Each subscriber is called through its own pluggy hook caller, so one
failing subscriber does not stop the others from being notified.

INVARIANT: Subscriber failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from storefront.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatches hook calls through a :class:`PluginManager`.

    Dispatch runs inline on the caller's thread; the storefront core is
    single-threaded and subscribers observe state in emission order.
    """

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> list[str]:
        """Call every implementation of *hook_name* with *payload*.

        Returns one warning string per subscriber that raised.
        """
        hook_caller = getattr(self._pm.hook, hook_name, None)
        if hook_caller is None:
            msg = f"Unknown hook: {hook_name!r}"
            raise ValueError(msg)

        warnings: list[str] = []
        # pluggy calls the last entry of get_hookimpls() first
        for impl in reversed(hook_caller.get_hookimpls()):
            try:
                self._pm.caller_for(hook_name, impl.plugin)(**payload)
            except Exception:
                logger.warning(
                    "Subscriber %s failed on %s",
                    impl.plugin_name,
                    hook_name,
                    exc_info=True,
                )
                warnings.append(f"Subscriber {impl.plugin_name} failed on {hook_name}")
        return warnings

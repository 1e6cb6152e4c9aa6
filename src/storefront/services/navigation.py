"""ViewController: which screen is active.

Every transition is externally triggered. Only entering checkout is
guarded (the cart must be non-empty). Leaving checkout while a
submission is processing is allowed and does not cancel it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from storefront.domain.types import View
from storefront.services.base import BaseService

if TYPE_CHECKING:
    from storefront.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class ViewController(BaseService):
    """Tracks the current :class:`View`.

    *has_items* reports whether the cart is non-empty; it is consulted
    each time checkout is requested.
    """

    def __init__(
        self,
        has_items: Callable[[], bool],
        *,
        initial: View = View.CATALOG,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self._has_items = has_items
        self._current = initial

    @property
    def current(self) -> View:
        return self._current

    def go_home(self) -> bool:
        self._set(View.CATALOG)
        return True

    def go_to_cart(self) -> bool:
        self._set(View.CART)
        return True

    def go_to_checkout(self) -> bool:
        """Enter checkout. Refused (returns False) when the cart is empty."""
        if not self._has_items():
            logger.debug("Checkout view refused: cart is empty")
            return False
        self._set(View.CHECKOUT)
        return True

    def navigate(self, target: View | str) -> bool:
        """Dispatch to the transition for *target*. Returns whether it was applied.

        Raises ``ValueError`` for a string that is not a view name.
        """
        view = View(target)
        if view is View.CHECKOUT:
            return self.go_to_checkout()
        if view is View.CART:
            return self.go_to_cart()
        return self.go_home()

    def _set(self, view: View) -> None:
        previous = self._current
        if previous is view:
            return
        self._current = view
        logger.debug("View %s -> %s", previous, view)
        self._dispatch_event("view_changed", {"previous": previous, "current": view})

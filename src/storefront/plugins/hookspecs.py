"""Pluggy hook specifications for storefront state-change events.

All hooks are notifications: return values are ignored and a failing
subscriber never affects the operation that emitted the event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from decimal import Decimal

    from storefront.domain.cart import CartEntry
    from storefront.domain.checkout import CheckoutOutcome, OrderReceipt
    from storefront.domain.types import View

hookspec = pluggy.HookspecMarker("storefront")


class StorefrontHookSpec:
    """Hook specifications for the storefront event bus."""

    @hookspec
    def cart_changed(self, entries: tuple[CartEntry, ...], total: Decimal) -> None:
        """Called after every cart mutation with the new contents."""

    @hookspec
    def checkout_changed(self, outcome: CheckoutOutcome) -> None:
        """Called on every checkout status transition."""

    @hookspec
    def order_placed(self, receipt: OrderReceipt) -> None:
        """Called once a submission succeeds, with the submitted items."""

    @hookspec
    def view_changed(self, previous: View, current: View) -> None:
        """Called when the active screen changes."""

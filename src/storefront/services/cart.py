"""CartStore: cart contents with write-through persistence.

The store loads its slot once at construction and writes the full cart
back after every mutation. No operation raises: bad input is
normalized to a no-op or a removal, unreadable stored data becomes an
empty cart, and failed writes are logged and dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storefront.domain.cart import CartEntry, cart_total, parse_entries, render_entries
from storefront.infrastructure.storage import DEFAULT_SLOT
from storefront.services.base import BaseService

if TYPE_CHECKING:
    from decimal import Decimal

    from storefront.domain.catalog import Product
    from storefront.infrastructure.storage import SlotStorage
    from storefront.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


class CartStore(BaseService):
    """Mapping of product id to :class:`CartEntry`, in insertion order.

    Entries hold the product exactly as it was when first added; later
    catalog changes never reach an entry already in the cart.
    """

    def __init__(
        self,
        storage: SlotStorage,
        *,
        slot: str = DEFAULT_SLOT,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self._storage = storage
        self._slot = slot
        self._entries: dict[str, CartEntry] = self._load()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_item(self, product: Product) -> None:
        """Add one unit of *product*, inserting it with quantity 1 if new."""
        existing = self._entries.get(product.id)
        if existing is None:
            self._entries[product.id] = CartEntry(product=product, quantity=1)
        else:
            self._entries[product.id] = existing.model_copy(
                update={"quantity": existing.quantity + 1}
            )
        self._commit("add_item")

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set the quantity of an entry; ``quantity <= 0`` removes it.

        Unknown ids are ignored.
        """
        if quantity <= 0:
            self.remove_item(product_id)
            return
        existing = self._entries.get(product_id)
        if existing is not None:
            self._entries[product_id] = existing.model_copy(update={"quantity": quantity})
        self._commit("update_quantity")

    def remove_item(self, product_id: str) -> None:
        self._entries.pop(product_id, None)
        self._commit("remove_item")

    def clear(self) -> None:
        self._entries.clear()
        self._commit("clear")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def items(self) -> tuple[CartEntry, ...]:
        """Snapshot of the current entries in insertion order."""
        return tuple(self._entries.values())

    def get(self, product_id: str) -> CartEntry | None:
        return self._entries.get(product_id)

    def total(self) -> Decimal:
        return cart_total(self._entries.values())

    def item_count(self) -> int:
        """Number of distinct products in the cart."""
        return len(self._entries)

    def unit_count(self) -> int:
        """Sum of all quantities."""
        return sum(entry.quantity for entry in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._entries

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, CartEntry]:
        """Read the slot; anything unreadable yields an empty cart."""
        try:
            raw = self._storage.read(self._slot)
        except Exception:
            logger.warning("Cart slot %r unreadable, starting empty", self._slot, exc_info=True)
            return {}
        if raw is None:
            return {}
        try:
            entries = parse_entries(raw)
        except ValueError:
            logger.warning("Discarding corrupt cart data in slot %r", self._slot, exc_info=True)
            return {}
        logger.debug("Loaded %d cart entries from slot %r", len(entries), self._slot)
        return entries

    def _persist(self) -> None:
        """Write the full cart to the slot (best-effort).

        Any exception the backend raises is logged and dropped.
        """
        try:
            self._storage.write(self._slot, render_entries(self._entries.values()))
        except Exception:
            logger.warning("Failed to persist cart to slot %r", self._slot, exc_info=True)

    def _commit(self, op: str) -> None:
        logger.debug("%s -> %d entries", op, len(self._entries))
        self._persist()
        self._dispatch_event("cart_changed", {"entries": self.items(), "total": self.total()})

"""Cart entries, totals, and the stored cart record format.

A cart is stored as a JSON array of ``{product, quantity}`` records.
Pure parse/render helpers live here; reading and writing the storage
slot is the infrastructure layer's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, Field, TypeAdapter

from storefront.domain.catalog import Product


class CartEntry(BaseModel):
    """A product snapshot with its quantity (always >= 1)."""

    model_config = {"frozen": True}

    product: Product
    quantity: int = Field(ge=1)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


_ENTRY_LIST = TypeAdapter(list[CartEntry])


def cart_total(entries: Iterable[CartEntry]) -> Decimal:
    """Sum of ``price * quantity`` over *entries*."""
    return sum((entry.line_total for entry in entries), Decimal("0"))


def render_entries(entries: Iterable[CartEntry]) -> str:
    """Serialize entries to the stored JSON record format."""
    return _ENTRY_LIST.dump_json(list(entries), by_alias=True).decode("utf-8")


def parse_entries(raw: str) -> dict[str, CartEntry]:
    """Parse a stored cart into an insertion-ordered ``{product_id: entry}`` map.

    Repeated product ids are merged by adding their quantities, so the
    returned mapping always has unique keys.

    Raises ``ValueError`` (pydantic ``ValidationError`` included) when
    *raw* is not a valid cart record.
    """
    merged: dict[str, CartEntry] = {}
    for entry in _ENTRY_LIST.validate_json(raw):
        existing = merged.get(entry.product_id)
        if existing is not None:
            entry = existing.model_copy(update={"quantity": existing.quantity + entry.quantity})
        merged[entry.product_id] = entry
    return merged


def entry_to_dict(entry: CartEntry) -> dict[str, object]:
    """Flatten an entry for ServiceResult payloads (JSON-safe)."""
    return {
        "id": entry.product.id,
        "name": entry.product.name,
        "price": f"{entry.product.price:.2f}",
        "quantity": entry.quantity,
        "line_total": f"{entry.line_total:.2f}",
    }

"""Checkout outcome values and the legal status transitions.

The status graph is ``idle -> processing -> {succeeded, failed} -> idle``.
Outcomes are immutable; every transition produces a new outcome.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from storefront.domain.cart import CartEntry, cart_total, entry_to_dict
from storefront.domain.types import CheckoutStatus

EMPTY_CART_MESSAGE = "cart is empty"
GENERIC_FAILURE_MESSAGE = "An error occurred during checkout."

CHECKOUT_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["processing"],
    "processing": ["succeeded", "failed"],
    "succeeded": ["idle"],
    "failed": ["idle"],
}


def can_transition(current: CheckoutStatus, target: CheckoutStatus) -> bool:
    return target.value in CHECKOUT_TRANSITIONS[current.value]


class OrderReceipt(BaseModel):
    """Items captured at submission time and what they cost."""

    model_config = {"frozen": True}

    items: tuple[CartEntry, ...]
    total: Decimal

    @classmethod
    def for_items(cls, items: tuple[CartEntry, ...]) -> OrderReceipt:
        return cls(items=items, total=cart_total(items))

    def to_dict(self) -> dict[str, object]:
        return {
            "items": [entry_to_dict(e) for e in self.items],
            "total": f"{self.total:.2f}",
        }


class CheckoutOutcome(BaseModel):
    """Current state of the checkout process.

    ``message`` is set only for ``failed``; ``receipt`` only for ``succeeded``.
    """

    model_config = {"frozen": True}

    status: CheckoutStatus = CheckoutStatus.IDLE
    message: str | None = None
    receipt: OrderReceipt | None = Field(default=None, repr=False)

    @classmethod
    def idle(cls) -> CheckoutOutcome:
        return cls()

    @classmethod
    def processing(cls) -> CheckoutOutcome:
        return cls(status=CheckoutStatus.PROCESSING)

    @classmethod
    def succeeded(cls, receipt: OrderReceipt) -> CheckoutOutcome:
        return cls(status=CheckoutStatus.SUCCEEDED, receipt=receipt)

    @classmethod
    def failed(cls, message: str) -> CheckoutOutcome:
        return cls(status=CheckoutStatus.FAILED, message=message)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"status": self.status.value}
        if self.message is not None:
            data["message"] = self.message
        if self.receipt is not None:
            data["receipt"] = self.receipt.to_dict()
        return data

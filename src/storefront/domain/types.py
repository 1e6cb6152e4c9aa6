"""Screen and checkout status enums shared across the core."""

from __future__ import annotations

from enum import StrEnum


class View(StrEnum):
    """Screens a presentation collaborator can show."""

    CATALOG = "catalog"
    CART = "cart"
    CHECKOUT = "checkout"


class CheckoutStatus(StrEnum):
    """States of the checkout state machine."""

    IDLE = "idle"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

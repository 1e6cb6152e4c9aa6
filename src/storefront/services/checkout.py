"""CheckoutProcess: the simulated order submission state machine.

``idle -> processing -> {succeeded, failed} -> idle``

The process only decides outcomes and announces them. Clearing the
cart and navigating after success belong to the caller (the Storefront
facade). There is no cancellation: once a submission starts it always
ends in ``succeeded`` or ``failed``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Protocol

from storefront.domain.checkout import (
    EMPTY_CART_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    CheckoutOutcome,
    OrderReceipt,
    can_transition,
)
from storefront.domain.types import CheckoutStatus
from storefront.services.base import BaseService

if TYPE_CHECKING:
    from storefront.domain.cart import CartEntry
    from storefront.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]

DEFAULT_DELAY_SECONDS = 2.0


class CheckoutError(Exception):
    """A gateway rejected the order. The message is shown to the user."""


class OrderGateway(Protocol):
    """The remote step of a checkout."""

    async def submit_order(self, items: tuple[CartEntry, ...]) -> None:
        """Complete normally on acceptance; raise :class:`CheckoutError` to reject."""
        ...


class SimulatedGateway:
    """Accepts every order after a fixed artificial delay.

    *sleep* is the scheduler used to wait; tests pass an instant one.
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def submit_order(self, items: tuple[CartEntry, ...]) -> None:
        logger.debug("Simulating submission of %d entries", len(items))
        await self._sleep(self.delay_seconds)


class CheckoutProcess(BaseService):
    """Drives one submission at a time through an :class:`OrderGateway`."""

    def __init__(
        self,
        gateway: OrderGateway | None = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self._gateway: OrderGateway = gateway or SimulatedGateway()
        self._outcome = CheckoutOutcome.idle()

    @property
    def outcome(self) -> CheckoutOutcome:
        return self._outcome

    @property
    def status(self) -> CheckoutStatus:
        return self._outcome.status

    @property
    def is_processing(self) -> bool:
        return self._outcome.status is CheckoutStatus.PROCESSING

    async def submit(self, items: Iterable[CartEntry]) -> CheckoutOutcome:
        """Submit *items* and wait for the outcome.

        The item set is captured before the first suspension point, so
        cart edits made while the submission is in flight do not leak
        into it. A call made while another submission is processing is
        ignored and returns the in-flight ``processing`` outcome.
        """
        if self.is_processing:
            logger.debug("Checkout already processing; ignoring re-entrant submit")
            return self._outcome

        submitted = tuple(items)
        if self.status is not CheckoutStatus.IDLE:
            self._transition(CheckoutOutcome.idle())
        self._transition(CheckoutOutcome.processing())

        if not submitted:
            return self._transition(CheckoutOutcome.failed(EMPTY_CART_MESSAGE))

        try:
            await self._gateway.submit_order(submitted)
        except CheckoutError as exc:
            logger.info("Checkout rejected: %s", exc)
            return self._transition(CheckoutOutcome.failed(str(exc) or GENERIC_FAILURE_MESSAGE))
        except Exception:
            logger.warning("Checkout gateway failed", exc_info=True)
            return self._transition(CheckoutOutcome.failed(GENERIC_FAILURE_MESSAGE))

        receipt = OrderReceipt.for_items(submitted)
        outcome = self._transition(CheckoutOutcome.succeeded(receipt))
        self._dispatch_event("order_placed", {"receipt": receipt})
        return outcome

    def reset(self) -> CheckoutOutcome:
        """Return a finished checkout to ``idle``.

        Idle stays idle; a processing checkout cannot be reset.
        """
        if self.status in (CheckoutStatus.SUCCEEDED, CheckoutStatus.FAILED):
            self._transition(CheckoutOutcome.idle())
        return self._outcome

    def _transition(self, outcome: CheckoutOutcome) -> CheckoutOutcome:
        if not can_transition(self._outcome.status, outcome.status):
            msg = f"Illegal checkout transition: {self._outcome.status} -> {outcome.status}"
            raise RuntimeError(msg)
        logger.debug("Checkout %s -> %s", self._outcome.status, outcome.status)
        self._outcome = outcome
        self._dispatch_event("checkout_changed", {"outcome": outcome})
        return outcome

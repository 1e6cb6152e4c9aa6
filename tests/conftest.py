"""Shared pytest fixtures and test helpers for storefront tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from storefront.domain.catalog import Product, ProductCatalog
from storefront.infrastructure.storage import MemoryStorage
from storefront.plugins import hookimpl
from storefront.services.checkout import SimulatedGateway
from storefront.services.storefront import Storefront


async def instant_sleep(_seconds: float) -> None:
    """Scheduler stand-in: yields to the loop without waiting."""
    await asyncio.sleep(0)


class GatedSleep:
    """Scheduler stand-in that blocks until ``release()`` is called."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self._gate = asyncio.Event()

    async def __call__(self, _seconds: float) -> None:
        self.started.set()
        await self._gate.wait()

    def release(self) -> None:
        self._gate.set()


class RecordingPlugin:
    """Subscriber that records every hook call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @hookimpl
    def cart_changed(self, entries: tuple[Any, ...], total: Decimal) -> None:
        self.calls.append(("cart_changed", {"entries": entries, "total": total}))

    @hookimpl
    def checkout_changed(self, outcome: Any) -> None:
        self.calls.append(("checkout_changed", {"outcome": outcome}))

    @hookimpl
    def order_placed(self, receipt: Any) -> None:
        self.calls.append(("order_placed", {"receipt": receipt}))

    @hookimpl
    def view_changed(self, previous: Any, current: Any) -> None:
        self.calls.append(("view_changed", {"previous": previous, "current": current}))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


def make_product(product_id: str = "1", price: str = "10.00", **kwargs: Any) -> Product:
    return Product(
        id=product_id,
        name=kwargs.pop("name", f"Product {product_id}"),
        description=kwargs.pop("description", ""),
        price=Decimal(price),
        **kwargs,
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def catalog() -> ProductCatalog:
    """The built-in five-product catalog."""
    return ProductCatalog()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def shop(catalog: ProductCatalog, storage: MemoryStorage) -> Iterator[Storefront]:
    """Storefront over memory storage with an instant checkout gateway."""
    s = Storefront.create(
        catalog=catalog,
        storage=storage,
        gateway=SimulatedGateway(2.0, sleep=instant_sleep),
    )
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def recorder(shop: Storefront) -> RecordingPlugin:
    plugin = RecordingPlugin()
    shop.subscribe(plugin)
    return plugin


@pytest.fixture
def _isolated_shop(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands in an empty temp directory with no checkout delay.

    Use via ``@pytest.mark.usefixtures("_isolated_shop")``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STOREFRONT_CONFIG", raising=False)
    monkeypatch.setenv("STOREFRONT_CHECKOUT__DELAY_SECONDS", "0")

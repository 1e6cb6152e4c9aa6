"""Tests for the Storefront facade."""

from __future__ import annotations

import asyncio
import json
from decimal import Decimal
from pathlib import Path

import pytest

from storefront.config.settings import StorefrontSettings
from storefront.domain.cart import CartEntry
from storefront.domain.catalog import ProductCatalog, dump_catalog
from storefront.domain.types import CheckoutStatus, View
from storefront.infrastructure.storage import DEFAULT_SLOT, MemoryStorage
from storefront.plugins import hookimpl
from storefront.services.checkout import CheckoutError, SimulatedGateway
from storefront.services.storefront import Storefront
from tests.conftest import GatedSleep, RecordingPlugin, instant_sleep, make_product


class FailingSubscriber:
    @hookimpl
    def cart_changed(self, entries, total) -> None:
        raise RuntimeError("subscriber bug")


class DecliningGateway:
    async def submit_order(self, items) -> None:
        raise CheckoutError("card declined")


class TestCatalog:
    def test_list_products(self, shop: Storefront) -> None:
        assert [p.id for p in shop.list_products()] == ["1", "2", "3", "4", "5"]

    def test_find_product(self, shop: Storefront) -> None:
        product = shop.find_product("3")
        assert product is not None
        assert product.price == Decimal("32.50")
        assert shop.find_product("99") is None

    def test_browse(self, shop: Storefront) -> None:
        result = shop.browse()
        assert result.ok
        assert result.op == "list_products"
        assert result.data["count"] == 5
        assert result.data["items"][0]["price"] == "25.99"

    def test_empty_catalog_is_kept(self) -> None:
        shop = Storefront.create(catalog=ProductCatalog([]))
        assert shop.list_products() == ()


class TestCart:
    def test_add_by_id(self, shop: Storefront) -> None:
        result = shop.add_item("1")
        assert result.ok
        assert result.data["id"] == "1"
        assert result.data["quantity"] == 1
        assert result.data["total"] == "25.99"

    def test_add_product(self, shop: Storefront) -> None:
        result = shop.add_item(make_product("x", price="1.50"))
        assert result.data["total"] == "1.50"

    def test_add_unknown_id(self, shop: Storefront) -> None:
        result = shop.add_item("99")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_PRODUCT"
        assert shop.items() == ()

    def test_add_and_total(self, shop: Storefront) -> None:
        shop.add_item("1")
        shop.add_item("1")
        shop.add_item("3")
        assert shop.total() == Decimal("84.48")
        assert shop.item_count() == 2
        view = shop.view_cart()
        assert view.data["units"] == 3
        assert [i["id"] for i in view.data["items"]] == ["1", "3"]

    def test_update_to_zero_reports_removed(self, shop: Storefront) -> None:
        shop.add_item("1")
        result = shop.update_quantity("1", 0)
        assert result.data["quantity"] == 0
        assert result.data["items"] == []

    def test_remove_and_clear(self, shop: Storefront) -> None:
        shop.add_item("1")
        shop.add_item("2")
        assert shop.remove_item("1").data["count"] == 1
        result = shop.clear()
        assert result.op == "clear_cart"
        assert result.data["items"] == []
        assert result.data["total"] == "0.00"

    def test_persisted_to_storage(self, shop: Storefront, storage: MemoryStorage) -> None:
        shop.add_item("2")
        stored = json.loads(storage.read(DEFAULT_SLOT) or "[]")
        assert stored[0]["product"]["id"] == "2"


class TestCheckout:
    def test_success_clears_cart_and_goes_home(self, shop: Storefront) -> None:
        shop.add_item("1")
        shop.add_item("1")
        shop.add_item("3")
        assert shop.navigate("checkout").ok

        result = asyncio.run(shop.submit_checkout())

        assert result.ok
        assert result.data["status"] == "succeeded"
        assert result.data["receipt"]["total"] == "84.48"
        assert result.data["view"] == "catalog"
        assert shop.items() == ()
        assert shop.current_view is View.CATALOG
        assert shop.checkout_outcome.status is CheckoutStatus.SUCCEEDED

    def test_empty_cart_fails_without_side_effects(self, shop: Storefront) -> None:
        shop.navigate("cart")
        result = asyncio.run(shop.submit_checkout())

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CHECKOUT_FAILED"
        assert result.error.message == "cart is empty"
        assert result.data["status"] == "failed"
        assert shop.current_view is View.CART

    def test_declined_keeps_cart(self, storage: MemoryStorage) -> None:
        shop = Storefront.create(storage=storage, gateway=DecliningGateway())
        shop.add_item("1")
        result = asyncio.run(shop.submit_checkout())
        assert not result.ok
        assert result.error is not None
        assert result.error.message == "card declined"
        assert len(shop.items()) == 1

    def test_explicit_items(self, shop: Storefront) -> None:
        entries = (CartEntry(product=make_product("z", price="5.00"), quantity=2),)
        result = asyncio.run(shop.submit_checkout(entries))
        assert result.ok
        assert result.data["receipt"]["items"][0]["id"] == "z"

    def test_reentrant_submit_is_ignored(self) -> None:
        gate = GatedSleep()
        shop = Storefront.create(gateway=SimulatedGateway(2.0, sleep=gate))
        shop.add_item("1")

        async def scenario():
            first = asyncio.create_task(shop.submit_checkout())
            await gate.started.wait()
            second = await shop.submit_checkout()
            gate.release()
            return second, await first

        second, first = asyncio.run(scenario())
        assert second.ok
        assert second.data["ignored"] is True
        assert second.data["status"] == "processing"
        assert first.ok
        assert shop.items() == ()

    def test_edits_during_processing_are_cleared_on_success(self) -> None:
        gate = GatedSleep()
        shop = Storefront.create(gateway=SimulatedGateway(2.0, sleep=gate))
        shop.add_item("1")

        async def scenario():
            task = asyncio.create_task(shop.submit_checkout())
            await gate.started.wait()
            shop.add_item("2")
            gate.release()
            return await task

        result = asyncio.run(scenario())
        assert [i["id"] for i in result.data["receipt"]["items"]] == ["1"]
        assert shop.items() == ()

    def test_reset_after_success(self, shop: Storefront) -> None:
        shop.add_item("1")
        asyncio.run(shop.submit_checkout())
        shop.navigate("cart")
        result = shop.reset_checkout()
        assert result.data["status"] == "idle"
        assert result.data["view"] == "catalog"

    def test_reset_after_failure_keeps_view(self, shop: Storefront) -> None:
        shop.navigate("cart")
        asyncio.run(shop.submit_checkout())
        result = shop.reset_checkout()
        assert result.data == {"status": "idle", "view": "cart"}


class TestNavigate:
    def test_checkout_refused_when_empty(self, shop: Storefront) -> None:
        result = shop.navigate("checkout")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NAVIGATION_REFUSED"
        assert result.error.message == "cart is empty"
        assert shop.current_view is View.CATALOG

    def test_unknown_view(self, shop: Storefront) -> None:
        result = shop.navigate("payment")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_VIEW"

    def test_success(self, shop: Storefront) -> None:
        result = shop.navigate(View.CART)
        assert result.ok
        assert result.data == {"view": "cart"}


class TestSubscribers:
    def test_events_in_order(self, shop: Storefront, recorder: RecordingPlugin) -> None:
        shop.add_item("1")
        shop.navigate("checkout")
        asyncio.run(shop.submit_checkout())
        assert recorder.names() == [
            "cart_changed",
            "view_changed",
            "checkout_changed",
            "checkout_changed",
            "order_placed",
            "cart_changed",
            "view_changed",
        ]

    def test_failing_subscriber_becomes_warning(self, shop: Storefront) -> None:
        shop.subscribe(FailingSubscriber(), name="broken")
        result = shop.add_item("1")
        assert result.ok
        assert result.warnings == ["Subscriber broken failed on cart_changed"]
        assert len(shop.items()) == 1

    def test_unsubscribe(self, shop: Storefront) -> None:
        plugin = RecordingPlugin()
        shop.subscribe(plugin)
        shop.unsubscribe(plugin)
        shop.add_item("1")
        assert plugin.calls == []


class TestFromSettings:
    def test_file_backend_persists_between_instances(self, tmp_path: Path) -> None:
        settings = StorefrontSettings.from_cli(project_root=tmp_path)
        first = Storefront.from_settings(settings, sleep=instant_sleep, discover_plugins=False)
        first.add_item("4")
        first.close()

        second = Storefront.from_settings(settings, sleep=instant_sleep, discover_plugins=False)
        try:
            assert [e.product_id for e in second.items()] == ["4"]
        finally:
            second.close()

    def test_custom_catalog(self, tmp_path: Path) -> None:
        catalog_file = tmp_path / "products.json"
        catalog_file.write_text(
            dump_catalog(ProductCatalog([make_product("a", price="3.00")])), encoding="utf-8"
        )
        (tmp_path / "storefront.toml").write_text(
            '[catalog]\npath = "products.json"\n', encoding="utf-8"
        )
        settings = StorefrontSettings.from_cli(project_root=tmp_path)
        shop = Storefront.from_settings(settings, discover_plugins=False)
        try:
            assert [p.id for p in shop.list_products()] == ["a"]
        finally:
            shop.close()

    def test_missing_catalog_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "storefront.toml").write_text(
            '[catalog]\npath = "missing.json"\n', encoding="utf-8"
        )
        settings = StorefrontSettings.from_cli(project_root=tmp_path)
        with pytest.raises(OSError):
            Storefront.from_settings(settings, discover_plugins=False)

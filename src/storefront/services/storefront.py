"""Storefront: the facade presentation code talks to.

Wires the catalog, CartStore, CheckoutProcess, and ViewController to a
shared event bus, and applies checkout outcomes: a successful order
clears the cart and returns to the catalog. Mutating operations return
a :class:`ServiceResult`; queries return plain values.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from storefront.domain.cart import entry_to_dict
from storefront.domain.catalog import Product, ProductCatalog, load_catalog_file
from storefront.domain.checkout import GENERIC_FAILURE_MESSAGE
from storefront.domain.types import CheckoutStatus, View
from storefront.infrastructure.storage import DEFAULT_SLOT, MemoryStorage, open_storage
from storefront.plugins.event_bus import EventBus
from storefront.plugins.manager import PluginManager
from storefront.services.cart import CartStore
from storefront.services.checkout import CheckoutProcess, SimulatedGateway, Sleep
from storefront.services.navigation import ViewController
from storefront.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from decimal import Decimal

    from storefront.config.settings import StorefrontSettings
    from storefront.domain.cart import CartEntry
    from storefront.domain.checkout import CheckoutOutcome
    from storefront.infrastructure.storage import SlotStorage
    from storefront.services.checkout import OrderGateway

logger = logging.getLogger(__name__)


def product_to_dict(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": f"{product.price:.2f}",
        "image_url": product.image_url,
    }


class Storefront:
    """Single entry point for cart, checkout, and navigation.

    Build one with :meth:`create` (explicit collaborators, handy in
    tests) or :meth:`from_settings` (what the CLI uses).
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        cart: CartStore,
        checkout: CheckoutProcess,
        views: ViewController,
        storage: SlotStorage,
        plugin_manager: PluginManager,
    ) -> None:
        self._catalog = catalog
        self._cart = cart
        self._checkout = checkout
        self._views = views
        self._storage = storage
        self._pm = plugin_manager

    @classmethod
    def create(
        cls,
        *,
        catalog: ProductCatalog | None = None,
        storage: SlotStorage | None = None,
        slot: str = DEFAULT_SLOT,
        gateway: OrderGateway | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> Storefront:
        storage = storage if storage is not None else MemoryStorage()
        pm = plugin_manager or PluginManager()
        bus = EventBus(pm)
        cart = CartStore(storage, slot=slot, event_bus=bus)
        checkout = CheckoutProcess(gateway, event_bus=bus)
        views = ViewController(lambda: bool(cart), event_bus=bus)
        catalog = catalog if catalog is not None else ProductCatalog()
        return cls(catalog, cart, checkout, views, storage, pm)

    @classmethod
    def from_settings(
        cls,
        settings: StorefrontSettings,
        *,
        sleep: Sleep = asyncio.sleep,
        discover_plugins: bool = True,
    ) -> Storefront:
        """Build a storefront from resolved settings.

        Raises ``ValueError`` / ``OSError`` for an unusable catalog file and
        ``StorageError`` when the storage backend cannot be opened.
        """
        catalog_path = settings.catalog_path
        catalog = load_catalog_file(catalog_path) if catalog_path else ProductCatalog()
        pm = PluginManager()
        if discover_plugins:
            pm.discover()
        return cls.create(
            catalog=catalog,
            storage=open_storage(settings.storage, settings.data_dir),
            slot=settings.storage.slot,
            gateway=SimulatedGateway(settings.checkout.delay_seconds, sleep=sleep),
            plugin_manager=pm,
        )

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_products(self) -> tuple[Product, ...]:
        return self._catalog.list_all()

    def find_product(self, product_id: str) -> Product | None:
        return self._catalog.find_by_id(product_id)

    def browse(self) -> ServiceResult:
        """Catalog listing as a ServiceResult for presentation."""
        products = [product_to_dict(p) for p in self.list_products()]
        return ServiceResult.success("list_products", {"items": products, "count": len(products)})

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    def add_item(self, product: Product | str) -> ServiceResult:
        """Add one unit of *product* (a Product, or a catalog id)."""
        op = "add_item"
        if not isinstance(product, Product):
            found = self._catalog.find_by_id(product)
            if found is None:
                return ServiceResult.failure(
                    op, "UNKNOWN_PRODUCT", f"No product with id {product!r}", id=product
                )
            product = found
        self._cart.add_item(product)
        return self._cart_result(op, product.id)

    def update_quantity(self, product_id: str, quantity: int) -> ServiceResult:
        self._cart.update_quantity(product_id, quantity)
        return self._cart_result("update_quantity", product_id)

    def remove_item(self, product_id: str) -> ServiceResult:
        self._cart.remove_item(product_id)
        return self._cart_result("remove_item", product_id)

    def clear(self) -> ServiceResult:
        self._cart.clear()
        return self._cart_result("clear_cart")

    def view_cart(self) -> ServiceResult:
        return self._cart_result("view_cart")

    def items(self) -> tuple[CartEntry, ...]:
        return self._cart.items()

    def total(self) -> Decimal:
        return self._cart.total()

    def item_count(self) -> int:
        """Distinct products in the cart (the header badge)."""
        return self._cart.item_count()

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    @property
    def checkout_outcome(self) -> CheckoutOutcome:
        return self._checkout.outcome

    async def submit_checkout(self, items: Iterable[CartEntry] | None = None) -> ServiceResult:
        """Submit *items* (default: the current cart) and apply the outcome.

        On success the cart is cleared and the view returns to the
        catalog. A call made while a submission is in flight changes
        nothing and reports ``ignored: true``.
        """
        op = "checkout"
        if self._checkout.is_processing:
            data = {**self._checkout.outcome.to_dict(), "ignored": True}
            return ServiceResult.success(op, data)

        submitted = self._cart.items() if items is None else tuple(items)
        outcome = await self._checkout.submit(submitted)

        if outcome.status is CheckoutStatus.SUCCEEDED:
            self._cart.clear()
            self._views.go_home()
            data = {**outcome.to_dict(), "view": self._views.current.value}
            return ServiceResult.success(op, data, self._collect_warnings())

        return ServiceResult.failure(
            op,
            "CHECKOUT_FAILED",
            outcome.message or GENERIC_FAILURE_MESSAGE,
            data=outcome.to_dict(),
            warnings=self._collect_warnings(),
        )

    def reset_checkout(self) -> ServiceResult:
        """Dismiss a finished checkout; dismissing a success returns to the catalog."""
        was_succeeded = self._checkout.status is CheckoutStatus.SUCCEEDED
        outcome = self._checkout.reset()
        if was_succeeded:
            self._views.go_home()
        data = {**outcome.to_dict(), "view": self._views.current.value}
        return ServiceResult.success("reset_checkout", data, self._collect_warnings())

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def current_view(self) -> View:
        return self._views.current

    def navigate(self, target: View | str) -> ServiceResult:
        op = "navigate"
        try:
            applied = self._views.navigate(target)
        except ValueError:
            valid = ", ".join(v.value for v in View)
            return ServiceResult.failure(
                op, "UNKNOWN_VIEW", f"Unknown view {target!r} (expected one of: {valid})"
            )
        if not applied:
            return ServiceResult.failure(
                op,
                "NAVIGATION_REFUSED",
                "cart is empty",
                data={"view": self._views.current.value},
                target=str(target),
            )
        return ServiceResult.success(
            op, {"view": self._views.current.value}, self._collect_warnings()
        )

    # ------------------------------------------------------------------
    # Subscribers and lifecycle
    # ------------------------------------------------------------------

    def subscribe(self, plugin: object, name: str | None = None) -> str:
        """Register a subscriber implementing any of the storefront hooks."""
        return self._pm.register_plugin(plugin, name=name)

    def unsubscribe(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def close(self) -> None:
        self._storage.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _collect_warnings(self) -> list[str]:
        return [
            *self._cart.take_warnings(),
            *self._checkout.take_warnings(),
            *self._views.take_warnings(),
        ]

    def _cart_result(self, op: str, product_id: str | None = None) -> ServiceResult:
        data: dict[str, Any] = {}
        if product_id is not None:
            entry = self._cart.get(product_id)
            data["id"] = product_id
            data["quantity"] = entry.quantity if entry is not None else 0
        data.update(
            items=[entry_to_dict(e) for e in self._cart.items()],
            count=self._cart.item_count(),
            units=self._cart.unit_count(),
            total=f"{self._cart.total():.2f}",
        )
        return ServiceResult.success(op, data, self._collect_warnings())

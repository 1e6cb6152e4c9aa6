"""Product model and the read-only product catalog.

The catalog is fixed at startup. Products are frozen values, so a cart
entry holding one is a snapshot that later catalog edits cannot touch.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, TypeAdapter


def _coerce_price(value: Any) -> Any:
    """Route floats through ``str`` so 25.99 becomes ``Decimal("25.99")``."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Price = Annotated[
    Decimal,
    BeforeValidator(_coerce_price),
    # Stored as a JSON number; 15 significant digits survive the float.
    Field(ge=0, max_digits=15),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Product(BaseModel):
    """A catalog product.

    Serialized with camelCase ``imageUrl`` (``by_alias=True``) so stored
    carts keep the record shape ``{id, name, description, price, imageUrl}``.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    price: Price
    image_url: str = Field(default="", alias="imageUrl")


DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="1",
        name="Product 1",
        description="Description for Product 1",
        price=Decimal("25.99"),
        image_url="https://media.istockphoto.com/id/517081132/photo/funny-little-girl-giving-thumbs-up.jpg",
    ),
    Product(
        id="2",
        name="Product 2",
        description="Description for Product 2",
        price=Decimal("19.99"),
        image_url="https://media.istockphoto.com/id/1212783534/photo/studio-portrait-of-a-young-girl-on-white-background.jpg",
    ),
    Product(
        id="3",
        name="Product 3",
        description="Description for Product 3",
        price=Decimal("32.50"),
        image_url="https://img.freepik.com/free-photo/little-young-caucasian-boy-nature-childhood_158595-2550.jpg",
    ),
    Product(
        id="4",
        name="Product 4",
        description="Description for Product 4",
        price=Decimal("15.00"),
        image_url="https://images.unsplash.com/photo-1627639679638-8485316a4b21",
    ),
    Product(
        id="5",
        name="Product 5",
        description="Another product example",
        price=Decimal("45.00"),
        image_url="https://www.shutterstock.com/image-photo/adorable-little-girl-playing-wheat-260nw-109410998.jpg",
    ),
)

_PRODUCT_LIST = TypeAdapter(list[Product])


class ProductCatalog:
    """Ordered, read-only collection of products keyed by id."""

    def __init__(self, products: Iterable[Product] = DEFAULT_PRODUCTS) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            if product.id in self._products:
                msg = f"Duplicate product id in catalog: {product.id!r}"
                raise ValueError(msg)
            self._products[product.id] = product

    def list_all(self) -> tuple[Product, ...]:
        """Return every product in catalog order."""
        return tuple(self._products.values())

    def find_by_id(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.list_all())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products


def parse_catalog(raw: str) -> ProductCatalog:
    """Build a catalog from a JSON array of product records.

    Raises ``ValueError`` (pydantic ``ValidationError`` included) on
    malformed input or duplicate ids.
    """
    return ProductCatalog(_PRODUCT_LIST.validate_json(raw))


def load_catalog_file(path: Path) -> ProductCatalog:
    """Read a catalog JSON file from disk."""
    return parse_catalog(path.read_text(encoding="utf-8"))


def dump_catalog(catalog: ProductCatalog) -> str:
    """Serialize a catalog to the same JSON shape :func:`parse_catalog` reads."""
    records = [p.model_dump(mode="json", by_alias=True) for p in catalog.list_all()]
    return json.dumps(records, indent=2)

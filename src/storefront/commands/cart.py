"""Command group: inspect and edit the cart."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storefront.commands._base import ShopGroup

if TYPE_CHECKING:
    from storefront.commands._context import AppContext

_CART_EXAMPLES = """\
  storefront cart show
  storefront cart add 1
  storefront cart update 1 3
  storefront cart update 1 0
  storefront cart remove 1
  storefront cart clear"""


@click.group(cls=ShopGroup, examples=_CART_EXAMPLES, invoke_without_command=True)
@click.pass_context
def cart(ctx: click.Context) -> None:
    """Show or change the cart. Without a subcommand, shows it."""
    if ctx.invoked_subcommand is None:
        app: AppContext = ctx.obj
        app.emit(app.storefront.view_cart())


@cart.command(examples="  storefront cart show\n  storefront -q cart show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show cart contents and total."""
    app.emit(app.storefront.view_cart())


@cart.command(examples="  storefront cart add 1\n  storefront --json cart add 3")
@click.argument("product_id")
@click.option("-n", "--count", default=1, type=click.IntRange(min=1), help="Units to add.")
@click.pass_obj
def add(app: AppContext, product_id: str, count: int) -> None:
    """Add a product to the cart by catalog ID."""
    result = None
    for _ in range(count):
        result = app.storefront.add_item(product_id)
        if not result.ok:
            break
    assert result is not None
    app.emit(result)


@cart.command(
    examples="  storefront cart update 2 5\n  storefront cart update 2 0\n  storefront cart update 2 -1",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("product_id")
@click.argument("quantity", type=int)
@click.pass_obj
def update(app: AppContext, product_id: str, quantity: int) -> None:
    """Set a product's quantity. Zero or less removes it."""
    app.emit(app.storefront.update_quantity(product_id, quantity))


@cart.command(examples="  storefront cart remove 2")
@click.argument("product_id")
@click.pass_obj
def remove(app: AppContext, product_id: str) -> None:
    """Remove a product from the cart."""
    app.emit(app.storefront.remove_item(product_id))


@cart.command(examples="  storefront cart clear")
@click.pass_obj
def clear(app: AppContext) -> None:
    """Empty the cart."""
    app.emit(app.storefront.clear())

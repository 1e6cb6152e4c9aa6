"""Command: submit the cart as an order."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from storefront.commands._base import ShopCommand

if TYPE_CHECKING:
    from storefront.commands._context import AppContext


@click.command(
    cls=ShopCommand,
    examples="""\
  storefront checkout
  STOREFRONT_CHECKOUT__DELAY_SECONDS=0 storefront checkout
  storefront --json checkout""",
)
@click.pass_obj
def checkout(app: AppContext) -> None:
    """Place an order for everything in the cart.

    On success the cart is emptied. An empty cart fails with
    "cart is empty".
    """
    shop = app.storefront
    if app.interactive and shop.item_count():
        click.echo("Processing...", err=True)
    app.emit(asyncio.run(shop.submit_checkout()))

"""Command: list the product catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storefront.commands._base import ShopCommand

if TYPE_CHECKING:
    from storefront.commands._context import AppContext


@click.command(
    cls=ShopCommand,
    examples="""\
  storefront products
  storefront -v products
  storefront --json products""",
)
@click.pass_obj
def products(app: AppContext) -> None:
    """List every product in the catalog."""
    app.emit(app.storefront.browse())

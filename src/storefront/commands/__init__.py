"""Subcommand modules for the storefront CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the cart group and the standalone commands on the root group."""
    from storefront.commands.cart import cart
    from storefront.commands.checkout import checkout
    from storefront.commands.products import products

    cli.add_command(products)
    cli.add_command(cart)
    cli.add_command(checkout)

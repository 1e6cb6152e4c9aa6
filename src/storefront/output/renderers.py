"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from storefront.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from storefront.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line for errors and status; ``id quantity`` lines for cart listings."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "list_products":
        return "\n".join(str(item["id"]) for item in result.data.get("items", []))
    if result.op in _CART_OPS:
        return "\n".join(
            f"{item['id']} {item['quantity']}" for item in result.data.get("items", [])
        )
    if "status" in result.data:
        return str(result.data["status"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="shop.ok"), Text(f"  {result.op}", style="shop.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="shop.key")
    if key == "id":
        v = Text(str(value), style="shop.id")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _cart_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="shop.id", no_wrap=True)
    table.add_column("Product", style="shop.name")
    table.add_column("Price", style="shop.price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Subtotal", justify="right")
    for item in items:
        table.add_row(
            str(item["id"]),
            str(item["name"]),
            f"${item['price']}",
            str(item["quantity"]),
            f"${item['line_total']}",
        )
    return table


def _total_line(console: Console, total: Any) -> None:
    console.print(Text("Total: ", style="bold"), Text(f"${total}", style="shop.total"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="shop.error"), Text(f"  {result.op}", style="shop.op"), " — ", msg
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Catalog / cart renderers ──────────────────────────────────────────


def _render_products(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False, title="Products")
    table.add_column("ID", style="shop.id", no_wrap=True)
    table.add_column("Name", style="shop.name")
    table.add_column("Description")
    table.add_column("Price", style="shop.price", justify="right")
    if verbose:
        table.add_column("Image", style="dim", overflow="fold")
    for item in result.data.get("items", []):
        row = [str(item["id"]), str(item["name"]), str(item["description"]), f"${item['price']}"]
        if verbose:
            row.append(str(item.get("image_url", "")))
        table.add_row(*row)
    console.print(table)


def _render_cart(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if result.op != "view_cart":
        _status_line(console, result)
        if "id" in d:
            _field(console, "id", d["id"])
            _field(console, "quantity", d["quantity"])

    items = d.get("items", [])
    if not items:
        console.print("Your cart is empty.")
        return

    console.print(_cart_table(items))
    _total_line(console, d.get("total", "0.00"))
    if verbose:
        _field(console, "products", d.get("count", len(items)))
        _field(console, "units", d.get("units", ""))


# ── Checkout renderers ────────────────────────────────────────────────


def _render_checkout(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if d.get("ignored"):
        console.print(Text("Checkout already in progress.", style="shop.warning"))
        return

    receipt = d.get("receipt") or {}
    body = Table.grid(padding=(0, 1))
    body.add_row("Thank you for your purchase. Your order has been processed successfully.")
    if receipt.get("items"):
        body.add_row(_cart_table(receipt["items"]))
        body.add_row(Text(f"Total: ${receipt.get('total', '0.00')}", style="shop.total"))
    console.print(
        Panel(body, title="Order Completed!", border_style="shop.status.succeeded", expand=False)
    )
    if verbose:
        _field(console, "view", d.get("view", ""))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)) and not verbose:
            continue
        _field(console, key, value)


_CART_OPS = frozenset({"add_item", "update_quantity", "remove_item", "clear_cart", "view_cart"})

_OP_RENDERERS: dict[str, Any] = {
    "list_products": _render_products,
    "checkout": _render_checkout,
    **{op: _render_cart for op in _CART_OPS},
}

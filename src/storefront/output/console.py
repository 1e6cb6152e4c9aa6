"""Rich Console factory and theme for storefront output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich drops color codes when not attached to a
terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SHOP_THEME = Theme(
    {
        "shop.ok": "bold green",
        "shop.error": "bold red",
        "shop.warning": "bold yellow",
        "shop.op": "bold cyan",
        "shop.key": "dim",
        "shop.id": "bold blue",
        "shop.name": "bold",
        "shop.price": "magenta",
        "shop.total": "bold blue",
        "shop.status.processing": "yellow",
        "shop.status.succeeded": "bold green",
        "shop.status.failed": "bold red",
        "shop.status.idle": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SHOP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    return f"shop.status.{status}" if status else ""

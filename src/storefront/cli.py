"""Root CLI group for storefront with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from storefront import __version__
from storefront.commands import register_commands
from storefront.commands._context import AppContext
from storefront.config.settings import StorefrontSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="storefront")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the saved cart.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_dir: Path | None,
) -> None:
    """storefront: browse products, fill a cart, and check out."""
    settings = StorefrontSettings.from_cli(
        config_path=config_path,
        data_dir=data_dir,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

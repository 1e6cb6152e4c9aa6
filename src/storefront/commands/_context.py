"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The storefront is built lazily so ``--help`` and
``--version`` never touch storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storefront.config.logging import configure_logging
from storefront.infrastructure.storage import StorageError
from storefront.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from storefront.config.settings import StorefrontSettings
    from storefront.services.result import ServiceResult
    from storefront.services.storefront import Storefront


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: StorefrontSettings) -> None:
        self.settings = settings
        self._storefront: Storefront | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def storefront(self) -> Storefront:
        """The storefront (built on first access).

        Unusable catalog files and storage are reported as CLI errors.
        """
        if self._storefront is None:
            from storefront.services.storefront import Storefront

            try:
                self._storefront = Storefront.from_settings(self.settings)
            except (OSError, ValueError, StorageError) as exc:
                raise click.ClickException(f"Cannot open storefront: {exc}") from exc
            click.get_current_context().call_on_close(self._storefront.close)
        return self._storefront

    @property
    def interactive(self) -> bool:
        """Whether progress chatter may be printed to stderr."""
        return not (self.settings.json_output or self.settings.quiet)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr outside JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

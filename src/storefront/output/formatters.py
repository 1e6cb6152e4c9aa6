"""Output mode selection for ServiceResult.

``--json`` prints the result model verbatim, ``--quiet`` prints a
single line per result, and the default delegates to the Rich
renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from storefront.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from storefront.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Flags that pick the output mode."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)

"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, storefront.toml only contains
overrides. An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from storefront.infrastructure.storage import DEFAULT_SLOT


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["memory", "file", "sqlite"] = "file"
    slot: str = Field(default=DEFAULT_SLOT, min_length=1)
    data_dir: Path | None = None


class CheckoutConfig(BaseModel):
    """[checkout] section."""

    model_config = {"frozen": True}

    delay_seconds: float = Field(default=2.0, ge=0)


class CatalogConfig(BaseModel):
    """[catalog] section.

    ``path`` names a JSON file of product records that replaces the
    built-in catalog. Relative paths resolve against the project root.
    """

    model_config = {"frozen": True}

    path: Path | None = None

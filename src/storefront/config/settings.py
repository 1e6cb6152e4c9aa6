"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs, the CLI flags passed by Click
  2. Env vars with the ``STOREFRONT_`` prefix (``__`` for nested sections)
  3. ``storefront.toml``, discovered via walk-up
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from storefront.config.discovery import DATA_DIRNAME, find_config
from storefront.config.models import CatalogConfig, CheckoutConfig, StorageConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``storefront.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class StorefrontSettings(BaseSettings):
    """Settings for the storefront core and its CLI.

    Attributes:
        project_root: Directory that relative paths resolve against
            (parent of ``storefront.toml``, or CWD if none was found).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STOREFRONT_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    storage: StorageConfig = Field(default_factory=StorageConfig)
    checkout: CheckoutConfig = Field(default_factory=CheckoutConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def data_dir(self) -> Path:
        """Directory for file/sqlite storage (``.storefront/`` by default)."""
        configured = self.storage.data_dir
        if configured is None:
            return self.project_root / DATA_DIRNAME
        if configured.is_absolute():
            return configured
        return self.project_root / configured

    @property
    def catalog_path(self) -> Path | None:
        path = self.catalog.path
        if path is None or path.is_absolute():
            return path
        return self.project_root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        data_dir: Path | None = None,
        **cli_flags: Any,
    ) -> StorefrontSettings:
        """Construct settings from a CLI invocation.

        Discovers ``storefront.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. *data_dir*
        overrides only ``storage.data_dir``; the rest of the TOML
        ``[storage]`` section still applies.
        """
        if data_dir is not None:
            cli_flags["storage"] = {"data_dir": data_dir}

        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

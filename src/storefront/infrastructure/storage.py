"""Named-slot storage backends for the persisted cart.

A slot holds one serialized text record and is replaced whole on every
write. Backends raise :class:`StorageError` for I/O failures so callers
can treat persistence as best-effort without catching backend-specific
exceptions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from storefront.config.models import StorageConfig

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "cartItems"


class StorageError(Exception):
    """A storage backend failed to read or write a slot."""


class SlotStorage(Protocol):
    """Key/value text storage addressed by slot name."""

    def read(self, slot: str) -> str | None:
        """Return the slot's payload, or None when the slot is absent."""
        ...

    def write(self, slot: str, payload: str) -> None:
        """Replace the slot's payload."""
        ...

    def close(self) -> None: ...


class MemoryStorage:
    """Process-local storage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})

    def read(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self.slots[slot] = payload

    def close(self) -> None:
        pass


class FileStorage:
    """One ``<slot>.json`` file per slot under *root*."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, slot: str) -> Path:
        path = self.root / f"{slot}.json"
        if not path.resolve().is_relative_to(self.root.resolve()):
            msg = f"Slot name escapes storage root: {slot!r}"
            raise StorageError(msg)
        return path

    def read(self, slot: str) -> str | None:
        path = self.path_for(slot)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc

    def write(self, slot: str, payload: str) -> None:
        path = self.path_for(slot)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc

    def close(self) -> None:
        pass


def open_storage(config: StorageConfig, data_dir: Path) -> SlotStorage:
    """Build the backend named by ``config.backend``.

    ``data_dir`` is the already-resolved directory for file and sqlite
    backends; the memory backend ignores it.
    """
    backend = config.backend
    logger.debug("Opening %s storage at %s", backend, data_dir)
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage(data_dir)
    if backend == "sqlite":
        from storefront.infrastructure.database.engine import SqliteStorage

        return SqliteStorage.open(data_dir)
    msg = f"Unknown storage backend: {backend!r}"
    raise ValueError(msg)

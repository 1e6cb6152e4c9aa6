"""SQLite engine setup and the slot-table storage backend.

The database lives at ``{data_dir}/storefront.db``. SQLAlchemy Core
(not ORM) is used: the only table is a name -> payload map.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.infrastructure.database.schema import metadata, slots
from storefront.infrastructure.storage import StorageError

DB_FILENAME = "storefront.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(data_dir: Path) -> Engine:
    """Create ``data_dir`` and the slot table if needed. Idempotent."""
    data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine


class SqliteStorage:
    """Slot storage backed by the ``slots`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def open(cls, data_dir: Path) -> SqliteStorage:
        try:
            return cls(init_database(data_dir))
        except (OSError, SQLAlchemyError) as exc:
            raise StorageError(f"Cannot open database in {data_dir}: {exc}") from exc

    @property
    def engine(self) -> Engine:
        return self._engine

    def read(self, slot: str) -> str | None:
        try:
            with self._engine.connect() as conn:
                return conn.execute(
                    select(slots.c.payload).where(slots.c.name == slot)
                ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot read slot {slot!r}: {exc}") from exc

    def write(self, slot: str, payload: str) -> None:
        modified = datetime.now(UTC).isoformat()
        stmt = insert(slots).values(name=slot, payload=payload, modified=modified)
        stmt = stmt.on_conflict_do_update(
            index_elements=[slots.c.name],
            set_={"payload": payload, "modified": modified},
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot write slot {slot!r}: {exc}") from exc

    def close(self) -> None:
        self._engine.dispose()

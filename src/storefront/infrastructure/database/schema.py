"""SQLAlchemy Core table definitions for the storefront database."""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

slots = Table(
    "slots",
    metadata,
    Column("name", Text, primary_key=True),
    Column("payload", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

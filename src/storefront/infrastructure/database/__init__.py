"""SQLite slot storage built on SQLAlchemy Core."""

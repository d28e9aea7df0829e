"""Database layer: ORM models, session handle and migrations."""

from wheeltracker.server.database.session import Base, Database, get_db

__all__ = ["Base", "Database", "get_db"]

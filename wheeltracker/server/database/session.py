"""SQLAlchemy database handle and session management.

This module provides the Database class that owns the engine and
session factory, plus the FastAPI dependency that hands a session to
each request. A Database is constructed explicitly by the application
or CLI and disposed on shutdown; nothing connects at import time.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for ORM models
Base = declarative_base()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite connections."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine and session factory.

    Attributes:
        url: SQLAlchemy database URL
        echo: Log SQL statements
        engine: Engine, available after init()
    """

    def __init__(self, url: str, echo: bool = False):
        """Create an uninitialized database handle.

        Args:
            url: SQLAlchemy database URL (sqlite:///path or sqlite://)
            echo: Log SQL queries
        """
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_memory(self) -> bool:
        return self.url in ("sqlite://", "sqlite:///:memory:")

    def init(self, migrate: bool = True) -> "Database":
        """Create the engine and bring the schema up to date.

        Args:
            migrate: Apply pending migrations after connecting

        Returns:
            This database handle
        """
        if self.engine is not None:
            return self

        if self.is_memory:
            # One shared connection keeps the in-memory database alive
            self.engine = create_engine(
                self.url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=self.echo,
            )
        else:
            db_dir = Path(self.url.replace("sqlite:///", "", 1)).parent
            if not db_dir.exists():
                db_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created database directory: {db_dir}")

            self.engine = create_engine(
                self.url,
                connect_args={"check_same_thread": False},  # Needed for SQLite
                pool_pre_ping=True,
                echo=self.echo,
            )

        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        logger.info(f"Database engine initialized: {self.url}")

        if migrate:
            from wheeltracker.server.database.migrate import upgrade_database

            upgrade_database(self.engine)

        return self

    def session(self) -> Session:
        """Open a new session.

        Raises:
            RuntimeError: If init() has not been called
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not initialized; call init() first")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager yielding a session that is always closed."""
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            True if connection is successful, False otherwise
        """
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def dispose(self) -> None:
        """Release all pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._session_factory = None


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions.

    Provides a session from the application's Database that is closed
    after the request completes.

    Yields:
        SQLAlchemy database session

    Example:
        >>> @app.get("/items/")
        >>> def read_items(db: Session = Depends(get_db)):
        >>>     return db.query(Item).all()
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()

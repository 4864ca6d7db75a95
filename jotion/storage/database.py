"""Database connection and configuration management."""

import logging
from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jotion.config import get_settings
from jotion.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Database connection manager with connection pooling and transaction handling."""

    def __init__(self, database_url: str | None = None, pool_size: int | None = None, max_overflow: int | None = None):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL. If None, reads from settings.
                         Supports PostgreSQL and SQLite.
            pool_size: Number of connections to maintain in the pool. If None, uses settings.
            max_overflow: Maximum number of connections to allow beyond pool_size. If None, uses settings.
        """
        settings = get_settings()

        if database_url is None:
            database_url = settings.get_database_url()

        if pool_size is None:
            pool_size = settings.db_pool_size

        if max_overflow is None:
            max_overflow = settings.db_max_overflow

        engine_args: dict[str, Any] = {
            "pool_pre_ping": True,  # Verify connections before using
            "echo": settings.sql_echo,
        }
        if database_url.startswith("sqlite"):
            engine_args["connect_args"] = {"check_same_thread": False}

        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            engine_args["poolclass"] = StaticPool
        else:
            engine_args.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=settings.db_pool_timeout,
            )

        self.engine = create_engine(database_url, **engine_args)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        logger.debug("Database engine created for %s", self.engine.url.render_as_string(hide_password=True))

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with automatic transaction handling.

        Usage:
            with db.session() as session:
                # Use session here
                session.commit()
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()


# Global database instance
_db: Database | None = None


def get_db(database_url: str | None = None) -> Database:
    """
    Get or create the global database instance.

    Args:
        database_url: Database connection URL. Only used on first call.

    Returns:
        Database instance
    """
    global _db
    if _db is None:
        _db = Database(database_url)
    return _db


def set_db(database: Database) -> None:
    """Install a database instance as the global one (used by tests and servers)."""
    global _db
    _db = database


def reset_db() -> None:
    """Reset the global database instance (useful for testing)."""
    global _db
    _db = None

"""SQLite database operations.

Handles database connection, session management, and blob reads/writes.
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .base import StoreAdapter, StoreError
from .models import Base, Blob


class Database(StoreAdapter):
    """Database connection and blob store."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     BOOKSHELF_DB_PATH env var or default location.
        """
        if db_path is None:
            db_path = os.environ.get(
                "BOOKSHELF_DB_PATH",
                str(Path.home() / ".bookshelf" / "bookshelf.db"),
            )

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Blob Operations
    # ========================================================================

    def get(self, key: str) -> Optional[str]:
        """Get the blob stored under a key.

        Args:
            key: Blob key

        Returns:
            Stored value or None if the key was never written
        """
        try:
            with self.get_session() as session:
                blob = session.get(Blob, key)
                return blob.value if blob else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read '{key}': {e}") from e

    def set(self, key: str, value: str) -> None:
        """Store a blob under a key, replacing any previous value.

        Args:
            key: Blob key
            value: Value to store
        """
        try:
            with self.get_session() as session:
                blob = session.get(Blob, key)
                if blob is None:
                    session.add(Blob(key=key, value=value))
                else:
                    blob.value = value
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to write '{key}': {e}") from e

    def delete(self, key: str) -> bool:
        """Delete a blob.

        Args:
            key: Blob key

        Returns:
            True if deleted, False if not found
        """
        try:
            with self.get_session() as session:
                blob = session.get(Blob, key)
                if not blob:
                    return False
                session.delete(blob)
                return True
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete '{key}': {e}") from e

    def keys(self) -> list[str]:
        """List all stored keys."""
        with self.get_session() as session:
            return [row[0] for row in session.query(Blob.key).order_by(Blob.key).all()]


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None

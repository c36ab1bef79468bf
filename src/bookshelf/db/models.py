"""SQLAlchemy ORM models for the local SQLite store.

Tables:
- blobs: Serialized collections keyed by name
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class Blob(Base):
    """A stored blob, one row per key."""

    __tablename__ = "blobs"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self) -> str:
        return f"<Blob(key='{self.key}', size={len(self.value)})>"

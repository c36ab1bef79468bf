"""Database module for local SQLite storage."""

from .base import StoreAdapter, StoreError
from .models import Blob
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Blob",
    "Database",
    "StoreAdapter",
    "StoreError",
    "get_db",
    "reset_db",
]

"""Persistent store adapter interface.

The collection engine only ever reads and writes opaque string blobs by
key through this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StoreError(Exception):
    """Raised when the store cannot read or write a blob."""

    pass


class StoreAdapter(ABC):
    """Key/blob storage used to persist the collections."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if never written."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a blob under key, replacing any previous value.

        Raises:
            StoreError: If the write did not succeed
        """

"""Collection state engine: library, wishlist and search results."""

from .engine import LIBRARY_KEY, WISHLIST_KEY, CollectionEngine, OperationResult
from .errors import CollectionError, NoSelection, PersistFailed, SearchFailed
from .state import CollectionState
from .views import BookCard, DetailRecord

__all__ = [
    "LIBRARY_KEY",
    "WISHLIST_KEY",
    "CollectionEngine",
    "OperationResult",
    "CollectionError",
    "NoSelection",
    "PersistFailed",
    "SearchFailed",
    "CollectionState",
    "BookCard",
    "DetailRecord",
]

"""API module for external catalog search.

Provides clients for book metadata lookup.
"""

from .base import MAX_RESULTS, SearchClient, SearchClientError
from .googlebooks import (
    GoogleBooksClient,
    GoogleBooksError,
    GoogleBooksRateLimitError,
)

__all__ = [
    "MAX_RESULTS",
    "SearchClient",
    "SearchClientError",
    "GoogleBooksClient",
    "GoogleBooksError",
    "GoogleBooksRateLimitError",
]

"""Errors raised or reported by the collection engine."""


class CollectionError(Exception):
    """Base exception for collection engine errors."""

    pass


class SearchFailed(CollectionError):
    """Raised when the search provider call fails.

    The previous search results are left in place.
    """

    pass


class NoSelection(CollectionError):
    """Raised when an operation needs a selected item and there is none."""

    pass


class PersistFailed(CollectionError):
    """A write to the store failed after the in-memory change was applied.

    Not raised by the engine; attached to the operation result as a warning.
    """

    pass

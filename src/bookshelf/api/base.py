"""Search client interface.

The collection engine consumes any client that maps a query to a list of
normalized items.
"""

from abc import ABC, abstractmethod

from ..db.schemas import Item, SortOrder

MAX_RESULTS = 20


class SearchClientError(Exception):
    """Base exception for search provider errors."""

    pass


class SearchClient(ABC):
    """A remote catalog that can be searched by free text."""

    @abstractmethod
    def search(
        self,
        query: str,
        category: str = "all",
        sort_by: SortOrder = SortOrder.RELEVANCE,
        max_results: int = MAX_RESULTS,
    ) -> list[Item]:
        """Search the catalog.

        Args:
            query: Free-text query
            category: Subject to restrict to, or "all"
            sort_by: Result ordering
            max_results: Maximum results to return

        Returns:
            Normalized items in provider order

        Raises:
            SearchClientError: If the provider call fails
        """

"""Google Books API client for catalog search.

Google Books (googleapis.com/books) provides free volume metadata:
- Free-text search with subject filters
- Relevance or newest-first ordering
- Cover thumbnails and preview links

An API key is optional and only raises the rate limit.
"""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from ..db.schemas import Item, SortOrder
from .base import MAX_RESULTS, SearchClient, SearchClientError

logger = logging.getLogger(__name__)


class GoogleBooksError(SearchClientError):
    """Base exception for Google Books API errors."""

    pass


class GoogleBooksRateLimitError(GoogleBooksError):
    """Raised when rate limited by Google Books."""

    pass


class GoogleBooksClient(SearchClient):
    """Client for the Google Books volumes API."""

    BASE_URL = "https://www.googleapis.com/books/v1/volumes"
    API_LIMIT = 40

    def __init__(self, api_key: Optional[str] = None, timeout: int = 10):
        """Initialize client.

        Args:
            api_key: Optional API key
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": "Bookshelf/0.1.0"})

    def _get(self, url: str, params: Optional[dict] = None) -> dict:
        """Make GET request with error handling."""
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            raise GoogleBooksError("Request timed out")
        except requests.exceptions.HTTPError as e:
            if e.response.status_code == 429:
                raise GoogleBooksRateLimitError("Rate limited by Google Books")
            raise GoogleBooksError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise GoogleBooksError(f"Request failed: {e}")
        except ValueError as e:
            raise GoogleBooksError(f"Invalid JSON response: {e}")

    @staticmethod
    def build_query(query: str, category: str = "all") -> str:
        """Build the q parameter, adding a subject filter if needed."""
        query = query.strip()
        if category and category != "all":
            return f"{query} subject:{category}"
        return query

    def search(
        self,
        query: str,
        category: str = "all",
        sort_by: SortOrder = SortOrder.RELEVANCE,
        max_results: int = MAX_RESULTS,
    ) -> list[Item]:
        """Search for volumes.

        Args:
            query: Search query
            category: Subject filter, "all" for none
            sort_by: Ordering (relevance or newest)
            max_results: Maximum results to return

        Returns:
            List of Item objects
        """
        params: dict[str, Any] = {
            "q": self.build_query(query, category),
            "orderBy": SortOrder(sort_by).value,
            "maxResults": min(max_results, self.API_LIMIT),
        }
        if self.api_key:
            params["key"] = self.api_key

        logger.info("Searching Google Books: %s", params["q"])
        data = self._get(self.BASE_URL, params)
        if not isinstance(data, dict):
            raise GoogleBooksError("Unexpected response shape")

        volumes = data.get("items") or []
        if not isinstance(volumes, list):
            raise GoogleBooksError("Unexpected response shape")

        results = []
        for volume in volumes:
            item = self._volume_to_item(volume)
            if item:
                results.append(item)

        logger.debug("Google Books returned %d items", len(results))
        return results

    def _volume_to_item(self, volume: dict) -> Optional[Item]:
        """Convert a volume resource to an Item.

        Raises:
            GoogleBooksError: If the volume is not shaped like a volume
                resource or its fields fail validation
        """
        if not isinstance(volume, dict):
            raise GoogleBooksError("Unexpected response shape")

        volume_id = volume.get("id")
        if not volume_id:
            return None

        info = volume.get("volumeInfo") or {}
        if not isinstance(info, dict):
            raise GoogleBooksError("Unexpected response shape")

        image_links = info.get("imageLinks") or {}
        if not isinstance(image_links, dict):
            raise GoogleBooksError("Unexpected response shape")

        # Placeholders for missing fields are filled in by Item
        try:
            return Item(
                id=volume_id,
                title=info.get("title"),
                authors=info.get("authors"),
                description=info.get("description"),
                categories=info.get("categories"),
                page_count=info.get("pageCount"),
                published_date=info.get("publishedDate"),
                thumbnail_url=image_links.get("thumbnail"),
                preview_url=info.get("previewLink"),
            )
        except ValidationError as e:
            logger.warning("Rejected volume %r: %s", volume_id, e)
            raise GoogleBooksError(f"Invalid volume {volume_id!r}: {e.error_count()} field errors")

    def close(self) -> None:
        """Close the session."""
        self._session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

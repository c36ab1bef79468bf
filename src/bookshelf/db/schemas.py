"""Pydantic schemas for data validation.

These schemas define the normalized item record returned by the search
provider and the entries stored in the library and wishlist.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_AUTHOR = "Unknown Author"
UNCATEGORIZED = "Uncategorized"
NO_DESCRIPTION = "No description available"
NO_COVER_URL = "https://via.placeholder.com/128x192?text=No+Cover"


class ReadingStatus(str, Enum):
    """Status of a library entry."""

    READING = "reading"
    COMPLETED = "completed"


class SaveTarget(str, Enum):
    """Where a selected item can be saved to."""

    READING = "reading"
    COMPLETED = "completed"
    WISHLIST = "wishlist"


class CollectionName(str, Enum):
    """Durable collections an item can be removed from."""

    LIBRARY = "library"
    WISHLIST = "wishlist"


class LibraryFilter(str, Enum):
    """Filter applied to the library view."""

    ALL = "all"
    READING = "reading"
    COMPLETED = "completed"


class SortOrder(str, Enum):
    """Result ordering supported by the search provider."""

    RELEVANCE = "relevance"
    NEWEST = "newest"


class ViewName(str, Enum):
    """Views a presentation layer re-derives after an operation."""

    LIBRARY = "library"
    WISHLIST = "wishlist"
    SEARCH = "search"
    DETAIL = "detail"
    STATS = "stats"


# ============================================================================
# Items
# ============================================================================


class Item(BaseModel):
    """A normalized catalog entry from the search provider."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(..., min_length=1, description="Provider-assigned id")
    title: str = ""
    authors: list[str] = Field(default_factory=lambda: [UNKNOWN_AUTHOR])
    description: str = NO_DESCRIPTION
    categories: list[str] = Field(default_factory=lambda: [UNCATEGORIZED])
    page_count: Optional[int] = Field(None, ge=0)
    published_date: Optional[str] = None
    thumbnail_url: str = NO_COVER_URL
    preview_url: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v) -> str:
        """Providers occasionally omit the title."""
        return "" if v is None else v

    @field_validator("authors", mode="before")
    @classmethod
    def default_authors(cls, v) -> list[str]:
        """Substitute a placeholder author when none are given."""
        if not v:
            return [UNKNOWN_AUTHOR]
        return v

    @field_validator("categories", mode="before")
    @classmethod
    def default_categories(cls, v) -> list[str]:
        """Substitute a placeholder category when none are given."""
        if not v:
            return [UNCATEGORIZED]
        return v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v) -> str:
        """Substitute a placeholder description when absent."""
        return v or NO_DESCRIPTION

    @field_validator("thumbnail_url", mode="before")
    @classmethod
    def default_thumbnail(cls, v) -> str:
        """Fall back to a placeholder cover."""
        return v or NO_COVER_URL

    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors)

    def item_fields(self) -> dict:
        """Return only the Item fields, dropping any entry extras."""
        return {name: getattr(self, name) for name in Item.model_fields}


class LibraryEntry(Item):
    """An item in the library with reading status and progress."""

    status: ReadingStatus = ReadingStatus.READING
    progress: int = Field(0, ge=0, le=100, description="Percent read")

    @classmethod
    def from_item(
        cls, item: Item, status: ReadingStatus, progress: int = 0
    ) -> "LibraryEntry":
        """Build a library entry from a fetched item."""
        return cls(**item.item_fields(), status=status, progress=progress)


class WishlistEntry(Item):
    """An item on the wishlist."""

    @classmethod
    def from_item(cls, item: Item) -> "WishlistEntry":
        """Build a wishlist entry from a fetched item."""
        return cls(**item.item_fields())


class CollectionStats(BaseModel):
    """Counts shown in the stats summary."""

    total_library: int = 0
    currently_reading: int = 0
    wishlist_count: int = 0


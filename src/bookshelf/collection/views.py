"""View derivation over the collection state.

Pure functions that turn the current state into the records a renderer
needs. Nothing here is cached; every call reads the state fresh.
"""

from dataclasses import dataclass
from typing import Optional

from ..db.schemas import (
    CollectionName,
    Item,
    LibraryEntry,
    LibraryFilter,
    ReadingStatus,
)
from .state import CollectionState


@dataclass
class BookCard:
    """A single card in a list of books."""

    id: str
    title: str
    authors: str
    thumbnail_url: str
    badge: Optional[str] = None  # Library cards only
    progress: Optional[int] = None  # Only while reading
    removable_from: Optional[CollectionName] = None


@dataclass
class DetailRecord:
    """Fields shown in the detail display for the selected item."""

    id: str
    title: str
    authors: str
    category: str
    pages: str
    description: str
    thumbnail_url: str
    published_date: Optional[str] = None
    preview_url: Optional[str] = None


def _card(item: Item, removable_from: Optional[CollectionName] = None) -> BookCard:
    return BookCard(
        id=item.id,
        title=item.title,
        authors=item.authors_str,
        thumbnail_url=item.thumbnail_url,
        removable_from=removable_from,
    )


def _library_card(entry: LibraryEntry) -> BookCard:
    card = _card(entry, CollectionName.LIBRARY)
    if entry.status == ReadingStatus.COMPLETED:
        card.badge = "Completed"
    else:
        card.badge = "Reading"
        card.progress = entry.progress
    return card


def library_view(
    state: CollectionState, filter: LibraryFilter = LibraryFilter.ALL
) -> list[BookCard]:
    """Library cards in insertion order, optionally filtered by status."""
    entries = state.library.values()
    if filter != LibraryFilter.ALL:
        entries = [e for e in entries if e.status.value == filter.value]
    return [_library_card(e) for e in entries]


def wishlist_view(state: CollectionState) -> list[BookCard]:
    """Wishlist cards in insertion order."""
    return [_card(e, CollectionName.WISHLIST) for e in state.wishlist.values()]


def search_view(state: CollectionState) -> list[BookCard]:
    """Search result cards in provider order."""
    return [_card(item) for item in state.search_results]


def detail_view(state: CollectionState) -> Optional[DetailRecord]:
    """Detail record for the selected item, or None if nothing is selected."""
    item = state.selected
    if item is None:
        return None

    # Zero pages means the provider has no count
    pages = item.page_count or "?"
    return DetailRecord(
        id=item.id,
        title=item.title,
        authors=item.authors_str,
        category=item.categories[0],
        pages=f"{pages} pages",
        description=item.description,
        thumbnail_url=item.thumbnail_url,
        published_date=item.published_date,
        preview_url=item.preview_url,
    )

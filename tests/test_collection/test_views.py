"""Tests for view derivation."""

import pytest

from bookshelf.collection import views
from bookshelf.collection.state import CollectionState
from bookshelf.db.schemas import (
    CollectionName,
    Item,
    LibraryEntry,
    LibraryFilter,
    ReadingStatus,
    WishlistEntry,
)


@pytest.fixture
def populated(sample_items: list[Item]) -> CollectionState:
    """State with two reading entries, one completed and one wishlisted."""
    first, second, third = sample_items
    extra = Item(id="jkl000", title="Heretics of Dune")
    state = CollectionState()
    for entry in (
        LibraryEntry.from_item(first, ReadingStatus.READING, 25),
        LibraryEntry.from_item(second, ReadingStatus.COMPLETED, 60),
        LibraryEntry.from_item(extra, ReadingStatus.READING),
    ):
        state.library[entry.id] = entry
    state.wishlist[third.id] = WishlistEntry.from_item(third)
    state.search_results = list(reversed(sample_items))
    return state


class TestLibraryView:
    """Tests for library_view."""

    def test_all_in_insertion_order(self, populated):
        """Test the unfiltered view keeps insertion order."""
        cards = views.library_view(populated)
        assert [c.id for c in cards] == ["abc123", "def456", "jkl000"]

    def test_filter_reading(self, populated):
        """Test filtering to reading entries."""
        cards = views.library_view(populated, LibraryFilter.READING)

        assert [c.id for c in cards] == ["abc123", "jkl000"]
        assert all(c.badge == "Reading" for c in cards)

    def test_filter_completed(self, populated):
        """Test filtering to completed entries."""
        cards = views.library_view(populated, LibraryFilter.COMPLETED)

        assert [c.id for c in cards] == ["def456"]
        assert cards[0].badge == "Completed"

    def test_progress_only_shown_while_reading(self, populated):
        """Test that completed cards hide stored progress."""
        cards = {c.id: c for c in views.library_view(populated)}

        assert cards["abc123"].progress == 25
        assert cards["jkl000"].progress == 0
        assert cards["def456"].progress is None

    def test_cards_removable_from_library(self, populated):
        """Test library cards point back at the library."""
        cards = views.library_view(populated)
        assert {c.removable_from for c in cards} == {CollectionName.LIBRARY}

    def test_empty_library(self):
        """Test an empty library gives no cards."""
        assert views.library_view(CollectionState(), LibraryFilter.READING) == []


class TestOtherViews:
    """Tests for wishlist, search and detail views."""

    def test_wishlist_view(self, populated):
        """Test wishlist cards have no status."""
        cards = views.wishlist_view(populated)

        assert [c.id for c in cards] == ["ghi789"]
        assert cards[0].badge is None
        assert cards[0].progress is None
        assert cards[0].removable_from == CollectionName.WISHLIST

    def test_search_view_keeps_provider_order(self, populated):
        """Test search cards are in provider order and not removable."""
        cards = views.search_view(populated)

        assert [c.id for c in cards] == ["ghi789", "def456", "abc123"]
        assert all(c.removable_from is None for c in cards)

    def test_card_joins_authors(self):
        """Test that card authors are comma-joined."""
        state = CollectionState(search_results=[Item(id="x", authors=["A", "B"])])
        assert views.search_view(state)[0].authors == "A, B"

    def test_detail_view_none_without_selection(self):
        """Test that nothing selected gives no detail record."""
        assert views.detail_view(CollectionState()) is None

    def test_detail_view_fields(self, dune):
        """Test the detail record for a fully populated item."""
        record = views.detail_view(CollectionState(selected=dune))

        assert record.id == "abc123"
        assert record.title == "Dune"
        assert record.authors == "Frank Herbert"
        assert record.category == "Fiction"
        assert record.pages == "688 pages"
        assert record.description == "Desert planet politics."
        assert record.preview_url == "https://books.example/dune"

    def test_detail_view_unknown_pages(self):
        """Test that a missing page count shows a question mark."""
        record = views.detail_view(CollectionState(selected=Item(id="x")))

        assert record.pages == "? pages"
        assert record.category == "Uncategorized"

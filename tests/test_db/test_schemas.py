"""Tests for Pydantic schemas."""

import pytest
from pydantic import ValidationError

from bookshelf.db.schemas import (
    NO_COVER_URL,
    NO_DESCRIPTION,
    UNCATEGORIZED,
    UNKNOWN_AUTHOR,
    Item,
    LibraryEntry,
    ReadingStatus,
    WishlistEntry,
)


class TestItem:
    """Tests for Item schema."""

    def test_minimal_item_gets_placeholders(self):
        """Test that missing provider fields are filled with placeholders."""
        item = Item(id="x1")

        assert item.title == ""
        assert item.authors == [UNKNOWN_AUTHOR]
        assert item.categories == [UNCATEGORIZED]
        assert item.description == NO_DESCRIPTION
        assert item.thumbnail_url == NO_COVER_URL
        assert item.page_count is None
        assert item.preview_url is None

    def test_none_and_empty_values_get_placeholders(self):
        """Test that explicit None or empty lists are treated as absent."""
        item = Item(
            id="x1",
            title=None,
            authors=[],
            categories=None,
            description=None,
            thumbnail_url=None,
        )

        assert item.title == ""
        assert item.authors == [UNKNOWN_AUTHOR]
        assert item.categories == [UNCATEGORIZED]
        assert item.description == NO_DESCRIPTION
        assert item.thumbnail_url == NO_COVER_URL

    def test_empty_id_rejected(self):
        """Test that an empty id is rejected."""
        with pytest.raises(ValidationError):
            Item(id="")

    def test_negative_page_count_rejected(self):
        """Test that page count must be non-negative."""
        with pytest.raises(ValidationError):
            Item(id="x1", page_count=-1)

    def test_item_is_frozen(self):
        """Test that fetched items cannot be modified."""
        item = Item(id="x1", title="Original")
        with pytest.raises(ValidationError):
            item.title = "Changed"

    def test_camel_case_aliases(self):
        """Test that items can be built from the stored camelCase form."""
        item = Item.model_validate(
            {"id": "x1", "pageCount": 120, "thumbnailUrl": "https://c/x.jpg"}
        )

        assert item.page_count == 120
        assert item.thumbnail_url == "https://c/x.jpg"

    def test_authors_str(self):
        """Test joining authors for display."""
        item = Item(id="x1", authors=["Ann", "Bob"])
        assert item.authors_str == "Ann, Bob"


class TestLibraryEntry:
    """Tests for LibraryEntry schema."""

    def test_from_item_copies_fields(self, dune):
        """Test building a library entry from an item."""
        entry = LibraryEntry.from_item(dune, ReadingStatus.READING)

        assert entry.id == dune.id
        assert entry.title == "Dune"
        assert entry.page_count == 688
        assert entry.status == ReadingStatus.READING
        assert entry.progress == 0

    def test_progress_bounds(self, dune):
        """Test that progress must be 0-100."""
        LibraryEntry.from_item(dune, ReadingStatus.READING, 100)
        with pytest.raises(ValidationError):
            LibraryEntry.from_item(dune, ReadingStatus.READING, 101)
        with pytest.raises(ValidationError):
            LibraryEntry.from_item(dune, ReadingStatus.READING, -1)

    def test_from_library_entry_drops_old_status(self, dune):
        """Test that re-wrapping an entry keeps only item fields."""
        completed = LibraryEntry.from_item(dune, ReadingStatus.COMPLETED, 40)
        entry = LibraryEntry.from_item(completed, ReadingStatus.READING)

        assert entry.status == ReadingStatus.READING
        assert entry.progress == 0


class TestWishlistEntry:
    """Tests for WishlistEntry schema."""

    def test_from_item(self, dune):
        """Test building a wishlist entry from an item."""
        entry = WishlistEntry.from_item(dune)

        assert entry.id == "abc123"
        assert entry.authors == ["Frank Herbert"]
        assert not hasattr(entry, "status")

    def test_ignores_extra_stored_fields(self):
        """Test that stored status/progress keys are ignored for wishlist entries."""
        entry = WishlistEntry.model_validate(
            {"id": "x1", "title": "T", "status": "wishlist", "progress": 0}
        )
        assert entry.title == "T"

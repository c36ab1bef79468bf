"""Collection state engine.

Owns the library, wishlist, search results and current selection. Every
mutation of the library or wishlist is persisted through the store before
the operation returns, and each operation reports which views need to be
re-derived.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..api.base import MAX_RESULTS, SearchClient, SearchClientError
from ..db.base import StoreAdapter, StoreError
from ..db.schemas import (
    CollectionName,
    CollectionStats,
    Item,
    LibraryEntry,
    LibraryFilter,
    ReadingStatus,
    SaveTarget,
    SortOrder,
    ViewName,
    WishlistEntry,
)
from . import codec, views
from .errors import NoSelection, PersistFailed, SearchFailed
from .state import CollectionState

logger = logging.getLogger(__name__)

LIBRARY_KEY = "bookshelf_library"
WISHLIST_KEY = "bookshelf_wishlist"


@dataclass
class OperationResult:
    """Outcome of an engine operation."""

    affected: frozenset[ViewName] = frozenset()
    changed: bool = False
    persist_error: Optional[PersistFailed] = None

    @property
    def persisted(self) -> bool:
        """Whether the post-mutation write succeeded (or was not needed)."""
        return self.persist_error is None


class CollectionEngine:
    """Operations over a user's library, wishlist and search results.

    Note: an id may be present in both the library and the wishlist at the
    same time. Saving never checks the other collection.
    """

    def __init__(
        self,
        store: StoreAdapter,
        client: SearchClient,
        state: Optional[CollectionState] = None,
    ):
        """Initialize the engine.

        Args:
            store: Adapter used to persist the library and wishlist
            client: Catalog search client
            state: State to operate on. A fresh empty state if None.
        """
        self.store = store
        self.client = client
        self.state = state if state is not None else CollectionState()
        self._search_seq = 0

    # ========================================================================
    # Persistence
    # ========================================================================

    def restore(self) -> OperationResult:
        """Load the library and wishlist from the store.

        Missing or unreadable blobs leave the collection empty.

        Raises:
            StoreError: If the store itself cannot be read
        """
        self.state.library = codec.decode(self.store.get(LIBRARY_KEY), LibraryEntry)
        self.state.wishlist = codec.decode(self.store.get(WISHLIST_KEY), WishlistEntry)
        logger.debug(
            "Restored %d library and %d wishlist entries",
            len(self.state.library),
            len(self.state.wishlist),
        )
        return OperationResult(
            affected=frozenset({ViewName.LIBRARY, ViewName.WISHLIST, ViewName.STATS}),
            changed=True,
        )

    def _persist(self) -> Optional[PersistFailed]:
        """Write both durable collections, returning the first failure."""
        error = None
        for key, collection in (
            (LIBRARY_KEY, self.state.library),
            (WISHLIST_KEY, self.state.wishlist),
        ):
            try:
                self.store.set(key, codec.encode(collection))
            except StoreError as e:
                logger.warning("Could not persist %s: %s", key, e)
                if error is None:
                    error = PersistFailed(str(e))
        return error

    def _finish(self, affected: set[ViewName], changed: bool) -> OperationResult:
        return OperationResult(
            affected=frozenset(affected),
            changed=changed,
            persist_error=self._persist(),
        )

    # ========================================================================
    # Search and Selection
    # ========================================================================

    async def search(
        self,
        query: str,
        category: str = "all",
        sort: Union[SortOrder, str] = SortOrder.RELEVANCE,
    ) -> OperationResult:
        """Replace the search results with a fresh provider response.

        The provider call runs in a worker thread so other operations can
        proceed while it is pending. If a newer search was started before
        this one completed, this result is discarded, and so is its failure.

        Args:
            query: Free-text query, must not be blank
            category: Subject filter or "all"
            sort: Result ordering

        Returns:
            Result affecting the search view, or nothing if superseded

        Raises:
            SearchFailed: If the provider call fails and no newer search
                has started
        """
        if not query or not query.strip():
            raise ValueError("Search query must not be empty")

        sort = SortOrder(sort)
        self._search_seq += 1
        seq = self._search_seq

        try:
            results = await asyncio.to_thread(
                self.client.search,
                query,
                category=category,
                sort_by=sort,
                max_results=MAX_RESULTS,
            )
        except SearchClientError as e:
            if seq != self._search_seq:
                logger.debug("Ignoring failure of stale search %d: %s", seq, e)
                return OperationResult()
            logger.warning("Search for %r failed: %s", query, e)
            raise SearchFailed(f"Error searching books: {e}") from e

        if seq != self._search_seq:
            logger.debug("Discarding stale search %d (latest is %d)", seq, self._search_seq)
            return OperationResult()

        self.state.search_results = list(results)
        return OperationResult(affected=frozenset({ViewName.SEARCH}), changed=True)

    def find_item(self, item_id: str) -> Optional[Item]:
        """Find an item by id.

        Search results take precedence over the library, which takes
        precedence over the wishlist.
        """
        for item in self.state.search_results:
            if item.id == item_id:
                return item
        return self.state.library.get(item_id) or self.state.wishlist.get(item_id)

    def select_for_detail(self, item_id: str) -> OperationResult:
        """Select an item for the detail view. Does nothing if not found."""
        item = self.find_item(item_id)
        if item is None:
            logger.debug("Nothing to select for id %s", item_id)
            return OperationResult()

        self.state.selected = item
        return OperationResult(affected=frozenset({ViewName.DETAIL}), changed=True)

    # ========================================================================
    # Library and Wishlist Mutations
    # ========================================================================

    def save_selected(
        self, status: Union[SaveTarget, str], start_progress: int = 0
    ) -> OperationResult:
        """Save the selected item to the library or wishlist.

        An item already in the target collection is left as is.

        Args:
            status: reading, completed or wishlist
            start_progress: Initial progress for library entries

        Raises:
            NoSelection: If no item is selected
        """
        item = self.state.selected
        if item is None:
            raise NoSelection("No item selected")

        target = SaveTarget(status)
        if target == SaveTarget.WISHLIST:
            changed = item.id not in self.state.wishlist
            if changed:
                self.state.wishlist[item.id] = WishlistEntry.from_item(item)
            affected = {ViewName.WISHLIST, ViewName.STATS}
        else:
            changed = item.id not in self.state.library
            if changed:
                self.state.library[item.id] = LibraryEntry.from_item(
                    item, ReadingStatus(target.value), start_progress
                )
            affected = {ViewName.LIBRARY, ViewName.STATS}

        if not changed:
            logger.debug("%s already in %s", item.id, target.value)
        return self._finish(affected, changed)

    def remove_item(
        self, item_id: str, from_: Union[CollectionName, str]
    ) -> OperationResult:
        """Remove an item from the library or wishlist. Missing ids are ignored."""
        name = CollectionName(from_)
        if name == CollectionName.LIBRARY:
            changed = self.state.library.pop(item_id, None) is not None
            affected = {ViewName.LIBRARY, ViewName.STATS}
        else:
            changed = self.state.wishlist.pop(item_id, None) is not None
            affected = {ViewName.WISHLIST, ViewName.STATS}
        return self._finish(affected, changed)

    def update_progress(self, item_id: str, progress: int) -> OperationResult:
        """Set the reading progress of a library entry.

        Raises:
            KeyError: If the id is not in the library
            ValueError: If progress is outside 0-100
        """
        entry = self.state.library.get(item_id)
        if entry is None:
            raise KeyError(item_id)
        if not 0 <= progress <= 100:
            raise ValueError(f"Progress must be between 0 and 100, got {progress}")

        self.state.library[item_id] = entry.model_copy(update={"progress": progress})
        return self._finish({ViewName.LIBRARY}, entry.progress != progress)

    def set_status(
        self, item_id: str, status: Union[ReadingStatus, str]
    ) -> OperationResult:
        """Change a library entry between reading and completed.

        Progress is kept as is.

        Raises:
            KeyError: If the id is not in the library
        """
        entry = self.state.library.get(item_id)
        if entry is None:
            raise KeyError(item_id)

        status = ReadingStatus(status)
        self.state.library[item_id] = entry.model_copy(update={"status": status})
        return self._finish({ViewName.LIBRARY, ViewName.STATS}, entry.status != status)

    # ========================================================================
    # Queries
    # ========================================================================

    def stats(self) -> CollectionStats:
        """Summary counts over the library and wishlist."""
        reading = sum(
            1 for e in self.state.library.values() if e.status == ReadingStatus.READING
        )
        return CollectionStats(
            total_library=len(self.state.library),
            currently_reading=reading,
            wishlist_count=len(self.state.wishlist),
        )

    def library_view(
        self, filter: Union[LibraryFilter, str] = LibraryFilter.ALL
    ) -> list[views.BookCard]:
        """Library cards, optionally filtered by status."""
        return views.library_view(self.state, LibraryFilter(filter))

    def wishlist_view(self) -> list[views.BookCard]:
        """Wishlist cards."""
        return views.wishlist_view(self.state)

    def search_view(self) -> list[views.BookCard]:
        """Search result cards."""
        return views.search_view(self.state)

    def detail_view(self) -> Optional[views.DetailRecord]:
        """Detail record for the selected item."""
        return views.detail_view(self.state)

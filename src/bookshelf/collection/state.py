"""In-memory state owned by the collection engine."""

from dataclasses import dataclass, field
from typing import Optional

from ..db.schemas import Item, LibraryEntry, WishlistEntry


@dataclass
class CollectionState:
    """Root aggregate for the user's collections.

    ``library`` and ``wishlist`` are durable and keyed by item id in
    insertion order. ``search_results`` and ``selected`` only live for the
    current process and are never written to the store.
    """

    library: dict[str, LibraryEntry] = field(default_factory=dict)
    wishlist: dict[str, WishlistEntry] = field(default_factory=dict)
    search_results: list[Item] = field(default_factory=list)
    selected: Optional[Item] = None

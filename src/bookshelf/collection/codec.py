"""Serialization of the durable collections.

A collection is stored as a JSON array of camelCase objects, one per entry,
in insertion order. Decoding never fails: a missing or unreadable blob
yields an empty collection so the engine can keep running.
"""

import logging
from typing import Mapping, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..db.schemas import Item

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=Item)

_adapters: dict[type, TypeAdapter] = {}


def _adapter_for(entry_type: type[EntryT]) -> TypeAdapter:
    adapter = _adapters.get(entry_type)
    if adapter is None:
        adapter = TypeAdapter(list[entry_type])
        _adapters[entry_type] = adapter
    return adapter


def encode(collection: Mapping[str, EntryT]) -> str:
    """Encode a collection to its stored JSON form.

    Args:
        collection: Entries keyed by item id

    Returns:
        JSON array text
    """
    entries = list(collection.values())
    if not entries:
        return "[]"
    adapter = _adapter_for(type(entries[0]))
    return adapter.dump_json(entries, by_alias=True).decode("utf-8")


def decode(blob: Optional[str], entry_type: type[EntryT]) -> dict[str, EntryT]:
    """Decode a stored blob back into a collection.

    Args:
        blob: Stored JSON text, or None if the key was never written
        entry_type: Entry model to validate each element against

    Returns:
        Entries keyed by item id in stored order. Empty if the blob is
        missing or corrupt.
    """
    if blob is None or not blob.strip():
        return {}

    try:
        entries = _adapter_for(entry_type).validate_json(blob)
    except ValidationError as e:
        logger.warning(
            "Discarding unreadable %s blob (%d errors)",
            entry_type.__name__,
            e.error_count(),
        )
        return {}

    collection: dict[str, EntryT] = {}
    for entry in entries:
        if entry.id in collection:
            logger.debug("Skipping duplicate %s id %s", entry_type.__name__, entry.id)
            continue
        collection[entry.id] = entry
    return collection

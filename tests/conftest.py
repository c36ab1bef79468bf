"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the bookshelf application,
including in-memory stores, sample items, and a scripted search client.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator, Optional

import pytest

from bookshelf.api.base import MAX_RESULTS, SearchClient, SearchClientError
from bookshelf.collection import CollectionEngine, CollectionState
from bookshelf.config import reset_config
from bookshelf.db.base import StoreAdapter, StoreError
from bookshelf.db.schemas import Item, SortOrder
from bookshelf.db.sqlite import Database, reset_db


# ============================================================================
# Search Client Doubles
# ============================================================================


class FakeSearchClient(SearchClient):
    """Search client returning canned results and recording calls."""

    def __init__(self, results: Optional[list[Item]] = None):
        self.results = results or []
        self.error: Optional[SearchClientError] = None
        self.calls: list[dict] = []

    def search(
        self,
        query: str,
        category: str = "all",
        sort_by: SortOrder = SortOrder.RELEVANCE,
        max_results: int = MAX_RESULTS,
    ) -> list[Item]:
        self.calls.append(
            {
                "query": query,
                "category": category,
                "sort_by": sort_by,
                "max_results": max_results,
            }
        )
        if self.error is not None:
            raise self.error
        return list(self.results)


class FailingStore(StoreAdapter):
    """Store whose reads succeed (empty) and whose writes always fail."""

    def __init__(self):
        self.attempts: list[str] = []

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str) -> None:
        self.attempts.append(key)
        raise StoreError("disk full")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture(scope="function")
def file_db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a file-backed test database instance."""
    reset_db()
    reset_config()
    os.environ["BOOKSHELF_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    # Cleanup
    database.engine.dispose()
    reset_db()
    reset_config()
    if "BOOKSHELF_DB_PATH" in os.environ:
        del os.environ["BOOKSHELF_DB_PATH"]


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def dune() -> Item:
    """A fully populated item."""
    return Item(
        id="abc123",
        title="Dune",
        authors=["Frank Herbert"],
        description="Desert planet politics.",
        categories=["Fiction"],
        page_count=688,
        published_date="1965",
        thumbnail_url="https://books.example/dune.jpg",
        preview_url="https://books.example/dune",
    )


@pytest.fixture
def sample_items(dune: Item) -> list[Item]:
    """A small search response in provider order."""
    return [
        dune,
        Item(id="def456", title="Dune Messiah", authors=["Frank Herbert"], page_count=256),
        Item(id="ghi789", title="Children of Dune"),
    ]


@pytest.fixture
def client(sample_items: list[Item]) -> FakeSearchClient:
    """A search client that returns the sample items."""
    return FakeSearchClient(sample_items)


@pytest.fixture
def failing_store() -> FailingStore:
    """A store that rejects every write."""
    return FailingStore()


@pytest.fixture
def state() -> CollectionState:
    """An empty collection state owned by the test."""
    return CollectionState()


@pytest.fixture
def engine(db: Database, client: FakeSearchClient, state: CollectionState) -> CollectionEngine:
    """An engine over an in-memory store, already restored."""
    engine = CollectionEngine(db, client, state)
    engine.restore()
    return engine


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from bookshelf.cli import app
    return app

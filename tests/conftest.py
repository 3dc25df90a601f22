"""Pytest configuration and fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from multisearch.config import Settings
from multisearch.documents.store import SQLiteDocumentStore
from multisearch.sync.engine import SyncContext, SyncEngine


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        enabled=True,
        default_language="en",
        database_path=":memory:",
        debug=True,
    )


@pytest.fixture
def store() -> Iterator[SQLiteDocumentStore]:
    """Create an initialized in-memory document store."""
    document_store = SQLiteDocumentStore(":memory:")
    document_store.initialize()
    yield document_store
    document_store.close()


@pytest.fixture
def engine(store: SQLiteDocumentStore, settings: Settings) -> SyncEngine:
    """Create a sync engine over the test store."""
    return SyncEngine(store, SyncContext.from_settings(settings))

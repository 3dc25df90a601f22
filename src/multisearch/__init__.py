"""Keeps a multi-language search document table in sync with host records."""

from multisearch.app import create_engine, create_event_bus
from multisearch.config import Settings
from multisearch.documents import IndexDocument, SQLiteDocumentStore
from multisearch.errors import ConfigurationError, MultisearchError, PersistenceError
from multisearch.logging import configure_logging
from multisearch.sync import (
    Inline,
    Localized,
    Multisearchable,
    MultisearchOptions,
    Named,
    Plain,
    SyncContext,
    SyncEngine,
    localized_attribute,
    predicate,
)

__all__ = [
    "ConfigurationError",
    "IndexDocument",
    "Inline",
    "Localized",
    "MultisearchError",
    "Multisearchable",
    "MultisearchOptions",
    "Named",
    "PersistenceError",
    "Plain",
    "SQLiteDocumentStore",
    "Settings",
    "SyncContext",
    "SyncEngine",
    "configure_logging",
    "create_engine",
    "create_event_bus",
    "localized_attribute",
    "predicate",
]

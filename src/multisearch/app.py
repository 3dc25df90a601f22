"""Factories wiring settings into a store, engine and event bus."""

import structlog

from multisearch.config import Settings
from multisearch.documents.store import SQLiteDocumentStore
from multisearch.events.bus import EventBus
from multisearch.sync.engine import SyncContext, SyncEngine

logger = structlog.get_logger()


def create_engine(settings: Settings | None = None) -> SyncEngine:
    """Create a sync engine backed by an initialized SQLite store.

    Args:
        settings: Configuration, loaded from the environment if None.

    Returns:
        Engine whose default context reflects the settings.
    """
    settings = settings or Settings()
    store = SQLiteDocumentStore(settings.database_path)
    store.initialize()

    engine = SyncEngine(store, SyncContext.from_settings(settings))
    logger.info(
        "sync_engine_created",
        enabled=settings.enabled,
        default_language=settings.default_language,
    )
    return engine


def create_event_bus(settings: Settings | None = None) -> EventBus:
    """Create an event bus sized from settings."""
    settings = settings or Settings()
    return EventBus(
        queue_size=settings.event_queue_size,
        max_subscribers=settings.event_max_subscribers,
    )

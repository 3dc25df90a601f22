"""Event bus subscriber that drives the sync engine from record events."""

import asyncio
import contextlib

import structlog

from multisearch.events.bus import WILDCARD, EventBus
from multisearch.events.types import RecordEventType
from multisearch.sync.engine import SyncEngine

logger = structlog.get_logger()


async def run_sync_subscriber(
    event_bus: EventBus,
    engine: SyncEngine,
    topic: str = WILDCARD,
) -> None:
    """Subscribe to record events and apply them to the document store.

    Runs as a long-lived asyncio task. Saved events go to
    ``engine.on_save`` with the context captured on the event, destroyed
    events to ``engine.on_destroy``; both run in a worker thread. A
    failed event is logged and the next one is processed, since there is
    no caller left to report to.

    Args:
        event_bus: Bus the host publishes record events on.
        engine: Engine applying the events.
        topic: Searchable type to follow, or "*" for all.
    """
    subscriber_id, events = await event_bus.subscribe(topic=topic)
    logger.info("sync_subscriber_started", subscriber_id=subscriber_id, topic=topic)

    try:
        async with contextlib.aclosing(events):
            async for event in events:
                try:
                    if event.type is RecordEventType.SAVED:
                        await asyncio.to_thread(engine.on_save, event.record, event.context)
                    elif event.type is RecordEventType.DESTROYED:
                        await asyncio.to_thread(engine.on_destroy, event.record)
                except Exception:
                    logger.exception(
                        "sync_event_failed",
                        event_id=event.id,
                        event_type=event.type.value,
                        topic=event.topic,
                    )
    except asyncio.CancelledError:
        logger.info("sync_subscriber_stopped", subscriber_id=subscriber_id)
        raise

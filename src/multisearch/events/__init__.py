"""Record lifecycle events and the subscriber feeding them to the engine."""
from multisearch.events.bus import EventBus
from multisearch.events.subscriber import run_sync_subscriber
from multisearch.events.types import (
    RecordEvent,
    RecordEventType,
    record_destroyed,
    record_saved,
)

__all__ = [
    "EventBus",
    "RecordEvent",
    "RecordEventType",
    "record_destroyed",
    "record_saved",
    "run_sync_subscriber",
]

"""Record lifecycle events published by the host application."""
import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from multisearch.sync.engine import SyncContext
from multisearch.sync.record import Multisearchable


class RecordEventType(str, Enum):
    """Lifecycle transitions the sync subscriber reacts to."""

    SAVED = "record.saved"
    DESTROYED = "record.destroyed"


class RecordEvent(BaseModel):
    """Typed lifecycle event for a multisearchable record.

    Attributes:
        id: Unique event identifier (UUID).
        type: Whether the record was saved or destroyed.
        timestamp: Event timestamp in UTC.
        topic: Searchable type of the record, used for routing.
        record: The record the event is about.
        context: Sync context captured when the event fired, if any.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: RecordEventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    topic: str
    record: Multisearchable
    context: SyncContext | None = None


def record_saved(
    record: Multisearchable, context: SyncContext | None = None
) -> RecordEvent:
    """Build a saved event, snapshotting the context in effect right now."""
    return RecordEvent(
        type=RecordEventType.SAVED,
        topic=record.searchable_type(),
        record=record,
        context=context,
    )


def record_destroyed(record: Multisearchable) -> RecordEvent:
    """Build a destroyed event."""
    return RecordEvent(
        type=RecordEventType.DESTROYED,
        topic=record.searchable_type(),
        record=record,
    )

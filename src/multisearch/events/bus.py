"""In-memory event bus with topic-based pub/sub."""
import asyncio
import uuid
from collections.abc import AsyncGenerator

import structlog

from multisearch.events.types import RecordEvent

logger = structlog.get_logger()

WILDCARD = "*"


class EventBus:
    """Async event bus with per-topic fan-out and backpressure.

    Topics are searchable types and are created on first subscribe.
    Every event also reaches wildcard subscribers. When a subscriber
    queue is full the oldest queued event is dropped.

    Attributes:
        queue_size: Maximum size of each subscriber queue.
        max_subscribers: Maximum number of concurrent subscribers.
    """

    def __init__(
        self,
        queue_size: int = 100,
        max_subscribers: int = 100,
    ) -> None:
        """Initialize event bus.

        Args:
            queue_size: Maximum items per subscriber queue.
            max_subscribers: Maximum concurrent subscribers allowed.
        """
        self._subscribers: dict[str, dict[str, asyncio.Queue[RecordEvent]]] = {
            WILDCARD: {},
        }
        self._queue_size = queue_size
        self._max_subscribers = max_subscribers
        self._dropped_count = 0
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        """Total number of active subscribers across all topics."""
        return sum(len(subs) for subs in self._subscribers.values())

    @property
    def dropped_events(self) -> int:
        """Total number of events dropped due to queue overflow."""
        return self._dropped_count

    async def publish(self, event: RecordEvent) -> int:
        """Publish event to subscribers of its topic and the wildcard.

        Args:
            event: Record event to publish.

        Returns:
            Number of subscribers that received the event.
        """
        delivered = 0
        topics = [event.topic] if event.topic == WILDCARD else [event.topic, WILDCARD]

        for topic in topics:
            for queue in list(self._subscribers.get(topic, {}).values()):
                if queue.full():
                    queue.get_nowait()
                    self._dropped_count += 1
                    logger.warning(
                        "event_dropped",
                        topic=topic,
                        dropped_total=self._dropped_count,
                    )
                queue.put_nowait(event)
                delivered += 1

        return delivered

    async def subscribe(
        self,
        topic: str = WILDCARD,
    ) -> tuple[str, AsyncGenerator[RecordEvent, None]]:
        """Subscribe to events on a topic.

        Args:
            topic: Searchable type to follow, or "*" for every event.

        Returns:
            Tuple of (subscriber_id, event_iterator).

        Raises:
            ValueError: If maximum subscribers reached.
        """
        async with self._lock:
            if self.subscriber_count >= self._max_subscribers:
                raise ValueError("Maximum subscribers reached")

            subscriber_id = str(uuid.uuid4())
            queue: asyncio.Queue[RecordEvent] = asyncio.Queue(
                maxsize=self._queue_size,
            )
            self._subscribers.setdefault(topic, {})[subscriber_id] = queue

        async def event_iterator() -> AsyncGenerator[RecordEvent, None]:
            try:
                while True:
                    yield await queue.get()
            finally:
                await self.unsubscribe(topic, subscriber_id)

        return subscriber_id, event_iterator()

    async def unsubscribe(self, topic: str, subscriber_id: str) -> None:
        """Remove a subscriber from the bus.

        Args:
            topic: Topic the subscriber was subscribed to.
            subscriber_id: ID of the subscriber to remove.
        """
        async with self._lock:
            subscribers = self._subscribers.get(topic)
            if subscribers is not None:
                subscribers.pop(subscriber_id, None)
                if not subscribers and topic != WILDCARD:
                    del self._subscribers[topic]
                logger.debug(
                    "subscriber_removed",
                    subscriber_id=subscriber_id,
                    topic=topic,
                )

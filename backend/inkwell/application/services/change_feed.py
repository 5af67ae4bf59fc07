"""Change feed — in-process broadcaster for realtime table change events."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from inkwell.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)


class Subscription:
    """A subscriber's view of one table, optionally narrowed by column equality.

    ``close()`` is the disposer: it detaches the subscription from the feed
    and ends any running ``events()`` iteration.
    """

    def __init__(
        self,
        feed: "ChangeFeed",
        table: str,
        match: dict[str, Any] | None = None,
        maxsize: int = 100,
    ) -> None:
        self.table = table
        self.match = dict(match or {})
        self._feed = feed
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        record = event.record
        return all(record.get(key) == value for key, value in self.match.items())

    def offer(self, event: ChangeEvent) -> bool:
        """Queue an event without waiting. Returns False if the queue is full."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    async def events(self) -> AsyncGenerator[ChangeEvent, None]:
        """Yield events until the subscription is closed."""
        try:
            while True:
                event = await self._queue.get()
                if event is None:
                    break
                yield event
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._feed._detach(self)
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # Drop the oldest pending event to make room for the sentinel
            self._queue.get_nowait()
            self._queue.put_nowait(None)


class ChangeFeed:
    """Fans out insert/update/delete events to matching subscribers.

    Each subscriber gets its own asyncio.Queue. Subscribers whose queue is
    full are disconnected rather than blocking the publisher.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self, table: str, *, match: dict[str, Any] | None = None, maxsize: int = 100
    ) -> Subscription:
        subscription = Subscription(self, table, match=match, maxsize=maxsize)
        self._subscriptions.append(subscription)
        logger.debug("Subscribed to %s %s (%d active)", table, subscription.match, len(self._subscriptions))
        return subscription

    async def publish(self, event: ChangeEvent) -> int:
        """Deliver an event to every matching subscriber. Returns the delivery count."""
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.matches(event):
                continue
            if subscription.offer(event):
                delivered += 1
            else:
                logger.warning("Change feed subscriber queue full — disconnecting")
                subscription.close()
        return delivered

    async def stream(self, subscription: Subscription) -> AsyncGenerator[str, None]:
        """Render a subscription as server-sent event strings."""
        async for event in subscription.events():
            payload = event.to_payload()
            yield f"event: {payload['eventType']}\ndata: {json.dumps(payload, default=str)}\n\n"

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for subscription in list(self._subscriptions):
            subscription.close()
        self._subscriptions.clear()

    def _detach(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

"""Unit tests for the in-process change feed."""

import asyncio
import json

import pytest

from inkwell.application.services import ChangeFeed
from inkwell.domain.entities import ChangeEvent, ChangeType


def _comment_event(article_id: str, change_type=ChangeType.INSERT) -> ChangeEvent:
    return ChangeEvent(
        table="comments",
        change_type=change_type,
        new={"id": "c1", "article_id": article_id, "content": "hi"},
    )


@pytest.mark.asyncio
async def test_publish_reaches_matching_subscribers_only():
    feed = ChangeFeed()
    mine = feed.subscribe("comments", match={"article_id": "a1"})
    other = feed.subscribe("comments", match={"article_id": "a2"})
    auth = feed.subscribe("auth")

    delivered = await feed.publish(_comment_event("a1"))

    assert delivered == 1
    mine.close()
    other.close()
    auth.close()
    assert [e.record["article_id"] async for e in mine.events()] == ["a1"]
    assert [e async for e in other.events()] == []


@pytest.mark.asyncio
async def test_delete_events_match_on_old_row():
    feed = ChangeFeed()
    subscription = feed.subscribe("comments", match={"article_id": "a1"})

    await feed.publish(
        ChangeEvent(table="comments", change_type=ChangeType.DELETE, old={"id": "c1", "article_id": "a1"})
    )
    subscription.close()

    events = [e async for e in subscription.events()]
    assert events[0].to_payload()["eventType"] == "DELETE"


@pytest.mark.asyncio
async def test_close_detaches_subscription():
    feed = ChangeFeed()
    subscription = feed.subscribe("comments")
    assert feed.subscriber_count == 1

    subscription.close()
    subscription.close()

    assert feed.subscriber_count == 0
    assert await feed.publish(_comment_event("a1")) == 0


@pytest.mark.asyncio
async def test_full_queue_disconnects_slow_subscriber():
    feed = ChangeFeed()
    subscription = feed.subscribe("comments", maxsize=1)

    await feed.publish(_comment_event("a1"))
    await feed.publish(_comment_event("a1"))

    assert subscription.closed
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_stream_renders_server_sent_events():
    feed = ChangeFeed()
    subscription = feed.subscribe("comments")
    stream = feed.stream(subscription)

    next_chunk = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)
    await feed.publish(_comment_event("a1"))
    chunk = await asyncio.wait_for(next_chunk, timeout=1)

    assert chunk.startswith("event: INSERT\ndata: ")
    payload = json.loads(chunk.split("data: ", 1)[1])
    assert payload["table"] == "comments"
    assert payload["new"]["article_id"] == "a1"

    await feed.shutdown()
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()

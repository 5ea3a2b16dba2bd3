"""Unit tests for the per-user progress WebSocket fan-out."""
import pytest

from api.ws import progress_broadcast
from api.ws.progress_broadcast import (
    broadcast_progress,
    subscribe_progress,
    subscriber_count,
    unsubscribe_progress,
)


class FakeWebSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send_json(self, payload):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(payload)


@pytest.fixture(autouse=True)
def clean_subscribers():
    progress_broadcast._subscribers.clear()
    yield
    progress_broadcast._subscribers.clear()


@pytest.mark.unit
class TestSubscriptions:
    def test_subscribe_and_unsubscribe(self):
        ws = FakeWebSocket()
        subscribe_progress(1, ws)
        subscribe_progress(1, ws)
        assert subscriber_count(1) == 1
        unsubscribe_progress(1, ws)
        unsubscribe_progress(1, ws)
        assert subscriber_count(1) == 0


@pytest.mark.unit
class TestBroadcastProgress:
    @pytest.mark.asyncio
    async def test_no_subscribers(self):
        assert await broadcast_progress(42, {"type": "progress_update"}) == 0

    @pytest.mark.asyncio
    async def test_sends_to_every_connection_of_the_user(self):
        a, b, other = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
        subscribe_progress(1, a)
        subscribe_progress(1, b)
        subscribe_progress(2, other)
        payload = {"type": "progress_update", "course_id": "c1", "progress": {"progress": 42}}
        assert await broadcast_progress(1, payload) == 2
        assert a.sent == [payload] and b.sent == [payload]
        assert other.sent == []

    @pytest.mark.asyncio
    async def test_dead_connections_are_dropped(self):
        alive, dead = FakeWebSocket(), FakeWebSocket(fail=True)
        subscribe_progress(1, alive)
        subscribe_progress(1, dead)
        assert await broadcast_progress(1, {"type": "progress_update"}) == 1
        assert subscriber_count(1) == 1

"""
In-memory WebSocket subscribers per user.
After a quiz finish or stage completion, the new course progress is pushed to
every open connection of that user (other tabs, the mobile wrapper).
"""

from __future__ import annotations

from typing import Any

from fastapi import WebSocket

from api.utils.logger import configure_logging

logger = configure_logging()

# user_id -> set of WebSocket connections
_subscribers: dict[int, set[WebSocket]] = {}


def subscribe_progress(user_id: int, ws: WebSocket) -> None:
    """Add a WebSocket to the subscriber set for this user."""
    _subscribers.setdefault(user_id, set()).add(ws)


def unsubscribe_progress(user_id: int, ws: WebSocket) -> None:
    """Remove a WebSocket from the subscriber set. Safe to call twice."""
    if user_id in _subscribers:
        _subscribers[user_id].discard(ws)
        if not _subscribers[user_id]:
            del _subscribers[user_id]


def subscriber_count(user_id: int) -> int:
    return len(_subscribers.get(user_id, ()))


async def broadcast_progress(user_id: int, payload: dict[str, Any]) -> int:
    """
    Send payload to all WebSockets subscribed for this user. Connections that
    fail to receive are dropped. Returns the number of successful sends.
    """
    if user_id not in _subscribers:
        return 0
    sent = 0
    dead: set[WebSocket] = set()
    for ws in list(_subscribers[user_id]):
        try:
            await ws.send_json(payload)
            sent += 1
        except Exception:
            logger.info("dropping progress subscriber user_id=%s", user_id)
            dead.add(ws)
    for ws in dead:
        unsubscribe_progress(user_id, ws)
    return sent

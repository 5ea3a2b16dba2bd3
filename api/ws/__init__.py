"""WebSocket broadcast for learner progress."""

from api.ws.progress_broadcast import broadcast_progress, subscribe_progress, unsubscribe_progress, subscriber_count

__all__ = ["broadcast_progress", "subscribe_progress", "unsubscribe_progress", "subscriber_count"]

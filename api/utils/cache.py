"""
In-process read-through cache with a fixed TTL and explicit invalidation.

Keys are typically user ids; values are whatever the loader returns. Writers
call ``invalidate`` after changing the data the value was derived from.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

DEFAULT_TTL_SEC = 24 * 60 * 60


class ReadThroughCache:
    def __init__(self, ttl_sec: int = DEFAULT_TTL_SEC, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_sec
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value or call ``loader``, store and return its result.

        ``None`` from the loader is returned but not cached, so a failed load is
        retried on the next call.
        """
        now = self._clock()
        with self._lock:
            hit = self._entries.get(key)
            if hit is not None and hit[0] > now:
                return hit[1]
        value = loader()
        if value is not None:
            with self._lock:
                self._entries[key] = (now + self._ttl, value)
        return value

    def peek(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            hit = self._entries.get(key)
        if hit is None or hit[0] <= self._clock():
            return None
        return hit[1]

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

"""Unit tests for the read-through TTL cache."""
import pytest

from api.utils.cache import ReadThroughCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.mark.unit
class TestReadThroughCache:
    def test_loads_once_within_ttl(self):
        clock = FakeClock()
        cache = ReadThroughCache(ttl_sec=60, clock=clock)
        calls = []

        def loader():
            calls.append(1)
            return {"average_score": 80}

        assert cache.get(1, loader) == {"average_score": 80}
        clock.now += 59
        assert cache.get(1, loader) == {"average_score": 80}
        assert len(calls) == 1

    def test_reloads_after_ttl(self):
        clock = FakeClock()
        cache = ReadThroughCache(ttl_sec=60, clock=clock)
        values = iter(["first", "second"])
        assert cache.get("k", lambda: next(values)) == "first"
        clock.now += 60
        assert cache.get("k", lambda: next(values)) == "second"

    def test_invalidate_forces_reload(self):
        cache = ReadThroughCache(ttl_sec=60, clock=FakeClock())
        cache.get(1, lambda: "old")
        cache.invalidate(1)
        assert cache.peek(1) is None
        assert cache.get(1, lambda: "new") == "new"

    def test_invalidate_missing_key_is_noop(self):
        cache = ReadThroughCache()
        cache.invalidate("missing")

    def test_none_is_not_cached(self):
        cache = ReadThroughCache(ttl_sec=60, clock=FakeClock())
        assert cache.get(1, lambda: None) is None
        assert cache.get(1, lambda: "loaded") == "loaded"

    def test_keys_are_independent(self):
        cache = ReadThroughCache(ttl_sec=60, clock=FakeClock())
        cache.get(1, lambda: "one")
        cache.get(2, lambda: "two")
        cache.invalidate(1)
        assert cache.peek(1) is None
        assert cache.peek(2) == "two"

    def test_clear(self):
        cache = ReadThroughCache(ttl_sec=60, clock=FakeClock())
        cache.get(1, lambda: "one")
        cache.clear()
        assert cache.peek(1) is None

    def test_loader_error_propagates(self):
        cache = ReadThroughCache(ttl_sec=60, clock=FakeClock())

        def boom():
            raise RuntimeError("db down")

        with pytest.raises(RuntimeError):
            cache.get(1, boom)
        assert cache.peek(1) is None

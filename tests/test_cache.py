"""
Test TTL cache - expiry is driven by the injected clock, no sleeping
"""

from ceknik.extract.cache import TTLCache


def test_get_returns_value_within_ttl(clock):
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", "v")

    clock.advance(299)
    assert cache.get("k") == "v"


def test_expired_entry_is_absent_and_evicted(clock):
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", "v")

    clock.advance(300)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_missing_key_returns_none(clock):
    cache = TTLCache(clock=clock)
    assert cache.get("nope") is None
    assert "nope" not in cache


def test_set_overwrites_and_restarts_ttl(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", "first")
    clock.advance(8)
    cache.set("k", "second")
    clock.advance(8)

    assert cache.get("k") == "second"


def test_clear_drops_everything(clock):
    cache = TTLCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()

    assert len(cache) == 0

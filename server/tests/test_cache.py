"""Tests for the TTL query cache."""

from binnacle.services.cache import DEFAULT_TTL_MS, QueryCache, cache_key, get_query_cache, query_cache


def test_get_missing_key_counts_miss(cache):
    assert cache.get("missing") is None
    stats = cache.get_stats()
    assert stats.miss_count == 1
    assert stats.hit_count == 0


def test_set_and_get_counts_hit(cache):
    cache.set("k", {"v": 1}, 10)
    assert cache.get("k") == {"v": 1}
    assert cache.get_stats().hit_count == 1


def test_entry_expires_after_ttl(cache, clock):
    cache.set("k", "v", 10)
    clock.advance(9)
    assert cache.get("k") == "v"

    clock.advance(2)
    assert cache.get("k") is None
    stats = cache.get_stats()
    assert stats.hit_count == 1
    assert stats.miss_count == 1
    assert stats.cache_size == 0
    assert "k" not in cache


def test_entry_still_valid_at_exact_ttl(cache, clock):
    cache.set("k", "v", 10)
    clock.advance(10)
    assert cache.get("k") == "v"


def test_expired_entry_removed_only_on_read(cache, clock):
    cache.set("a", 1, 10)
    cache.set("b", 2, 10_000)
    clock.advance(50)
    assert len(cache) == 2

    assert cache.get("a") is None
    assert cache.get_stats().cache_size == 1


def test_set_overwrites_with_fresh_timestamp(cache, clock):
    cache.set("k", "old", 10)
    clock.advance(8)
    cache.set("k", "new", 10)
    clock.advance(8)
    assert cache.get("k") == "new"


def test_default_ttl(clock):
    cache = QueryCache(clock=clock)
    cache.set("k", "v")
    clock.advance(DEFAULT_TTL_MS)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_configured_default_ttl(clock):
    cache = QueryCache(default_ttl_ms=100, clock=clock)
    cache.set("k", "v")
    clock.advance(101)
    assert cache.get("k") is None


def test_falsy_values_are_hits(cache):
    cache.set("empty", [])
    assert cache.get("empty") == []
    assert cache.get_stats().hit_count == 1


def test_invalidate_matches_substring(cache):
    cache.set("games:action:20", [1])
    cache.set("user:games:1", [2])
    cache.set("reviews:5", [3])

    removed = cache.invalidate("games")

    assert removed == 2
    assert "games:action:20" not in cache
    assert "user:games:1" not in cache
    assert cache.get("reviews:5") == [3]


def test_invalidate_no_match(cache):
    cache.set("reviews:5", [3])
    assert cache.invalidate("users") == 0
    assert len(cache) == 1


def test_clear_resets_entries_and_counters(cache):
    cache.set("a", 1)
    cache.get("a")
    cache.get("b")

    cache.clear()

    stats = cache.get_stats()
    assert stats.cache_size == 0
    assert stats.hit_count == 0
    assert stats.miss_count == 0


def test_hit_rate_formatting(cache):
    cache.set("k", "v")
    for _ in range(3):
        cache.get("k")
    cache.get("nope")

    stats = cache.get_stats()
    assert stats.total_requests == 4
    assert stats.hit_rate == "75.00%"


def test_hit_rate_without_requests(cache):
    assert cache.get_stats().hit_rate == "0.00%"


def test_reset_stats_keeps_entries(cache):
    cache.set("k", "v")
    cache.get("k")
    cache.get("x")

    cache.reset_stats()

    stats = cache.get_stats()
    assert stats.hit_count == 0
    assert stats.miss_count == 0
    assert stats.cache_size == 1
    assert cache.get("k") == "v"


def test_sweep_expired(cache, clock):
    cache.set("short", 1, 10)
    cache.set("long", 2, 1000)
    clock.advance(20)

    assert cache.sweep_expired() == 1
    assert "short" not in cache
    assert "long" in cache
    assert cache.get_stats().miss_count == 0


def test_stats_to_dict(cache):
    cache.set("k", "v")
    cache.get("k")
    assert cache.get_stats().to_dict() == {
        "hitCount": 1,
        "missCount": 0,
        "totalRequests": 1,
        "hitRate": "100.00%",
        "cacheSize": 1,
    }


def test_cache_key_joins_parts():
    assert cache_key("games", "action", 20) == "games:action:20"
    assert cache_key("user") == "user"
    assert cache_key() == ""


def test_global_cache_dependency():
    assert get_query_cache() is query_cache

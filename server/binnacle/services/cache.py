"""TTL-based query caching service.

Entries expire lazily: an expired entry is only removed when it is read,
invalidated, cleared or swept. There is no capacity bound, so keys that are
never read again stay in memory until one of those happens.
"""

import time
from typing import Any, Callable, Optional, Union
from dataclasses import dataclass

from ..config import get_settings
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_MS = 5 * 60 * 1000


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class CacheEntry:
    """A single cache entry with TTL."""
    data: Any
    timestamp: float  # epoch milliseconds
    ttl: float  # TTL in milliseconds


@dataclass
class CacheStats:
    """Snapshot of cache hit/miss accounting."""
    hit_count: int
    miss_count: int
    total_requests: int
    hit_rate: str
    cache_size: int

    def to_dict(self) -> dict:
        return {
            "hitCount": self.hit_count,
            "missCount": self.miss_count,
            "totalRequests": self.total_requests,
            "hitRate": self.hit_rate,
            "cacheSize": self.cache_size,
        }


class QueryCache:
    """In-memory query cache with per-entry TTL and hit/miss stats."""

    def __init__(
        self,
        default_ttl_ms: float = DEFAULT_TTL_MS,
        clock: Callable[[], float] = _now_ms,
    ):
        self._cache: dict[str, CacheEntry] = {}
        self._clock = clock
        self.default_ttl_ms = default_ttl_ms
        self.hit_count = 0
        self.miss_count = 0

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp > entry.ttl

    def get(self, key: str) -> Optional[Any]:
        """Get cached data if present and not expired."""
        entry = self._cache.get(key)
        if entry is None:
            self.miss_count += 1
            return None

        if self._is_expired(entry, self._clock()):
            del self._cache[key]
            self.miss_count += 1
            logger.debug("cache entry expired", extra={"cache_key": key})
            return None

        self.hit_count += 1
        return entry.data

    def set(self, key: str, data: Any, ttl_ms: Optional[float] = None) -> None:
        """Store data under key, replacing any existing entry."""
        self._cache[key] = CacheEntry(
            data=data,
            timestamp=self._clock(),
            ttl=self.default_ttl_ms if ttl_ms is None else ttl_ms,
        )

    def invalidate(self, pattern: str) -> int:
        """Remove every entry whose key contains pattern. Returns the count removed."""
        matched = [key for key in self._cache if pattern in key]
        for key in matched:
            del self._cache[key]
        if matched:
            logger.debug("invalidated cache entries", extra={"pattern": pattern, "removed": len(matched)})
        return len(matched)

    def clear(self) -> None:
        """Clear all cache entries and reset stats."""
        self._cache.clear()
        self.hit_count = 0
        self.miss_count = 0

    def sweep_expired(self) -> int:
        """Drop expired entries without touching hit/miss counters."""
        now = self._clock()
        expired = [key for key, entry in self._cache.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._cache[key]
        return len(expired)

    def get_stats(self) -> CacheStats:
        """Get hit/miss statistics and the current entry count."""
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests) * 100 if total_requests > 0 else 0

        return CacheStats(
            hit_count=self.hit_count,
            miss_count=self.miss_count,
            total_requests=total_requests,
            hit_rate=f"{hit_rate:.2f}%",
            cache_size=len(self._cache),
        )

    def reset_stats(self) -> None:
        """Reset statistics (useful after initial warmup)."""
        self.hit_count = 0
        self.miss_count = 0


def cache_key(*parts: Union[str, int, float]) -> str:
    """Build a cache key, e.g. cache_key("games", "action", 20) -> "games:action:20"."""
    return ":".join(str(part) for part in parts)


# Global cache instance
query_cache = QueryCache(default_ttl_ms=get_settings().query_cache_ttl_ms)


def get_query_cache() -> QueryCache:
    """Get the process-wide query cache."""
    return query_cache

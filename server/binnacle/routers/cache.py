"""Query cache administration endpoints."""

from fastapi import APIRouter, Depends, Query

from ..services.cache import QueryCache, get_query_cache

router = APIRouter(tags=["cache"])


@router.get("/cache/stats")
async def get_cache_stats(cache: QueryCache = Depends(get_query_cache)):
    """Hit/miss counts, hit rate and entry count."""
    return cache.get_stats().to_dict()


@router.post("/cache/stats/reset")
async def reset_cache_stats(cache: QueryCache = Depends(get_query_cache)):
    """Zero the counters but keep cached entries, e.g. after warmup."""
    cache.reset_stats()
    return cache.get_stats().to_dict()


@router.post("/cache/invalidate")
async def invalidate_cache(
    pattern: str = Query(..., min_length=1, description="Substring matched against keys"),
    cache: QueryCache = Depends(get_query_cache),
):
    """Remove every entry whose key contains pattern."""
    removed = cache.invalidate(pattern)
    return {"pattern": pattern, "removed": removed, "cacheSize": len(cache)}


@router.post("/cache/sweep")
async def sweep_cache(cache: QueryCache = Depends(get_query_cache)):
    """Drop expired entries now."""
    removed = cache.sweep_expired()
    return {"removed": removed, "cacheSize": len(cache)}


@router.delete("/cache")
async def clear_cache(cache: QueryCache = Depends(get_query_cache)):
    """Drop all entries and reset stats."""
    cache.clear()
    return {"cleared": True}

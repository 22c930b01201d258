"""Health check and pagination planning endpoints."""

import platform
import sys
from fastapi import APIRouter, Depends, Query

from .. import __version__
from ..config import Settings, get_settings
from ..services.cache import QueryCache, get_query_cache
from ..services.pagination import calculate_pagination_stats

router = APIRouter(tags=["stats"])


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_settings),
    cache: QueryCache = Depends(get_query_cache),
):
    """Health check and status endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
        "igdbConfigured": settings.igdb_configured,
        "cacheSize": len(cache),
        "platform": platform.system().lower(),
        "pythonVersion": sys.version,
    }


@router.get("/pagination/stats")
async def get_pagination_stats(
    collection_size: int = Query(..., alias="collectionSize", ge=0),
    page_size: int = Query(20, alias="pageSize", ge=1),
    pages_to_fetch: int = Query(2, alias="pagesToFetch", ge=1),
):
    """Reads saved by a bounded fetch compared to reading the whole collection."""
    return calculate_pagination_stats(page_size, collection_size, pages_to_fetch).to_dict()

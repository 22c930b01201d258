"""API Routers for Binnacle."""

from .stats import router as stats_router
from .games import router as games_router
from .cache import router as cache_router

__all__ = [
    "stats_router",
    "games_router",
    "cache_router",
]

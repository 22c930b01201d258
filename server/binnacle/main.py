"""Binnacle FastAPI Application Entry Point."""

import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .logging import get_logger, setup_logging
from .routers import cache_router, games_router, stats_router
from .services.cache import query_cache

logger = get_logger(__name__)


async def sweep_periodically(interval_seconds: float) -> None:
    """Drop expired query cache entries every interval_seconds."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = query_cache.sweep_expired()
        if removed:
            logger.debug("swept %d expired cache entries", removed)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    sweeper = None
    if settings.cache_sweep_interval_seconds > 0:
        sweeper = asyncio.create_task(sweep_periodically(settings.cache_sweep_interval_seconds))

    yield

    if sweeper is not None:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.environment)

    app = FastAPI(
        title="Binnacle",
        description="Game catalog API for Binnacle with a TTL query cache",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers with /api prefix
    app.include_router(stats_router, prefix="/api")
    app.include_router(games_router, prefix="/api")
    app.include_router(cache_router, prefix="/api")

    return app


app = create_app()


def run():
    """Run the server."""
    settings = get_settings()
    logger.info("Binnacle running at http://localhost:%s", settings.port)
    uvicorn.run(
        "binnacle.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()

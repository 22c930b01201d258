"""Game search and detail endpoints backed by IGDB and the query cache."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import Settings, get_settings
from ..logging import get_logger
from ..services.bandwidth import measure_function_bandwidth, measure_query_size
from ..services.cache import QueryCache, cache_key, get_query_cache
from ..services.igdb import MAX_LIMIT, IgdbClient, IgdbConfigError, IgdbError, get_igdb_client
from ..services.pagination import calculate_query_limit, generate_page_numbers, paginate_array

logger = get_logger(__name__)

router = APIRouter(tags=["games"])


def _igdb_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, IgdbConfigError):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


def max_search_page(page_size: int) -> int:
    """Last page whose items plus one sentinel fit in MAX_LIMIT rows."""
    return (MAX_LIMIT - 1) // page_size


@router.get("/games/search")
async def search_games(
    q: str = Query(..., min_length=1, description="Title to search for"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=100),
    refresh: Optional[str] = Query(None),
    cache: QueryCache = Depends(get_query_cache),
    igdb: IgdbClient = Depends(get_igdb_client),
    settings: Settings = Depends(get_settings),
):
    """Search games by title, one page at a time."""
    page_size = page_size or settings.default_page_size
    query = q.strip().lower()
    if not query:
        raise HTTPException(status_code=400, detail="Query is required to search games")

    # The page and its has-more sentinel must fit inside one IGDB request
    max_page = max_search_page(page_size)
    if page > max_page:
        raise HTTPException(
            status_code=400,
            detail=f"Page {page} is beyond the last searchable page ({max_page}) for pageSize={page_size}",
        )

    # Fetch enough for the requested page (or the prefetch window) plus a sentinel
    limit = min(calculate_query_limit(page_size, max(page, settings.pages_to_fetch)), MAX_LIMIT)
    key = cache_key("games", "search", query, limit)

    games = None
    if refresh != "1":
        games = cache.get(key)
    cached = games is not None

    if games is None:
        try:
            found = await measure_function_bandwidth(
                lambda: igdb.search_games(query, limit), f"igdb.search_games:{query}"
            )
        except (IgdbError, IgdbConfigError, ValueError) as exc:
            logger.warning("game search failed: %s", exc, extra={"query": query, "page": page})
            raise _igdb_http_error(exc)
        games = [game.model_dump(by_alias=True) for game in found]
        cache.set(key, games, settings.games_cache_ttl_ms)

    result = paginate_array(games, page_size, page)

    return measure_query_size(
        {
            **result.to_dict(),
            "page": page,
            "pageSize": page_size,
            "maxPage": max_page,
            "pages": generate_page_numbers(page, result.has_more),
            "cached": cached,
        },
        "games.search",
    )


@router.get("/games/{igdb_id}")
async def get_game(
    igdb_id: int,
    cache: QueryCache = Depends(get_query_cache),
    igdb: IgdbClient = Depends(get_igdb_client),
    settings: Settings = Depends(get_settings),
):
    """Get a single game by IGDB id."""
    key = cache_key("games", "id", igdb_id)

    game = cache.get(key)
    if game is None:
        try:
            found = await igdb.get_game(igdb_id)
        except (IgdbError, IgdbConfigError) as exc:
            logger.warning("game lookup failed: %s", exc, extra={"igdb_id": igdb_id})
            raise _igdb_http_error(exc)

        if found is None:
            raise HTTPException(status_code=404, detail="Game not found")

        game = found.model_dump(by_alias=True)
        cache.set(key, game, settings.games_cache_ttl_ms)

    return game

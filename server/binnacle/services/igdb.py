"""IGDB API client - game search and lookup through the Twitch credentials flow."""

import time
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import get_settings
from ..logging import get_logger
from .image_urls import build_image_url

logger = get_logger(__name__)

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
GAMES_URL = "https://api.igdb.com/v4/games"

MAX_LIMIT = 500  # IGDB rejects larger limits
DEFAULT_LIMIT = 10
MIN_TOKEN_TTL_SECONDS = 60

GAME_FIELDS = (
    "id,name,first_release_date,cover.image_id,"
    "summary,storyline,genres.name,platforms.name,themes.name,"
    "player_perspectives.name,game_modes.name,artworks.url,screenshots.url,"
    "involved_companies.company.name,involved_companies.developer,involved_companies.publisher,"
    "aggregated_rating,aggregated_rating_count,game_status.name,similar_games.name"
)


class IgdbError(Exception):
    """IGDB answered with a non-success status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"IGDB request failed: {status_code} {detail}".strip())


class IgdbConfigError(Exception):
    """IGDB credentials are missing."""


class Company(BaseModel):
    id: int
    name: str
    role: str


class Game(BaseModel):
    """A game as the web client consumes it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    igdb_id: int
    title: str
    cover_url: Optional[str] = None
    release_year: Optional[int] = None
    summary: Optional[str] = None
    storyline: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    themes: list[str] = Field(default_factory=list)
    player_perspectives: list[str] = Field(default_factory=list)
    game_modes: list[str] = Field(default_factory=list)
    artworks: list[str] = Field(default_factory=list)
    screenshots: list[str] = Field(default_factory=list)
    developers: list[Company] = Field(default_factory=list)
    publishers: list[Company] = Field(default_factory=list)
    aggregated_rating: Optional[float] = None
    aggregated_rating_count: Optional[int] = None
    game_status: Optional[str] = None
    similar_games: list[str] = Field(default_factory=list)


def _names(items: Optional[list[dict]]) -> list[str]:
    return [item["name"] for item in items or [] if item.get("name")]


def _companies(involved: Optional[list[dict]], flag: str, role: str) -> list[Company]:
    return [
        Company(id=ic["company"]["id"], name=ic["company"]["name"], role=role)
        for ic in involved or []
        if ic.get(flag) and ic.get("company")
    ]


def normalize_game(raw: dict) -> Game:
    """Flatten a raw IGDB game record."""
    cover_id = (raw.get("cover") or {}).get("image_id")
    release_year = None
    if raw.get("first_release_date"):
        release_year = datetime.fromtimestamp(raw["first_release_date"], tz=timezone.utc).year

    return Game(
        igdb_id=raw["id"],
        title=raw.get("name", ""),
        cover_url=build_image_url(cover_id, "cover_big") if cover_id else None,
        release_year=release_year,
        summary=raw.get("summary"),
        storyline=raw.get("storyline"),
        genres=_names(raw.get("genres")),
        platforms=_names(raw.get("platforms")),
        themes=_names(raw.get("themes")),
        player_perspectives=_names(raw.get("player_perspectives")),
        game_modes=_names(raw.get("game_modes")),
        artworks=[build_image_url(a["url"], "screenshot_big") for a in raw.get("artworks") or [] if a.get("url")],
        screenshots=[build_image_url(s["url"], "screenshot_big") for s in raw.get("screenshots") or [] if s.get("url")],
        developers=_companies(raw.get("involved_companies"), "developer", "Developer"),
        publishers=_companies(raw.get("involved_companies"), "publisher", "Publisher"),
        aggregated_rating=raw.get("aggregated_rating"),
        aggregated_rating_count=raw.get("aggregated_rating_count"),
        game_status=(raw.get("game_status") or {}).get("name"),
        similar_games=_names(raw.get("similar_games")),
    )


def build_search_query(query: str, limit: int) -> str:
    """Apicalypse body for a title search."""
    escaped = query.replace('"', '\\"')
    return f'search "{escaped}"; fields {GAME_FIELDS}; limit {limit};'


class IgdbClient:
    """Async IGDB client that keeps its access token until shortly before expiry."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self._transport = transport
        self._timeout = timeout
        self._access_token: Optional[str] = None
        self._expires_at: float = 0.0

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self._timeout)

    def _check_credentials(self) -> None:
        if not self.client_id:
            raise IgdbConfigError("IGDB_CLIENT_ID is not configured")
        if not self.client_secret:
            raise IgdbConfigError("IGDB_CLIENT_SECRET is not configured")

    async def _get_token(self, client: httpx.AsyncClient) -> str:
        if self._access_token and self._expires_at - time.time() > MIN_TOKEN_TTL_SECONDS:
            return self._access_token

        response = await client.post(
            TOKEN_URL,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "client_credentials",
            },
        )
        if response.status_code != 200:
            logger.warning("IGDB token request failed", extra={"status_code": response.status_code})
            raise IgdbError(response.status_code, response.text)

        payload = response.json()
        self._access_token = payload["access_token"]
        self._expires_at = time.time() + payload["expires_in"]
        return self._access_token

    async def _query_games(self, body: str) -> list[dict[str, Any]]:
        self._check_credentials()
        async with self._http() as client:
            token = await self._get_token(client)
            response = await client.post(
                GAMES_URL,
                content=body,
                headers={
                    "Client-ID": self.client_id,
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "text/plain",
                },
            )

        if response.status_code != 200:
            logger.warning("IGDB games query failed", extra={"status_code": response.status_code})
            raise IgdbError(response.status_code, response.text)
        return response.json()

    async def search_games(self, query: str, limit: int = DEFAULT_LIMIT) -> list[Game]:
        """Search IGDB by title."""
        trimmed = query.strip()
        if not trimmed:
            raise ValueError("Query is required to search IGDB")
        if limit <= 0:
            raise ValueError("Limit must be a positive number")

        raw_games = await self._query_games(build_search_query(trimmed, min(limit, MAX_LIMIT)))
        return [normalize_game(raw) for raw in raw_games]

    async def get_game(self, igdb_id: int) -> Optional[Game]:
        """Fetch a single game by IGDB id, or None if it does not exist."""
        raw_games = await self._query_games(f"fields {GAME_FIELDS}; where id = {int(igdb_id)};")
        if not raw_games:
            return None
        return normalize_game(raw_games[0])


# Singleton
_client: Optional[IgdbClient] = None


def get_igdb_client() -> IgdbClient:
    """Get the IGDB client singleton built from settings."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = IgdbClient(settings.igdb_client_id, settings.igdb_client_secret)
    return _client

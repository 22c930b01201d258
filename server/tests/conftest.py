"""Shared fixtures for the Binnacle test suite."""

import pytest

from binnacle.config import get_settings
from binnacle.services.cache import QueryCache
from binnacle.services.igdb import Game


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeIgdb:
    """Stands in for IgdbClient and records what was asked of it."""

    def __init__(self, games=None, error=None):
        self.games = games or []
        self.error = error
        self.search_calls = []
        self.lookup_calls = []

    async def search_games(self, query, limit=10):
        self.search_calls.append((query, limit))
        if self.error:
            raise self.error
        return self.games[:limit]

    async def get_game(self, igdb_id):
        self.lookup_calls.append(igdb_id)
        if self.error:
            raise self.error
        return next((g for g in self.games if g.igdb_id == igdb_id), None)


def make_games(count: int) -> list[Game]:
    return [Game(igdb_id=i, title=f"Game {i}") for i in range(1, count + 1)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return QueryCache(clock=clock)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

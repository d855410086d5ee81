"""
Pytest Fixtures

Shared settings, sample movies and collaborator doubles.
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
from unittest.mock import AsyncMock

from cineflow.config import Settings
from cineflow.models.genre import Genre
from cineflow.models.movie import Movie
from cineflow.services.local_store import LocalStore
from cineflow.services.tmdb_client import TMDBClient


@pytest.fixture
def settings() -> Settings:
    """Configured settings that never read the developer's .env."""
    return Settings(_env_file=None, tmdb_api_key="test-key", environment="test")


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(_env_file=None, tmdb_api_key=None, environment="test")


@pytest.fixture
def make_movie() -> Callable[..., Movie]:
    """Factory for movies with sensible defaults."""
    counter = itertools.count(1)
    
    def _make(title=None, **overrides) -> Movie:
        n = next(counter)
        fields = {
            "tmdb_id": 1000 + n,
            "title": title or f"Movie {n}",
            "year": 2000 + n,
            "genres": [Genre.DRAMA],
            "plot": "A story.",
            "rating": 7.0,
            "poster_path": f"/poster{n}.jpg",
        }
        fields.update(overrides)
        return Movie(**fields)
    
    return _make


@pytest.fixture
def mock_catalog():
    """Catalog double; every endpoint returns an empty list by default."""
    catalog = AsyncMock(spec=TMDBClient)
    for name in (
        "fetch_trending", "fetch_popular", "fetch_top_rated", "fetch_now_playing",
        "fetch_upcoming", "discover_by_genre", "discover_by_genres", "search_movies",
        "fetch_similar", "fetch_recommendations",
    ):
        setattr(catalog, name, AsyncMock(return_value=[]))
    return catalog


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(tmp_path / "store.json")


@pytest.fixture
def clock():
    """Deterministic clock: each call is one minute after the previous."""
    start = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(minutes=next(ticks))

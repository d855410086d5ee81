"""
TMDB Client

Async client for The Movie Database v3 API. Maps raw payloads into
`Movie` and every failure into the catalog error taxonomy.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar
import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings, get_settings
from ..core.exceptions import (
    CatalogHTTPError,
    CatalogInvalidResponseError,
    CatalogNotConfiguredError,
    CatalogUnavailableError,
)
from ..core.logging import get_logger
from ..models.genre import Genre
from ..models.movie import Movie, TMDBMovie, TMDBMovieResponse

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# Vote floors used by the discover endpoints
GENRE_SECTION_MIN_VOTES = "200"
DISCOVER_MIN_VOTES = "100"


class TMDBClient:
    """
    TMDB v3 client.
    
    Pass an `httpx.AsyncClient` to share a connection pool (or to inject a
    mock transport); otherwise each call opens its own client.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._http = http_client
        
        if not self.settings.is_tmdb_configured:
            logger.warning("tmdb_api_key_not_set")
    
    @property
    def is_configured(self) -> bool:
        return self.settings.is_tmdb_configured
    
    # =========================================================================
    # LIST ENDPOINTS
    # =========================================================================
    
    async def fetch_trending(self) -> List[Movie]:
        return await self._fetch_list("/trending/movie/week")
    
    async def fetch_popular(self, page: int = 1) -> List[Movie]:
        return await self._fetch_list("/movie/popular", {"page": str(page)})
    
    async def fetch_top_rated(self, page: int = 1) -> List[Movie]:
        return await self._fetch_list("/movie/top_rated", {"page": str(page)})
    
    async def fetch_now_playing(self, page: int = 1) -> List[Movie]:
        return await self._fetch_list("/movie/now_playing", {"page": str(page)})
    
    async def fetch_upcoming(self, page: int = 1) -> List[Movie]:
        return await self._fetch_list("/movie/upcoming", {"page": str(page)})
    
    # =========================================================================
    # DISCOVER
    # =========================================================================
    
    async def discover_by_genre(self, genre: Genre, page: int = 1) -> List[Movie]:
        """Best-rated movies of one genre (home screen "<Genre> for You" rows)."""
        return await self._fetch_list("/discover/movie", {
            "with_genres": str(genre.tmdb_id),
            "sort_by": "vote_average.desc",
            "vote_count.gte": GENRE_SECTION_MIN_VOTES,
            "page": str(page),
        })
    
    async def discover_by_genres(
        self,
        genre_ids: Sequence[int],
        sort_by: str = "vote_average.desc",
        extra_params: Optional[Mapping[str, str]] = None,
        page: int = 1,
    ) -> List[Movie]:
        """
        Discover movies matching all of `genre_ids`.
        
        `extra_params` are passed through to the query string untyped and
        win over the defaults (e.g. a caller's `vote_count.gte`).
        """
        params = {
            "with_genres": ",".join(str(g) for g in genre_ids),
            "sort_by": sort_by,
            "vote_count.gte": DISCOVER_MIN_VOTES,
            "page": str(page),
        }
        if extra_params:
            params.update(extra_params)
        return await self._fetch_list("/discover/movie", params)
    
    # =========================================================================
    # SEARCH / RELATED / DETAILS
    # =========================================================================
    
    async def search_movies(self, query: str, page: int = 1) -> List[Movie]:
        return await self._fetch_list("/search/movie", {"query": query, "page": str(page)})
    
    async def fetch_similar(self, external_id: int) -> List[Movie]:
        return await self._fetch_list(f"/movie/{external_id}/similar")
    
    async def fetch_recommendations(self, external_id: int) -> List[Movie]:
        return await self._fetch_list(f"/movie/{external_id}/recommendations")
    
    async def fetch_movie_details(self, external_id: int) -> Movie:
        details = await self._request(f"/movie/{external_id}", model=TMDBMovie)
        return details.to_movie()
    
    # =========================================================================
    # HELPERS
    # =========================================================================
    
    async def _fetch_list(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Movie]:
        response = await self._request(path, params, model=TMDBMovieResponse)
        return response.to_movies()
    
    async def _request(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        *,
        model: Type[T],
    ) -> T:
        if not self.is_configured:
            raise CatalogNotConfiguredError()
        
        query: Dict[str, Any] = dict(params or {})
        query["api_key"] = self.settings.tmdb_api_key
        query["language"] = self.settings.tmdb_language
        url = f"{self.settings.tmdb_base_url}{path}"
        
        try:
            if self._http is not None:
                response = await self._http.get(url, params=query, headers={"Accept": "application/json"})
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=query, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            logger.warning("tmdb_request_failed", path=path, error=str(e))
            raise CatalogUnavailableError(str(e)) from e
        
        if not response.is_success:
            logger.warning("tmdb_http_error", path=path, status=response.status_code)
            raise CatalogHTTPError(response.status_code)
        
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("tmdb_invalid_response", path=path, error=str(e))
            raise CatalogInvalidResponseError(str(e)) from e

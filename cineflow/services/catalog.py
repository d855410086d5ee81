"""
Catalog Client Contract

What the rest of the app needs from a movie catalog. TMDBClient is the
production implementation; tests substitute doubles.
"""

from typing import List, Mapping, Optional, Protocol, Sequence

from ..models.genre import Genre
from ..models.movie import Movie


class CatalogClient(Protocol):
    """
    Async movie catalog.
    
    Every method raises a `CatalogError` subclass on failure: not configured,
    unreachable, non-success HTTP status, or an unparsable body.
    """
    
    async def fetch_trending(self) -> List[Movie]: ...
    
    async def fetch_popular(self, page: int = 1) -> List[Movie]: ...
    
    async def fetch_top_rated(self, page: int = 1) -> List[Movie]: ...
    
    async def fetch_now_playing(self, page: int = 1) -> List[Movie]: ...
    
    async def fetch_upcoming(self, page: int = 1) -> List[Movie]: ...
    
    async def discover_by_genre(self, genre: Genre, page: int = 1) -> List[Movie]: ...
    
    async def discover_by_genres(
        self,
        genre_ids: Sequence[int],
        sort_by: str = "vote_average.desc",
        extra_params: Optional[Mapping[str, str]] = None,
        page: int = 1,
    ) -> List[Movie]: ...
    
    async def search_movies(self, query: str, page: int = 1) -> List[Movie]: ...
    
    async def fetch_similar(self, external_id: int) -> List[Movie]: ...
    
    async def fetch_recommendations(self, external_id: int) -> List[Movie]: ...
    
    async def fetch_movie_details(self, external_id: int) -> Movie: ...

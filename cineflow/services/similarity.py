"""
"Movies Like" Service

Free-text title search plus similar-movie lookup for a picked title.
"""

from typing import List, Optional

from ..core.exceptions import CatalogError
from ..core.logging import get_logger
from ..models.movie import Movie
from .catalog import CatalogClient

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2
DETAIL_SIMILAR_LIMIT = 10


class SimilarityService:
    """
    Finds movies similar to a chosen one.
    
    `find_similar` is a straight pass-through that raises catalog errors.
    The `search` and `similar_for*` helpers back optional UI panels and
    swallow them into empty lists.
    """
    
    def __init__(self, catalog: CatalogClient):
        self.catalog = catalog
    
    async def find_similar(self, external_id: Optional[int]) -> List[Movie]:
        """Similar items for a TMDB id; no id means nothing to match on."""
        if external_id is None:
            return []
        return await self.catalog.fetch_similar(external_id)
    
    async def search(self, query: str) -> List[Movie]:
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        try:
            return await self.catalog.search_movies(query)
        except CatalogError as e:
            logger.warning("movie_search_failed", query=query, error=e.message)
            return []
    
    async def similar_for(self, movie: Movie, limit: Optional[int] = None) -> List[Movie]:
        try:
            movies = await self.find_similar(movie.tmdb_id)
        except CatalogError as e:
            logger.warning("similar_fetch_failed", tmdb_id=movie.tmdb_id, error=e.message)
            return []
        return movies[:limit] if limit is not None else movies
    
    async def similar_for_detail(self, movie: Movie) -> List[Movie]:
        """The "More Like This" strip on a movie's detail view."""
        return await self.similar_for(movie, limit=DETAIL_SIMILAR_LIMIT)

"""
Home Feed Service

Loads the home screen: six primary rows fetched concurrently and joined as
one unit, then one row per favorite genre fetched one after another.
"""

import asyncio
from typing import List, Sequence

from ..core.exceptions import CatalogError
from ..core.logging import get_logger
from ..models.feed import FeedSection, HomeFeed
from ..models.genre import Genre
from .catalog import CatalogClient

logger = get_logger(__name__)

GENRE_SECTION_LIMIT = 15


class HomeFeedService:
    """
    Builds a HomeFeed.
    
    Primary rows are all-or-nothing: if any of the six fails the feed is a
    single retryable error. Genre rows are optional: a failed genre is left
    out and the rest still load.
    """
    
    def __init__(self, catalog: CatalogClient, is_configured: bool = True):
        self.catalog = catalog
        self.is_configured = is_configured
    
    async def load(self, favorite_genres: Sequence[Genre] = ()) -> HomeFeed:
        if not self.is_configured:
            logger.info("home_feed_needs_configuration")
            return HomeFeed(needs_configuration=True)
        
        primary = [
            ("trending", "Trending This Week", self.catalog.fetch_trending()),
            ("now_playing", "Now Playing", self.catalog.fetch_now_playing()),
            ("top_rated", "Top Rated", self.catalog.fetch_top_rated()),
            ("popular", "Popular This Month", self.catalog.fetch_popular()),
            ("upcoming", "Coming Soon", self.catalog.fetch_upcoming()),
            ("acclaimed", "Critically Acclaimed", self.catalog.fetch_top_rated(page=2)),
        ]
        results = await asyncio.gather(*(coro for _, _, coro in primary), return_exceptions=True)
        
        for (key, _, _), result in zip(primary, results):
            if isinstance(result, BaseException):
                if not isinstance(result, CatalogError):
                    raise result
                logger.warning("home_feed_section_failed", section=key, error=result.message)
                return HomeFeed(error=result.message)
        
        sections = [
            FeedSection(key=key, title=title, movies=movies)
            for (key, title, _), movies in zip(primary, results)
        ]
        genre_sections = await self._load_genre_sections(favorite_genres)
        
        logger.info(
            "home_feed_loaded",
            sections=len(sections),
            genre_sections=len(genre_sections),
        )
        return HomeFeed(sections=sections, genre_sections=genre_sections)
    
    async def _load_genre_sections(self, genres: Sequence[Genre]) -> List[FeedSection]:
        sections = []
        for genre in genres:
            try:
                movies = await self.catalog.discover_by_genre(genre)
            except CatalogError as e:
                logger.warning("genre_section_failed", genre=genre.label, error=e.message)
                continue
            sections.append(FeedSection(
                key=f"genre_{genre.name.lower()}",
                title=f"{genre.label} for You",
                movies=movies[:GENRE_SECTION_LIMIT],
                genre=genre,
            ))
        return sections

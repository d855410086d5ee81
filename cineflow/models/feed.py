"""
Home Feed Models
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .genre import Genre
from .movie import Movie


class FeedSection(BaseModel):
    """A titled horizontal row on the home screen."""
    key: str
    title: str
    movies: List[Movie] = Field(default_factory=list)
    genre: Optional[Genre] = None


class HomeFeed(BaseModel):
    """
    Result of one home-feed load.
    
    Exactly one of three shapes: `needs_configuration`, `error` set with no
    sections, or the loaded sections.
    """
    sections: List[FeedSection] = Field(default_factory=list)
    genre_sections: List[FeedSection] = Field(default_factory=list)
    error: Optional[str] = None
    needs_configuration: bool = False
    
    @property
    def is_error(self) -> bool:
        return self.error is not None
    
    @property
    def visible_sections(self) -> List[FeedSection]:
        """Non-empty sections, primary rows first."""
        return [s for s in self.sections + self.genre_sections if s.movies]

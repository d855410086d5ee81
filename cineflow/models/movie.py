"""
Movie Models

Defines the app's internal movie shape and the raw TMDB payloads it is
mapped from.
"""

import uuid
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from ..config import get_settings
from .genre import Genre


class PosterSize(str, Enum):
    """TMDB poster widths."""
    SMALL = "w185"
    MEDIUM = "w342"
    LARGE = "w500"
    ORIGINAL = "original"


BACKDROP_SIZE = "w780"


def image_url(path: Optional[str], size: str) -> Optional[str]:
    """Build a TMDB image URL, or None when the item has no image."""
    if not path:
        return None
    return f"{get_settings().tmdb_image_base_url}/{size}{path}"


class Movie(BaseModel):
    """
    Catalog item resolved into the app's shape.
    
    Immutable once built. `id` is a local synthetic id; `tmdb_id` is the
    cross-session identity when present.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    tmdb_id: Optional[int] = None
    title: str
    year: int = 0
    genres: List[Genre] = Field(default_factory=list)
    plot: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=10.0, description="Average vote, 0-10")
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    sub_mood: List[str] = Field(default_factory=list)
    
    model_config = ConfigDict(frozen=True)
    
    def poster_url(self, size: PosterSize = PosterSize.LARGE) -> Optional[str]:
        return image_url(self.poster_path, size.value)
    
    @property
    def small_poster_url(self) -> Optional[str]:
        return self.poster_url(PosterSize.MEDIUM)
    
    @property
    def backdrop_url(self) -> Optional[str]:
        return image_url(self.backdrop_path, BACKDROP_SIZE)
    
    @property
    def rating_formatted(self) -> str:
        return f"{self.rating:.1f}"
    
    @property
    def genre_text(self) -> str:
        return " · ".join(genre.label for genre in self.genres)
    
    def similarity_score(self, other: "Movie") -> int:
        """3 points per shared genre, 2 per shared keyword (case-insensitive)."""
        shared_genres = len(set(self.genres) & set(other.genres))
        shared_keywords = len(
            {k.lower() for k in self.keywords} & {k.lower() for k in other.keywords}
        )
        return shared_genres * 3 + shared_keywords * 2


# =============================================================================
# Raw TMDB payloads
# =============================================================================

class TMDBGenre(BaseModel):
    id: int
    name: str = ""


class TMDBMovie(BaseModel):
    """
    A movie as TMDB returns it.
    
    List endpoints carry `genre_ids`; the details endpoint carries `genres`.
    """
    id: int
    title: str
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    genre_ids: Optional[List[int]] = None
    genres: Optional[List[TMDBGenre]] = None
    
    model_config = ConfigDict(extra="ignore")
    
    @property
    def year(self) -> int:
        if not self.release_date or len(self.release_date) < 4:
            return 0
        try:
            return int(self.release_date[:4])
        except ValueError:
            return 0
    
    def resolved_genres(self) -> List[Genre]:
        if self.genre_ids is not None:
            ids = self.genre_ids
        elif self.genres is not None:
            ids = [g.id for g in self.genres]
        else:
            ids = []
        resolved = (Genre.from_tmdb_id(i) for i in ids)
        return [g for g in resolved if g is not None]
    
    def to_movie(self) -> Movie:
        return Movie(
            tmdb_id=self.id,
            title=self.title,
            year=self.year,
            genres=self.resolved_genres(),
            plot=self.overview,
            rating=min(max(self.vote_average, 0.0), 10.0),
            poster_path=self.poster_path,
            backdrop_path=self.backdrop_path,
        )


class TMDBMovieResponse(BaseModel):
    """Paged list envelope used by every TMDB list endpoint."""
    page: int = 1
    results: List[TMDBMovie] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
    
    model_config = ConfigDict(extra="ignore")
    
    def to_movies(self) -> List[Movie]:
        return [item.to_movie() for item in self.results]

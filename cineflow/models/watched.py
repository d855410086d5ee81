"""
Watched Movie Models

Entries of the on-device watched ledger.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .movie import Movie, PosterSize, image_url


class MovieRating(str, Enum):
    """The user's reaction to a watched movie."""
    DISLIKED = "disliked"
    LIKED = "liked"
    LOVED = "loved"
    
    @property
    def label(self) -> str:
        return _RATING_LABELS[self]


_RATING_LABELS = {
    MovieRating.DISLIKED: "Didn't Like It",
    MovieRating.LIKED: "Liked It",
    MovieRating.LOVED: "Loved It",
}


class WatchedEntry(BaseModel):
    """
    A rated, watched movie.
    
    Identity is the TMDB id when both sides have one, else (title, year).
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    tmdb_id: Optional[int] = None
    title: str
    year: int = 0
    poster_path: Optional[str] = None
    genre_text: str = ""
    source_rating: float = 0.0
    rating: MovieRating
    watched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    
    @classmethod
    def from_movie(cls, movie: Movie, rating: MovieRating, watched_at: datetime) -> "WatchedEntry":
        return cls(
            tmdb_id=movie.tmdb_id,
            title=movie.title,
            year=movie.year,
            poster_path=movie.poster_path,
            genre_text=movie.genre_text,
            source_rating=movie.rating,
            rating=rating,
            watched_at=watched_at,
        )
    
    def matches(self, movie: Movie) -> bool:
        if self.tmdb_id is not None and movie.tmdb_id is not None:
            return self.tmdb_id == movie.tmdb_id
        return self.title == movie.title and self.year == movie.year
    
    @property
    def poster_url(self) -> Optional[str]:
        return image_url(self.poster_path, PosterSize.MEDIUM.value)
    
    @property
    def rating_formatted(self) -> str:
        return f"{self.source_rating:.1f}"

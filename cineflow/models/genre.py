"""
Genre Model

The closed set of genres the app offers, with TMDB ids and icons.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional


class GenreInfo(NamedTuple):
    tmdb_id: int
    icon: str


class Genre(str, Enum):
    """Genres shown in onboarding and the questionnaire (value = display label)."""
    ACTION = "Action"
    COMEDY = "Comedy"
    DRAMA = "Drama"
    HORROR = "Horror"
    ROMANCE = "Romance"
    SCI_FI = "Sci-Fi"
    THRILLER = "Thriller"
    ANIMATION = "Animation"
    MYSTERY = "Mystery"
    ADVENTURE = "Adventure"
    CRIME = "Crime"
    FANTASY = "Fantasy"
    
    @property
    def label(self) -> str:
        return self.value
    
    @property
    def tmdb_id(self) -> int:
        return GENRE_INFO[self].tmdb_id
    
    @property
    def icon(self) -> str:
        return GENRE_INFO[self].icon
    
    @classmethod
    def from_tmdb_id(cls, tmdb_id: int) -> Optional["Genre"]:
        """Map a TMDB genre id; ids outside the closed set return None."""
        return _BY_TMDB_ID.get(tmdb_id)
    
    @classmethod
    def from_label(cls, label: str) -> Optional["Genre"]:
        try:
            return cls(label)
        except ValueError:
            return None


GENRE_INFO: Dict[Genre, GenreInfo] = {
    Genre.ACTION: GenreInfo(28, "flame.fill"),
    Genre.COMEDY: GenreInfo(35, "face.smiling.fill"),
    Genre.DRAMA: GenreInfo(18, "theatermasks.fill"),
    Genre.HORROR: GenreInfo(27, "eye.fill"),
    Genre.ROMANCE: GenreInfo(10749, "heart.fill"),
    Genre.SCI_FI: GenreInfo(878, "sparkles"),
    Genre.THRILLER: GenreInfo(53, "bolt.fill"),
    Genre.ANIMATION: GenreInfo(16, "paintbrush.fill"),
    Genre.MYSTERY: GenreInfo(9648, "magnifyingglass"),
    Genre.ADVENTURE: GenreInfo(12, "mountain.2.fill"),
    Genre.CRIME: GenreInfo(80, "shield.fill"),
    Genre.FANTASY: GenreInfo(14, "wand.and.stars"),
}

_BY_TMDB_ID: Dict[int, Genre] = {info.tmdb_id: genre for genre, info in GENRE_INFO.items()}

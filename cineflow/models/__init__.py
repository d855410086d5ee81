"""Pydantic models for CineFlow."""

from .genre import Genre, GENRE_INFO
from .movie import Movie, PosterSize, TMDBMovie, TMDBMovieResponse, TMDBGenre
from .options import (
    SubgenreOption,
    Company,
    Era,
    RatingOption,
    Vibe,
    SUBGENRE_OPTIONS,
    FALLBACK_MOODS,
    subgenre_options,
)
from .query import FilterSelection, QueryDescriptor
from .watched import MovieRating, WatchedEntry
from .chat import ChatRole, ChatMessage
from .feed import FeedSection, HomeFeed

__all__ = [
    "Genre",
    "GENRE_INFO",
    "Movie",
    "PosterSize",
    "TMDBMovie",
    "TMDBMovieResponse",
    "TMDBGenre",
    "SubgenreOption",
    "Company",
    "Era",
    "RatingOption",
    "Vibe",
    "SUBGENRE_OPTIONS",
    "FALLBACK_MOODS",
    "subgenre_options",
    "FilterSelection",
    "QueryDescriptor",
    "MovieRating",
    "WatchedEntry",
    "ChatRole",
    "ChatMessage",
    "FeedSection",
    "HomeFeed",
]

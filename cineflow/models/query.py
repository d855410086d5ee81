"""
Questionnaire Selection & Catalog Query Models
"""

from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from .genre import Genre
from .options import Company, Era, RatingOption, SubgenreOption, Vibe


class FilterSelection(BaseModel):
    """
    Answers collected by the questionnaire so far.
    
    Every field is optional: None means "not answered yet" or "not sure".
    """
    genre: Optional[Genre] = None
    subgenre: Optional[SubgenreOption] = None
    company: Optional[Company] = None
    era: Optional[Era] = None
    rating: Optional[RatingOption] = None
    vibe: Optional[Vibe] = None
    
    model_config = ConfigDict(validate_assignment=True)


class QueryDescriptor(BaseModel):
    """
    Normalized catalog query derived from a FilterSelection.
    
    `genre_ids` never holds duplicates and keeps first-contribution order.
    An empty `genre_ids` means the trending list is fetched instead.
    """
    genre_ids: Tuple[int, ...] = ()
    sort_by: str = "popularity.desc"
    keywords: Optional[str] = None
    release_date_gte: Optional[str] = None
    release_date_lte: Optional[str] = None
    min_rating: Optional[float] = None
    min_votes: int = 50
    
    model_config = ConfigDict(frozen=True)
    
    @property
    def is_trending_fallback(self) -> bool:
        return not self.genre_ids
    
    def extra_params(self) -> Dict[str, str]:
        """Filters as TMDB discover query parameters (everything but genres/sort/page)."""
        params: Dict[str, str] = {}
        if self.keywords:
            params["with_keywords"] = self.keywords
        if self.release_date_gte:
            params["primary_release_date.gte"] = self.release_date_gte
        if self.release_date_lte:
            params["primary_release_date.lte"] = self.release_date_lte
        if self.min_rating is not None:
            params["vote_average.gte"] = str(self.min_rating)
        params["vote_count.gte"] = str(self.min_votes)
        return params

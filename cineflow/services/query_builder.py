"""
Catalog Query Builder

Turns questionnaire answers into a single catalog query. Pure and
deterministic: the same selection always yields the same descriptor.
"""

from typing import Iterable, List

from ..models.query import FilterSelection, QueryDescriptor

DEFAULT_SORT = "popularity.desc"
DEFAULT_MIN_VOTES = 50


def _unique(ids: Iterable[int]) -> List[int]:
    """Drop repeats, keeping the first occurrence's position."""
    seen = set()
    ordered = []
    for genre_id in ids:
        if genre_id not in seen:
            seen.add(genre_id)
            ordered.append(genre_id)
    return ordered


def build_query(selection: FilterSelection) -> QueryDescriptor:
    """
    Merge all answered steps into a QueryDescriptor.
    
    - Genre ids: union of genre, subgenre extras and company extras.
    - Keywords: subgenre only.
    - Dates: era bounds.
    - Votes: rating tier, or a floor of 50 votes when skipped.
    - Sort: vibe, or popularity when skipped.
    """
    genre_ids: List[int] = []
    if selection.genre is not None:
        genre_ids.append(selection.genre.tmdb_id)
    if selection.subgenre is not None:
        genre_ids.extend(selection.subgenre.extra_genre_ids)
    if selection.company is not None:
        genre_ids.extend(selection.company.extra_genre_ids)
    
    keywords = None
    if selection.subgenre is not None and selection.subgenre.keywords:
        keywords = selection.subgenre.keywords
    
    era = selection.era
    rating = selection.rating
    
    return QueryDescriptor(
        genre_ids=tuple(_unique(genre_ids)),
        sort_by=selection.vibe.sort_by if selection.vibe is not None else DEFAULT_SORT,
        keywords=keywords,
        release_date_gte=era.min_date if era is not None else None,
        release_date_lte=era.max_date if era is not None else None,
        min_rating=rating.min_rating if rating is not None else None,
        min_votes=rating.min_votes if rating is not None else DEFAULT_MIN_VOTES,
    )

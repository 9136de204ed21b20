"""Movie aggregates, ranking and membership toggles."""

from .membership import toggle
from .models import MovieState, MovieSummary, create_movie
from .ranking import SortMode, compare, engagement_score, sort_movies


__all__ = [
    "MovieState",
    "MovieSummary",
    "SortMode",
    "compare",
    "create_movie",
    "engagement_score",
    "sort_movies",
    "toggle",
]

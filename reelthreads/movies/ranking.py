"""Engagement score, sort orders, filtering and pagination for movie listings.

All orders are descending on a single key; ties keep input order (stable
sort), no secondary key is applied.
"""

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key

from .models import MovieSummary


TRENDING_RATING_WEIGHT = 2.0


class SortMode(str, Enum):
    """Supported listing orders."""

    NEWEST = "newest"
    HIGHEST_RATED = "highestRated"
    MOST_LIKED = "mostLiked"
    TRENDING = "trending"


def parse_sort_mode(value: SortMode | str | None) -> SortMode:
    """Coerce a sort mode; anything unrecognized means newest first."""
    if value is None:
        return SortMode.NEWEST
    if isinstance(value, str):
        value = value.strip()
    try:
        return SortMode(value)
    except ValueError:
        return SortMode.NEWEST


def engagement_score(
    movie: MovieSummary, rating_weight: float = TRENDING_RATING_WEIGHT
) -> float:
    """Trending score: average rating times weight plus like count."""
    return movie.average_rating * rating_weight + movie.like_count


def _sort_key(
    mode: SortMode, rating_weight: float
) -> Callable[[MovieSummary], float]:
    if mode is SortMode.HIGHEST_RATED:
        return lambda movie: movie.average_rating
    if mode is SortMode.MOST_LIKED:
        return lambda movie: movie.like_count
    if mode is SortMode.TRENDING:
        return lambda movie: engagement_score(movie, rating_weight)
    return lambda movie: movie.created_at.timestamp()


def compare(
    a: MovieSummary,
    b: MovieSummary,
    mode: SortMode | str = SortMode.NEWEST,
    rating_weight: float = TRENDING_RATING_WEIGHT,
) -> int:
    """Order two movies for mode: negative when a ranks first, 0 on a tie."""
    key = _sort_key(parse_sort_mode(mode), rating_weight)
    key_a, key_b = key(a), key(b)
    return (key_a < key_b) - (key_a > key_b)


def sort_movies(
    movies: Iterable[MovieSummary],
    mode: SortMode | str = SortMode.NEWEST,
    rating_weight: float = TRENDING_RATING_WEIGHT,
) -> list[MovieSummary]:
    """Stable sort by compare()."""
    sort_mode = parse_sort_mode(mode)
    return sorted(
        movies,
        key=cmp_to_key(lambda a, b: compare(a, b, sort_mode, rating_weight)),
    )


def filter_movies(
    movies: Iterable[MovieSummary],
    search: str | None = None,
    genre: str | None = None,
) -> list[MovieSummary]:
    """Case-insensitive substring filters on title and genre."""
    search = (search or "").strip().casefold()
    genre = (genre or "").strip().casefold()

    return [
        movie
        for movie in movies
        if (not search or search in movie.title.casefold())
        and (not genre or genre in (movie.genre or "").casefold())
    ]


@dataclass
class MoviePage:
    """One page of a ranked listing."""

    items: list[MovieSummary]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


def paginate(
    movies: Sequence[MovieSummary],
    page: int = 1,
    limit: int = 10,
    max_limit: int = 50,
) -> MoviePage:
    """Slice a ranked listing; page is floored at 1, limit clamped to [1, max_limit]."""
    page = max(1, page)
    limit = min(max_limit, max(1, limit))
    start = (page - 1) * limit
    return MoviePage(
        items=list(movies[start : start + limit]),
        total=len(movies),
        page=page,
        limit=limit,
    )

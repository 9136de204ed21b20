"""Catalog-wide engagement totals for the admin dashboard."""

from collections.abc import Iterable
from dataclasses import dataclass

from .models import MovieState


@dataclass
class CatalogTotals:
    total_movies: int = 0
    total_comments: int = 0
    total_ratings: int = 0
    total_movie_likes: int = 0


def catalog_totals(movies: Iterable[MovieState]) -> CatalogTotals:
    totals = CatalogTotals()
    for movie in movies:
        totals.total_movies += 1
        totals.total_comments += len(movie.comments)
        totals.total_ratings += movie.ratings.count
        totals.total_movie_likes += len(movie.likes)
    return totals

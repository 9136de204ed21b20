"""Pydantic response schemas for movie listings, likes and watchlists."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .models import MovieSummary
from .ranking import MoviePage
from .stats import CatalogTotals


class MovieSummaryResponse(BaseModel):
    """Movie as shown in listings."""

    model_config = ConfigDict(from_attributes=True)

    movie_id: UUID
    title: str
    genre: str | None = None
    created_at: datetime
    average_rating: float = 0.0
    like_count: int = 0
    rating_count: int = 0
    comment_count: int = 0

    @classmethod
    def from_summary(
        cls, summary: MovieSummary, places: int = 2
    ) -> "MovieSummaryResponse":
        response = cls.model_validate(summary)
        response.average_rating = round(summary.average_rating, places)
        return response


class MoviePageResponse(BaseModel):
    """Paginated, ranked movie listing."""

    total_results: int
    current_page: int
    total_pages: int
    movies: list[MovieSummaryResponse]

    @classmethod
    def from_page(cls, page: MoviePage, places: int = 2) -> "MoviePageResponse":
        return cls(
            total_results=page.total,
            current_page=page.page,
            total_pages=page.total_pages,
            movies=[MovieSummaryResponse.from_summary(m, places) for m in page.items],
        )


class LikeToggleResponse(BaseModel):
    movie_id: UUID
    liked: bool
    total_likes: int
    message: str


class WatchlistToggleResponse(BaseModel):
    movie_id: UUID
    added: bool
    total_watchlist: int
    message: str


class WatchlistResponse(BaseModel):
    total: int
    watchlist: list[MovieSummaryResponse]


class DashboardResponse(BaseModel):
    """Catalog-wide engagement totals."""

    model_config = ConfigDict(from_attributes=True)

    total_movies: int = 0
    total_comments: int = 0
    total_ratings: int = 0
    total_movie_likes: int = 0

    @classmethod
    def from_totals(cls, totals: CatalogTotals) -> "DashboardResponse":
        return cls.model_validate(totals)

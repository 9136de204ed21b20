"""Pydantic response schemas for movie ratings."""

from uuid import UUID

from pydantic import BaseModel, Field

from .models import RatingAggregate


class RatingResponse(BaseModel):
    """Aggregate state after a rating was submitted."""

    movie_id: UUID
    average_rating: float = 0.0
    total_ratings: int = 0
    user_rating: int | None = None
    message: str = "Rating submitted"

    @classmethod
    def from_aggregate(
        cls,
        movie_id: UUID,
        aggregate: RatingAggregate,
        user_id: UUID | None = None,
        places: int = 2,
    ) -> "RatingResponse":
        user_rating = aggregate.find(user_id) if user_id else None
        return cls(
            movie_id=movie_id,
            average_rating=aggregate.rounded_mean(places),
            total_ratings=aggregate.count,
            user_rating=user_rating.value if user_rating else None,
        )


class RatingStatsResponse(BaseModel):
    """Rating statistics for a movie."""

    movie_id: UUID
    total_ratings: int = 0
    average_rating: float = 0.0
    rating_distribution: dict[str, int] = Field(
        default_factory=lambda: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    )

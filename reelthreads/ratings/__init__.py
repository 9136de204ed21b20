"""Movie ratings with a maintained mean."""

from .models import MAX_RATING, MIN_RATING, Rating, RatingAggregate, coerce_rating_value


__all__ = [
    "MAX_RATING",
    "MIN_RATING",
    "Rating",
    "RatingAggregate",
    "coerce_rating_value",
]

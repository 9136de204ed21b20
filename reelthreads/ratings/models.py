"""Per-movie rating collection with a maintained mean.

One rating per user per movie: re-rating overwrites in place and never adds a
second entry. The mean is recomputed from all current values at full
precision; rounding only happens in presentation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from reelthreads.comments.models import utcnow
from reelthreads.core.exceptions import InvalidInputError


MIN_RATING = 1
MAX_RATING = 5


@dataclass
class Rating:
    """A single user's rating of a movie."""

    user_id: UUID
    value: int
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


def coerce_rating_value(
    value: object,
    min_value: int = MIN_RATING,
    max_value: int = MAX_RATING,
) -> int:
    """Validate a rating and return it as an int.

    Integral floats and numeric strings ("4", "4.0") are accepted, matching
    request payloads that carry numbers as text. Booleans are not numbers here.

    Raises:
        InvalidInputError: non-numeric, fractional or out of range
    """
    msg = f"Rating must be between {min_value} and {max_value}"

    if isinstance(value, bool):
        raise InvalidInputError(msg)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float | str):
        try:
            parsed = float(value)
        except ValueError:
            raise InvalidInputError(msg) from None
        if not parsed.is_integer():
            raise InvalidInputError(msg)
        number = int(parsed)
    else:
        raise InvalidInputError(msg)

    if number < min_value or number > max_value:
        raise InvalidInputError(msg)
    return number


@dataclass
class RatingAggregate:
    """Ratings of one movie plus their arithmetic mean (0 when empty)."""

    ratings: list[Rating] = field(default_factory=list)
    mean: float = 0.0

    @property
    def count(self) -> int:
        return len(self.ratings)

    def find(self, user_id: UUID) -> Rating | None:
        for rating in self.ratings:
            if rating.user_id == user_id:
                return rating
        return None

    def recompute(self) -> float:
        """Recompute the mean from every current value."""
        self.mean = (
            sum(rating.value for rating in self.ratings) / self.count
            if self.ratings
            else 0.0
        )
        return self.mean

    def rate(
        self,
        user_id: UUID,
        value: object,
        min_value: int = MIN_RATING,
        max_value: int = MAX_RATING,
    ) -> tuple[float, int]:
        """Record user_id's rating and return (mean, count).

        Raises:
            InvalidInputError: value is not an integer in range (aggregate untouched)
        """
        number = coerce_rating_value(value, min_value, max_value)

        existing = self.find(user_id)
        if existing:
            existing.value = number
            existing.updated_at = utcnow()
        else:
            self.ratings.append(Rating(user_id=user_id, value=number))

        return self.recompute(), self.count

    def rounded_mean(self, places: int = 2) -> float:
        return round(self.mean, places)

    def distribution(
        self, min_value: int = MIN_RATING, max_value: int = MAX_RATING
    ) -> dict[str, int]:
        """Number of ratings per star value, keyed by the value as text."""
        distribution = {str(star): 0 for star in range(min_value, max_value + 1)}
        for rating in self.ratings:
            key = str(rating.value)
            distribution[key] = distribution.get(key, 0) + 1
        return distribution

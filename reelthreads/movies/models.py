"""Movie aggregate state as loaded from and saved to the entity store."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from reelthreads.comments.models import Comment, utcnow
from reelthreads.ratings.models import RatingAggregate

from .membership import toggle


@dataclass(frozen=True)
class MovieSummary:
    """Read-only projection of a movie used for ranking and listings."""

    movie_id: UUID
    title: str
    genre: str | None
    created_at: datetime
    average_rating: float = 0.0
    like_count: int = 0
    rating_count: int = 0
    comment_count: int = 0


@dataclass
class MovieState:
    """One movie with everything owned by it.

    version is bumped by the store on every successful save and used for
    optimistic compare-and-swap.
    """

    movie_id: UUID
    title: str
    director: str | None = None
    year: int | None = None
    description: str | None = None
    genre: str | None = None
    poster_url: str | None = None
    created_by: UUID | None = None
    likes: set[UUID] = field(default_factory=set)
    ratings: RatingAggregate = field(default_factory=RatingAggregate)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    version: int = 0

    def toggle_like(self, user_id: UUID) -> bool:
        """Like or unlike the movie; returns True when now liked."""
        self.likes, liked = toggle(self.likes, user_id)
        return liked

    def summary(self) -> MovieSummary:
        return MovieSummary(
            movie_id=self.movie_id,
            title=self.title,
            genre=self.genre,
            created_at=self.created_at,
            average_rating=self.ratings.mean,
            like_count=len(self.likes),
            rating_count=self.ratings.count,
            comment_count=len(self.comments),
        )


def create_movie(
    title: str,
    director: str | None = None,
    year: int | None = None,
    description: str | None = None,
    genre: str | None = None,
    poster_url: str | None = None,
    created_by: UUID | None = None,
) -> MovieState:
    """Create a new movie with empty engagement."""
    now = utcnow()
    return MovieState(
        movie_id=uuid4(),
        title=title.strip(),
        director=director,
        year=year,
        description=description,
        genre=genre,
        poster_url=poster_url,
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )

"""In-memory entity store with optimistic concurrency.

Reference implementation of the load/save contract the engagement core relies
on. Callers always get deep copies, so a failed operation can never leak a
half-applied mutation into the stored state. Writes are compare-and-swap on
MovieState.version; update() retries a pure mutation on fresh state when a
concurrent writer won. Watchlists are read-modify-written under the store
lock in a single step.
"""

import asyncio
import copy
from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

import structlog

from reelthreads.comments.models import utcnow
from reelthreads.core.exceptions import ConflictError, NotFoundError
from reelthreads.movies.models import MovieState


logger = structlog.get_logger(__name__)

T = TypeVar("T")


class InMemoryMovieStore:
    """Movie aggregates and user watchlists kept in process memory."""

    DEFAULT_MAX_RETRIES = 3

    def __init__(self, max_retries: int = DEFAULT_MAX_RETRIES) -> None:
        """Initialize an empty store.

        Args:
            max_retries: Extra attempts update() makes after a write conflict
        """
        self.max_retries = max_retries
        self._movies: dict[UUID, MovieState] = {}
        self._watchlists: dict[UUID, set[UUID]] = {}
        self._lock = asyncio.Lock()

    # ==========================================================================
    # Movies
    # ==========================================================================

    async def add_movie(self, movie: MovieState) -> MovieState:
        """Seed a movie. Metadata management lives outside this package."""
        async with self._lock:
            stored = copy.deepcopy(movie)
            self._movies[movie.movie_id] = stored
            logger.debug("movie_added", movie_id=str(movie.movie_id))
            return copy.deepcopy(stored)

    async def load(self, movie_id: UUID) -> MovieState:
        """Load a private copy of a movie's state.

        Raises:
            NotFoundError: no such movie
        """
        async with self._lock:
            stored = self._movies.get(movie_id)
            if stored is None:
                raise NotFoundError("Movie not found")
            return copy.deepcopy(stored)

    async def save(self, movie_id: UUID, state: MovieState) -> MovieState:
        """Persist state if nobody saved since it was loaded.

        Returns:
            Copy of the stored state with its new version

        Raises:
            NotFoundError: movie was removed meanwhile
            ConflictError: stored version differs from state.version
        """
        async with self._lock:
            stored = self._movies.get(movie_id)
            if stored is None:
                raise NotFoundError("Movie not found")
            if stored.version != state.version:
                raise ConflictError

            saved = copy.deepcopy(state)
            saved.version = stored.version + 1
            saved.updated_at = utcnow()
            self._movies[movie_id] = saved
            return copy.deepcopy(saved)

    async def update(
        self,
        movie_id: UUID,
        mutate: Callable[[MovieState], T],
    ) -> tuple[T, MovieState]:
        """Load, apply a pure mutation and save, retrying on conflict.

        Errors raised by mutate propagate untouched and nothing is saved.

        Returns:
            The mutation result and the saved state
        """
        attempt = 0
        while True:
            state = await self.load(movie_id)
            result = mutate(state)
            try:
                saved = await self.save(movie_id, state)
            except ConflictError:
                attempt += 1
                if attempt > self.max_retries:
                    logger.warning(
                        "store_conflict_retries_exhausted",
                        movie_id=str(movie_id),
                        attempts=attempt,
                    )
                    raise
                logger.info(
                    "store_conflict_retry", movie_id=str(movie_id), attempt=attempt
                )
                continue
            return result, saved

    async def list_movies(self) -> list[MovieState]:
        """Copies of every movie in insertion order."""
        async with self._lock:
            return [copy.deepcopy(movie) for movie in self._movies.values()]

    # ==========================================================================
    # Watchlists
    # ==========================================================================

    async def get_watchlist(self, user_id: UUID) -> set[UUID]:
        async with self._lock:
            return set(self._watchlists.get(user_id, set()))

    async def update_watchlist(
        self,
        user_id: UUID,
        mutate: Callable[[set[UUID]], tuple[set[UUID], T]],
    ) -> tuple[set[UUID], T]:
        """Replace a watchlist with mutate(current) in one locked step.

        mutate returns the new watchlist plus a result; both are returned.
        """
        async with self._lock:
            current = set(self._watchlists.get(user_id, set()))
            watchlist, result = mutate(current)
            self._watchlists[user_id] = set(watchlist)
            return set(watchlist), result

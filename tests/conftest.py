"""Shared fixtures for the engagement test suite."""

import asyncio
from uuid import UUID, uuid4

import pytest
import pytest_asyncio

from reelthreads.auth.permissions import Caller
from reelthreads.comments.models import Comment
from reelthreads.config.settings import Settings
from reelthreads.engagement.service import EngagementService
from reelthreads.movies.models import MovieState, create_movie
from reelthreads.storage.memory import InMemoryMovieStore


def _make_comment(
    number: int, parent: int | None = None, author_id: UUID | None = None
) -> Comment:
    return Comment(
        comment_id=UUID(int=number),
        author_id=author_id or UUID(int=1000),
        content=f"comment {number}",
        parent_id=UUID(int=parent) if parent is not None else None,
    )


@pytest.fixture
def make_comment():
    """Comment factory with readable IDs: make_comment(2, parent=1) replies to 1."""
    return _make_comment


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment."""
    return Settings(environment="testing", log_level="DEBUG")


@pytest.fixture
def user_id() -> UUID:
    """Test user ID."""
    return uuid4()


@pytest.fixture
def caller(user_id: UUID) -> Caller:
    """Plain authenticated user."""
    return Caller(user_id=user_id)


@pytest.fixture
def other_caller() -> Caller:
    """A second plain user."""
    return Caller(user_id=uuid4())


@pytest.fixture
def admin_caller() -> Caller:
    """Admin user."""
    return Caller(user_id=uuid4(), is_admin=True)


@pytest.fixture
def store() -> InMemoryMovieStore:
    """Empty in-memory store."""
    return InMemoryMovieStore(max_retries=3)


class YieldingStore(InMemoryMovieStore):
    """Store that hands control to the event loop before every access."""

    async def load(self, movie_id: UUID) -> MovieState:
        await asyncio.sleep(0)
        return await super().load(movie_id)

    async def get_watchlist(self, user_id: UUID) -> set[UUID]:
        await asyncio.sleep(0)
        return await super().get_watchlist(user_id)

    async def update_watchlist(self, user_id, mutate):
        await asyncio.sleep(0)
        return await super().update_watchlist(user_id, mutate)


@pytest.fixture
def yielding_store() -> YieldingStore:
    """In-memory store whose every access lets other tasks run first."""
    return YieldingStore()


@pytest.fixture
def service(store: InMemoryMovieStore, settings: Settings) -> EngagementService:
    """EngagementService over the in-memory store."""
    return EngagementService(store, settings)


@pytest_asyncio.fixture
async def movie(store: InMemoryMovieStore) -> MovieState:
    """A seeded movie with no engagement."""
    return await store.add_movie(
        create_movie(title="Arrival", director="Denis Villeneuve", genre="Sci-Fi")
    )

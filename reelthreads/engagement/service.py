"""Engagement service layer.

Business logic for:
- Threaded comments (add, reply, edit, cascade delete, reactions)
- Ratings and rating statistics
- Movie likes and watchlists
- Ranked movie listings and admin extraction

Every mutation is one load/apply/save round trip through the store, so the
store's compare-and-swap serializes concurrent writers per movie.
"""

from uuid import UUID

import structlog

from reelthreads.auth.permissions import Caller
from reelthreads.comments import operations
from reelthreads.comments.models import ReactionKind
from reelthreads.comments.reactions import react, user_reaction
from reelthreads.comments.schemas import (
    AdminCommentListResponse,
    AdminCommentResponse,
    CommentDeletedResponse,
    CommentResponse,
    CommentsResponse,
    CommentThreadResponse,
    ReactionResponse,
)
from reelthreads.comments.threads import build_forest
from reelthreads.config.settings import Settings, get_settings
from reelthreads.core.context import OperationContext
from reelthreads.movies.membership import toggle
from reelthreads.movies.models import MovieState
from reelthreads.movies.ranking import (
    SortMode,
    filter_movies,
    paginate,
    parse_sort_mode,
    sort_movies,
)
from reelthreads.movies.schemas import (
    DashboardResponse,
    LikeToggleResponse,
    MoviePageResponse,
    MovieSummaryResponse,
    WatchlistResponse,
    WatchlistToggleResponse,
)
from reelthreads.movies.stats import catalog_totals
from reelthreads.ratings.schemas import RatingResponse, RatingStatsResponse
from reelthreads.storage.memory import InMemoryMovieStore


logger = structlog.get_logger(__name__)


class EngagementService:
    """Service for comment, rating, like and watchlist management."""

    def __init__(
        self, store: InMemoryMovieStore, settings: Settings | None = None
    ) -> None:
        """Initialize with an entity store and optional settings."""
        self.store = store
        self.settings = settings or get_settings()

    # ==========================================================================
    # Comments
    # ==========================================================================

    async def get_comments(self, movie_id: UUID) -> CommentsResponse:
        """All comments of a movie, flat in insertion order and threaded."""
        movie = await self.store.load(movie_id)
        return CommentsResponse(
            movie_id=movie_id,
            total=len(movie.comments),
            comments=[CommentResponse.from_comment(c) for c in movie.comments],
            threaded_comments=[
                CommentThreadResponse.from_node(node)
                for node in build_forest(movie.comments)
            ],
        )

    async def add_comment(
        self, movie_id: UUID, caller: Caller, content: object
    ) -> CommentResponse:
        """Add a top-level comment."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            comment, _ = await self.store.update(
                movie_id,
                lambda movie: operations.add_comment(
                    movie.comments,
                    caller.user_id,
                    content,
                    max_length=self.settings.comment_max_length,
                ),
            )
            logger.info("comment_added", comment_id=str(comment.comment_id))
            return CommentResponse.from_comment(comment)

    async def reply_to_comment(
        self, movie_id: UUID, comment_id: UUID, caller: Caller, content: object
    ) -> CommentResponse:
        """Reply to an existing comment of the same movie."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            reply, _ = await self.store.update(
                movie_id,
                lambda movie: operations.reply_to_comment(
                    movie.comments,
                    comment_id,
                    caller.user_id,
                    content,
                    max_length=self.settings.comment_max_length,
                ),
            )
            logger.info(
                "comment_reply_added",
                comment_id=str(reply.comment_id),
                parent_id=str(comment_id),
            )
            return CommentResponse.from_comment(reply)

    async def edit_comment(
        self, movie_id: UUID, comment_id: UUID, caller: Caller, content: object
    ) -> CommentResponse:
        """Edit a comment's content. Owner or admin only."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            comment, _ = await self.store.update(
                movie_id,
                lambda movie: operations.edit_comment(
                    movie.comments,
                    comment_id,
                    caller,
                    content,
                    max_length=self.settings.comment_max_length,
                ),
            )
            logger.info(
                "comment_edited",
                comment_id=str(comment_id),
                by_admin=caller.is_admin,
            )
            return CommentResponse.from_comment(comment)

    async def delete_comment(
        self, movie_id: UUID, comment_id: UUID, caller: Caller
    ) -> CommentDeletedResponse:
        """Delete a comment and its whole reply subtree. Owner or admin only."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            removed, _ = await self.store.update(
                movie_id,
                lambda movie: operations.delete_comment(
                    movie.comments, comment_id, caller
                ),
            )
            logger.info(
                "comment_thread_deleted",
                comment_id=str(comment_id),
                deleted_count=len(removed),
            )
            return CommentDeletedResponse(
                comment_id=comment_id,
                deleted_ids=sorted(removed, key=str),
                deleted_count=len(removed),
            )

    async def react_to_comment(
        self,
        movie_id: UUID,
        comment_id: UUID,
        caller: Caller,
        kind: ReactionKind | str,
    ) -> ReactionResponse:
        """Like or dislike a comment, replacing any earlier reaction."""

        def apply(movie: MovieState) -> ReactionResponse:
            comment = operations.find_comment(movie.comments, comment_id)
            counts = react(comment, caller.user_id, kind)
            return ReactionResponse(
                comment_id=comment_id,
                likes=counts.likes,
                dislikes=counts.dislikes,
                user_reaction=user_reaction(comment, caller.user_id),
            )

        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            response, _ = await self.store.update(movie_id, apply)
            logger.info(
                "comment_reaction_updated",
                comment_id=str(comment_id),
                reaction=response.user_reaction,
            )
            return response

    # ==========================================================================
    # Ratings
    # ==========================================================================

    async def rate_movie(
        self, movie_id: UUID, caller: Caller, value: object
    ) -> RatingResponse:
        """Rate a movie; a second rating by the same user overwrites the first."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            (mean, count), movie = await self.store.update(
                movie_id,
                lambda movie: movie.ratings.rate(
                    caller.user_id,
                    value,
                    min_value=self.settings.rating_min,
                    max_value=self.settings.rating_max,
                ),
            )
            logger.info("movie_rated", average_rating=mean, total_ratings=count)
            return RatingResponse.from_aggregate(
                movie_id,
                movie.ratings,
                user_id=caller.user_id,
                places=self.settings.rating_display_places,
            )

    async def get_rating_stats(self, movie_id: UUID) -> RatingStatsResponse:
        """Get rating statistics for a movie.

        Returns:
        - Total number of ratings
        - Average rating
        - Distribution of ratings per star
        """
        movie = await self.store.load(movie_id)
        return RatingStatsResponse(
            movie_id=movie_id,
            total_ratings=movie.ratings.count,
            average_rating=movie.ratings.rounded_mean(
                self.settings.rating_display_places
            ),
            rating_distribution=movie.ratings.distribution(
                self.settings.rating_min, self.settings.rating_max
            ),
        )

    # ==========================================================================
    # Likes and watchlists
    # ==========================================================================

    async def toggle_like_movie(
        self, movie_id: UUID, caller: Caller
    ) -> LikeToggleResponse:
        """Like a movie, or unlike it when already liked."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            liked, movie = await self.store.update(
                movie_id, lambda movie: movie.toggle_like(caller.user_id)
            )
            logger.info("movie_like_toggled", liked=liked, total_likes=len(movie.likes))
            return LikeToggleResponse(
                movie_id=movie_id,
                liked=liked,
                total_likes=len(movie.likes),
                message="Movie liked" if liked else "Movie unliked",
            )

    async def toggle_watchlist(
        self, caller: Caller, movie_id: UUID
    ) -> WatchlistToggleResponse:
        """Add a movie to the caller's watchlist, or remove it if present."""
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            await self.store.load(movie_id)

            watchlist, added = await self.store.update_watchlist(
                caller.user_id, lambda current: toggle(current, movie_id)
            )

            logger.info("watchlist_toggled", added=added, total=len(watchlist))
            return WatchlistToggleResponse(
                movie_id=movie_id,
                added=added,
                total_watchlist=len(watchlist),
                message="Added to watchlist" if added else "Removed from watchlist",
            )

    async def get_watchlist(self, caller: Caller) -> WatchlistResponse:
        """Movies on the caller's watchlist; removed movies are skipped."""
        watchlist = await self.store.get_watchlist(caller.user_id)
        places = self.settings.rating_display_places

        movies: list[MovieSummaryResponse] = []
        for movie in await self.store.list_movies():
            if movie.movie_id in watchlist:
                movies.append(MovieSummaryResponse.from_summary(movie.summary(), places))

        return WatchlistResponse(total=len(movies), watchlist=movies)

    # ==========================================================================
    # Listings and admin views
    # ==========================================================================

    async def list_movies(
        self,
        search: str | None = None,
        genre: str | None = None,
        page: int = 1,
        limit: int | None = None,
        sort: SortMode | str | None = None,
    ) -> MoviePageResponse:
        """Filter, rank and paginate the catalog."""
        summaries = [movie.summary() for movie in await self.store.list_movies()]
        ranked = sort_movies(
            filter_movies(summaries, search=search, genre=genre),
            parse_sort_mode(sort),
            rating_weight=self.settings.trending_rating_weight,
        )
        movie_page = paginate(
            ranked,
            page=page,
            limit=(
                limit if limit is not None else self.settings.movie_page_size_default
            ),
            max_limit=self.settings.movie_page_size_max,
        )
        return MoviePageResponse.from_page(
            movie_page, places=self.settings.rating_display_places
        )

    async def list_all_comments(self) -> AdminCommentListResponse:
        """Every comment of every movie, for moderation."""
        comments = [
            AdminCommentResponse.from_comment(movie.movie_id, movie.title, comment)
            for movie in await self.store.list_movies()
            for comment in movie.comments
        ]
        return AdminCommentListResponse(
            total_comments=len(comments), comments=comments
        )

    async def get_dashboard(self) -> DashboardResponse:
        """Catalog-wide engagement totals."""
        return DashboardResponse.from_totals(
            catalog_totals(await self.store.list_movies())
        )


def create_engagement_service(settings: Settings | None = None) -> EngagementService:
    """Build a service over a fresh in-memory store configured from settings."""
    settings = settings or get_settings()
    store = InMemoryMovieStore(max_retries=settings.store_max_retries)
    return EngagementService(store, settings)

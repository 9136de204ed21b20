"""Pydantic response schemas for the comment system.

Built from comment entities and derived thread nodes; callers serialize them
with ``model_dump(mode="json")``.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .models import Comment, CommentNode, ReactionKind
from .reactions import ReactionCounts, reaction_counts


class ReactionCountsResponse(BaseModel):
    """Reaction counts for a comment."""

    likes: int = 0
    dislikes: int = 0
    total: int = 0

    @classmethod
    def from_counts(cls, counts: ReactionCounts) -> "ReactionCountsResponse":
        return cls(likes=counts.likes, dislikes=counts.dislikes, total=counts.total())


class CommentResponse(BaseModel):
    """Response for a single comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    parent_id: UUID | None = None
    author_id: UUID
    content: str
    is_edited: bool = False
    edited_at: datetime | None = None
    reactions: ReactionCountsResponse = Field(default_factory=ReactionCountsResponse)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def _fields_from_comment(cls, comment: Comment) -> dict[str, Any]:
        return {
            "id": comment.comment_id,
            "parent_id": comment.parent_id,
            "author_id": comment.author_id,
            "content": comment.content,
            "is_edited": comment.is_edited,
            "edited_at": comment.edited_at,
            "reactions": ReactionCountsResponse.from_counts(reaction_counts(comment)),
            "created_at": comment.created_at,
            "updated_at": comment.updated_at,
        }

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        """Create response from Comment entity."""
        return cls(**cls._fields_from_comment(comment))


class CommentThreadResponse(CommentResponse):
    """Comment with nested replies."""

    replies: list["CommentThreadResponse"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentThreadResponse":
        """Create a nested response from a thread node and all its replies."""
        return cls(
            **cls._fields_from_comment(node.comment),
            replies=[cls.from_node(reply) for reply in node.replies],
        )


class CommentsResponse(BaseModel):
    """All comments of a movie, flat and threaded."""

    movie_id: UUID
    total: int
    comments: list[CommentResponse]
    threaded_comments: list[CommentThreadResponse]


class CommentDeletedResponse(BaseModel):
    """Result of a cascade delete."""

    comment_id: UUID
    deleted_ids: list[UUID]
    deleted_count: int
    message: str = "Comment deleted"


class ReactionResponse(BaseModel):
    """Counts after a reaction was applied."""

    comment_id: UUID
    likes: int
    dislikes: int
    user_reaction: ReactionKind | None = None
    message: str = "Reaction updated"


class AdminCommentResponse(BaseModel):
    """One comment extracted across the catalog for moderation."""

    movie_id: UUID
    movie_title: str
    comment_id: UUID
    author_id: UUID
    content: str
    parent_id: UUID | None = None
    likes: int = 0
    dislikes: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(
        cls, movie_id: UUID, movie_title: str, comment: Comment
    ) -> "AdminCommentResponse":
        return cls(
            movie_id=movie_id,
            movie_title=movie_title,
            comment_id=comment.comment_id,
            author_id=comment.author_id,
            content=comment.content,
            parent_id=comment.parent_id,
            likes=len(comment.likes),
            dislikes=len(comment.dislikes),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class AdminCommentListResponse(BaseModel):
    """Every comment of every movie."""

    total_comments: int
    comments: list[AdminCommentResponse]

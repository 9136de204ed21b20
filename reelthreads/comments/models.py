"""Comment entities for one movie's threaded discussion.

Architecture: Adjacency List pattern
- Comments of a movie are kept as a flat list in insertion order
- parent_id references the parent comment (None for root comments)
- Trees are derived on read (see threads.py) and never persisted
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4


class ReactionKind(str, Enum):
    """Available reactions on a comment."""

    LIKE = "like"
    DISLIKE = "dislike"


def utcnow() -> datetime:
    """Current timezone-aware UTC time."""
    return datetime.now(UTC)


@dataclass
class Comment:
    """Comment entity with its reaction sets."""

    comment_id: UUID
    author_id: UUID
    content: str
    parent_id: UUID | None = None
    is_edited: bool = False
    edited_at: datetime | None = None
    likes: set[UUID] = field(default_factory=set)
    dislikes: set[UUID] = field(default_factory=set)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class CommentNode:
    """A comment plus its replies, in insertion order. Derived, never stored."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def comment_id(self) -> UUID:
        return self.comment.comment_id

    def size(self) -> int:
        """Number of comments in this subtree, including this one."""
        total = 0
        stack = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.replies)
        return total


# Flat, insertion-ordered comments of one movie
CommentStore = list[Comment]


def create_comment(
    author_id: UUID,
    content: str,
    parent_id: UUID | None = None,
) -> Comment:
    """Create a new comment with default values."""
    now = utcnow()
    return Comment(
        comment_id=uuid4(),
        author_id=author_id,
        content=content,
        parent_id=parent_id,
        created_at=now,
        updated_at=now,
    )

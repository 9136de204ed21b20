"""Comment mutations over one movie's comment store.

Each operation validates everything first and only then touches the store, so
a raised error always leaves the store as it was.
"""

from collections.abc import Sequence
from uuid import UUID

from reelthreads.auth.permissions import Caller, ensure_can_modify
from reelthreads.core.exceptions import InvalidInputError, NotFoundError

from .models import Comment, CommentStore, create_comment, utcnow
from .threads import ancestor_ids, delete_comment_and_descendants, descendant_ids


DEFAULT_MAX_LENGTH = 10000


def normalize_content(content: object, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Strip whitespace and validate comment content."""
    if not isinstance(content, str) or not content.strip():
        msg = "Comment is required."
        raise InvalidInputError(msg)

    content = content.strip()
    if len(content) > max_length:
        msg = f"Comment must be at most {max_length} characters."
        raise InvalidInputError(msg)
    return content


def find_comment(comments: Sequence[Comment], comment_id: UUID) -> Comment:
    for comment in comments:
        if comment.comment_id == comment_id:
            return comment
    raise NotFoundError("Comment not found")


def add_comment(
    comments: CommentStore,
    author_id: UUID,
    content: object,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Comment:
    """Append a top-level comment."""
    body = normalize_content(content, max_length)
    comment = create_comment(author_id=author_id, content=body)
    comments.append(comment)
    return comment


def reply_to_comment(
    comments: CommentStore,
    parent_id: UUID,
    author_id: UUID,
    content: object,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Comment:
    """Append a reply under an existing comment of the same store.

    Raises:
        NotFoundError: parent comment is not in the store
        InvalidInputError: empty content, or the parent chain is already cyclic
    """
    body = normalize_content(content, max_length)
    try:
        find_comment(comments, parent_id)
    except NotFoundError:
        raise NotFoundError("Parent comment not found") from None
    ancestor_ids(comments, parent_id)

    comment = create_comment(author_id=author_id, content=body, parent_id=parent_id)
    comments.append(comment)
    return comment


def edit_comment(
    comments: CommentStore,
    comment_id: UUID,
    caller: Caller,
    content: object,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Comment:
    """Replace a comment's content (owner or admin)."""
    body = normalize_content(content, max_length)
    comment = find_comment(comments, comment_id)
    ensure_can_modify(caller, comment.author_id)

    now = utcnow()
    comment.content = body
    comment.is_edited = True
    comment.edited_at = now
    comment.updated_at = now
    return comment


def delete_comment(
    comments: CommentStore,
    comment_id: UUID,
    caller: Caller,
) -> set[UUID]:
    """Cascade delete a comment and every reply below it (owner or admin).

    The store is updated in place; returns the IDs that were removed.
    """
    comment = find_comment(comments, comment_id)
    ensure_can_modify(caller, comment.author_id)

    removed = descendant_ids(comments, comment_id)
    comments[:] = delete_comment_and_descendants(comments, comment_id)
    return removed

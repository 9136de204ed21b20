"""Like/dislike ledger for comments.

A user holds at most one reaction per comment. Reacting clears the user from
both sets before adding to the requested one: the same kind twice is a no-op,
the opposite kind swaps. There is no toggle-off.
"""

from dataclasses import dataclass
from uuid import UUID

from reelthreads.core.exceptions import InvalidInputError

from .models import Comment, ReactionKind


@dataclass
class ReactionCounts:
    """Aggregated reaction counts for a comment."""

    comment_id: UUID
    likes: int = 0
    dislikes: int = 0

    def total(self) -> int:
        """Get total reaction count."""
        return self.likes + self.dislikes


def parse_reaction_kind(kind: ReactionKind | str) -> ReactionKind:
    """Coerce a reaction kind, rejecting anything but like/dislike."""
    try:
        return ReactionKind(kind)
    except ValueError:
        msg = "Invalid reaction type"
        raise InvalidInputError(msg) from None


def reaction_counts(comment: Comment) -> ReactionCounts:
    return ReactionCounts(
        comment_id=comment.comment_id,
        likes=len(comment.likes),
        dislikes=len(comment.dislikes),
    )


def user_reaction(comment: Comment, user_id: UUID) -> ReactionKind | None:
    """Reaction currently held by user_id on comment, if any."""
    if user_id in comment.likes:
        return ReactionKind.LIKE
    if user_id in comment.dislikes:
        return ReactionKind.DISLIKE
    return None


def react(
    comment: Comment, user_id: UUID, kind: ReactionKind | str
) -> ReactionCounts:
    """Apply a reaction and return the resulting counts.

    Raises:
        InvalidInputError: kind is not like/dislike (comment left untouched)
    """
    reaction = parse_reaction_kind(kind)

    comment.likes.discard(user_id)
    comment.dislikes.discard(user_id)

    if reaction is ReactionKind.LIKE:
        comment.likes.add(user_id)
    else:
        comment.dislikes.add(user_id)

    return reaction_counts(comment)

"""Tests for the comment like/dislike ledger."""

from uuid import uuid4

import pytest

from reelthreads.comments.models import ReactionKind
from reelthreads.comments.reactions import (
    ReactionCounts,
    parse_reaction_kind,
    react,
    reaction_counts,
    user_reaction,
)
from reelthreads.core.exceptions import InvalidInputError


@pytest.fixture
def comment(make_comment):
    return make_comment(1)


class TestParseReactionKind:
    """Tests for parse_reaction_kind."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("like", ReactionKind.LIKE),
            ("dislike", ReactionKind.DISLIKE),
            (ReactionKind.LIKE, ReactionKind.LIKE),
        ],
    )
    def test_valid(self, value, expected) -> None:
        assert parse_reaction_kind(value) is expected

    @pytest.mark.parametrize("value", ["love", "", "LIKE", None])
    def test_invalid(self, value) -> None:
        """Anything but like/dislike is rejected."""
        with pytest.raises(InvalidInputError, match="Invalid reaction type"):
            parse_reaction_kind(value)


class TestReact:
    """Tests for react."""

    def test_like(self, comment, user_id) -> None:
        counts = react(comment, user_id, "like")

        assert counts == ReactionCounts(comment.comment_id, likes=1, dislikes=0)
        assert user_reaction(comment, user_id) is ReactionKind.LIKE

    def test_same_kind_twice_is_noop(self, comment, user_id) -> None:
        """Reacting twice with the same kind does not toggle off."""
        react(comment, user_id, ReactionKind.LIKE)
        counts = react(comment, user_id, ReactionKind.LIKE)

        assert counts.likes == 1
        assert counts.dislikes == 0
        assert comment.likes == {user_id}

    def test_opposite_kind_swaps(self, comment, user_id) -> None:
        """Disliking after liking moves the user between sets."""
        react(comment, user_id, "like")
        counts = react(comment, user_id, "dislike")

        assert (counts.likes, counts.dislikes) == (0, 1)
        assert user_id not in comment.likes
        assert user_id in comment.dislikes

    def test_users_never_in_both_sets(self, comment) -> None:
        """After any sequence the like and dislike sets are disjoint."""
        users = [uuid4() for _ in range(3)]
        for kind in ("like", "dislike", "like", "like", "dislike"):
            for user in users:
                react(comment, user, kind)
                assert not comment.likes & comment.dislikes

        assert comment.dislikes == set(users)

    def test_invalid_kind_leaves_comment_untouched(self, comment, user_id) -> None:
        """A rejected reaction does not clear an existing one."""
        react(comment, user_id, "like")

        with pytest.raises(InvalidInputError):
            react(comment, user_id, "meh")

        assert comment.likes == {user_id}
        assert comment.dislikes == set()

    def test_counts_independent_users(self, comment) -> None:
        react(comment, uuid4(), "like")
        react(comment, uuid4(), "like")
        react(comment, uuid4(), "dislike")

        counts = reaction_counts(comment)
        assert (counts.likes, counts.dislikes) == (2, 1)
        assert counts.total() == 3


class TestUserReaction:
    """Tests for user_reaction."""

    def test_none_when_not_reacted(self, comment, user_id) -> None:
        assert user_reaction(comment, user_id) is None

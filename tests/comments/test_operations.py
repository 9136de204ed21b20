"""Tests for comment mutations.

Covers:
- normalize_content
- add_comment / reply_to_comment
- edit_comment (owner/admin)
- delete_comment (cascade, owner/admin)
"""

from uuid import UUID, uuid4

import pytest

from reelthreads.auth.permissions import Caller
from reelthreads.comments.operations import (
    add_comment,
    delete_comment,
    edit_comment,
    find_comment,
    normalize_content,
    reply_to_comment,
)
from reelthreads.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError


AUTHOR = UUID(int=1000)


@pytest.fixture
def author() -> Caller:
    """Author of every comment built by make_comment."""
    return Caller(user_id=AUTHOR)


@pytest.fixture
def comments(make_comment):
    """1 <- 2 <- 3, plus an unrelated root 4."""
    return [
        make_comment(1),
        make_comment(2, parent=1),
        make_comment(3, parent=2),
        make_comment(4),
    ]


class TestNormalizeContent:
    """Tests for normalize_content."""

    def test_strips_whitespace(self) -> None:
        assert normalize_content("  great film \n") == "great film"

    @pytest.mark.parametrize("content", ["", "   ", "\n\t", None, 42])
    def test_rejects_empty_or_non_text(self, content) -> None:
        with pytest.raises(InvalidInputError, match="Comment is required"):
            normalize_content(content)

    def test_rejects_too_long(self) -> None:
        with pytest.raises(InvalidInputError, match="at most 5"):
            normalize_content("abcdef", max_length=5)

    def test_length_checked_after_strip(self) -> None:
        assert normalize_content("  abcde  ", max_length=5) == "abcde"


class TestAddComment:
    """Tests for add_comment and reply_to_comment."""

    def test_add_top_level(self, user_id) -> None:
        store = []
        comment = add_comment(store, user_id, " hello ")

        assert store == [comment]
        assert comment.content == "hello"
        assert comment.parent_id is None
        assert comment.author_id == user_id
        assert comment.likes == set()
        assert not comment.is_edited

    def test_empty_body_leaves_store_unchanged(self, comments, user_id) -> None:
        with pytest.raises(InvalidInputError):
            add_comment(comments, user_id, "  ")
        assert len(comments) == 4

    def test_reply(self, comments, user_id) -> None:
        reply = reply_to_comment(comments, UUID(int=3), user_id, "agreed")

        assert reply.parent_id == UUID(int=3)
        assert comments[-1] is reply

    def test_reply_to_missing_parent(self, comments, user_id) -> None:
        with pytest.raises(NotFoundError, match="Parent comment not found"):
            reply_to_comment(comments, uuid4(), user_id, "hello?")
        assert len(comments) == 4

    def test_reply_into_cycle_rejected(self, make_comment, user_id) -> None:
        """A corrupted cyclic chain refuses new replies."""
        store = [make_comment(1, parent=2), make_comment(2, parent=1)]
        with pytest.raises(InvalidInputError, match="cycle"):
            reply_to_comment(store, UUID(int=1), user_id, "loop")
        assert len(store) == 2


class TestEditComment:
    """Tests for edit_comment."""

    def test_owner_can_edit(self, comments, author) -> None:
        comment = edit_comment(comments, UUID(int=2), author, " updated ")

        assert comment.content == "updated"
        assert comment.is_edited
        assert comment.edited_at is not None
        assert comment.updated_at == comment.edited_at

    def test_admin_can_edit(self, comments, admin_caller) -> None:
        comment = edit_comment(comments, UUID(int=2), admin_caller, "moderated")
        assert comment.content == "moderated"

    def test_other_user_forbidden(self, comments, other_caller) -> None:
        with pytest.raises(ForbiddenError):
            edit_comment(comments, UUID(int=2), other_caller, "hijack")

        comment = find_comment(comments, UUID(int=2))
        assert comment.content == "comment 2"
        assert not comment.is_edited

    def test_missing_comment(self, comments, author) -> None:
        with pytest.raises(NotFoundError, match="Comment not found"):
            edit_comment(comments, uuid4(), author, "text")

    def test_empty_content(self, comments, author) -> None:
        with pytest.raises(InvalidInputError):
            edit_comment(comments, UUID(int=2), author, "")


class TestDeleteComment:
    """Tests for delete_comment."""

    def test_owner_cascade(self, comments, author) -> None:
        removed = delete_comment(comments, UUID(int=1), author)

        assert removed == {UUID(int=1), UUID(int=2), UUID(int=3)}
        assert [c.comment_id for c in comments] == [UUID(int=4)]

    def test_admin_can_delete(self, comments, admin_caller) -> None:
        removed = delete_comment(comments, UUID(int=3), admin_caller)

        assert removed == {UUID(int=3)}
        assert len(comments) == 3

    def test_other_user_forbidden(self, comments, other_caller) -> None:
        with pytest.raises(ForbiddenError):
            delete_comment(comments, UUID(int=1), other_caller)
        assert len(comments) == 4

    def test_missing_comment(self, comments, author) -> None:
        with pytest.raises(NotFoundError):
            delete_comment(comments, uuid4(), author)

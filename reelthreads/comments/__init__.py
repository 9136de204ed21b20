"""Comment system module.

Provides threaded movie comments with:
- Thread building from a flat parent-pointer store
- Cascade delete of whole subtrees
- Like/dislike reactions, one per user
"""

from .models import Comment, CommentNode, CommentStore, ReactionKind, create_comment
from .reactions import ReactionCounts, react
from .threads import build_forest, delete_comment_and_descendants, descendant_ids


__all__ = [
    "Comment",
    "CommentNode",
    "CommentStore",
    "ReactionCounts",
    "ReactionKind",
    "build_forest",
    "create_comment",
    "delete_comment_and_descendants",
    "descendant_ids",
    "react",
]

"""Thread building and subtree resolution over a flat comment store.

Both algorithms address comments by ID only, so they stay total on stores
with dangling parents or (corrupted) parent cycles.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from uuid import UUID

from reelthreads.core.exceptions import InvalidInputError, NotFoundError

from .models import Comment, CommentNode


def build_forest(comments: Sequence[Comment]) -> list[CommentNode]:
    """Convert a flat comment list into a forest of reply trees.

    One pass indexes a fresh node per comment, a second pass links each node
    under its parent in input order. Comments whose parent is missing from
    the store (or is the comment itself) become roots, so nothing is dropped.
    Sibling and root order equal input order.
    """
    nodes = [CommentNode(comment=comment) for comment in comments]
    by_id: dict[UUID, CommentNode] = {}
    for node in nodes:
        by_id.setdefault(node.comment_id, node)

    roots: list[CommentNode] = []
    for node in nodes:
        parent_id = node.comment.parent_id
        parent = None
        if parent_id is not None and parent_id != node.comment_id:
            parent = by_id.get(parent_id)

        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)

    # A cycle member never hangs below a root, so root subtrees are acyclic
    if len(nodes) != sum(root.size() for root in roots):
        _promote_cycles(nodes, by_id, roots)

    return roots


def _mark_subtree(node: CommentNode, reachable: set[int]) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if id(current) in reachable:
            continue
        reachable.add(id(current))
        stack.extend(current.replies)


def _promote_cycles(
    nodes: list[CommentNode],
    by_id: dict[UUID, CommentNode],
    roots: list[CommentNode],
) -> None:
    """Cut every parent cycle open by turning one member into a root.

    Nodes trapped in a cycle (or hanging below one) are unreachable from the
    roots. For each, walk up parent links until a node repeats; that node sits
    on the cycle and is detached from its parent and appended to the roots.
    """
    reachable: set[int] = set()
    for root in roots:
        _mark_subtree(root, reachable)

    for node in nodes:
        if id(node) in reachable:
            continue

        seen: set[int] = set()
        current = node
        while id(current) not in seen:
            seen.add(id(current))
            current = by_id[current.comment.parent_id]

        parent = by_id[current.comment.parent_id]
        parent.replies = [reply for reply in parent.replies if reply is not current]
        roots.append(current)
        _mark_subtree(current, reachable)


def iter_forest(forest: Iterable[CommentNode]) -> Iterable[CommentNode]:
    """Yield every node of a forest depth-first, parents before replies."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.replies))


def descendant_ids(comments: Sequence[Comment], root_id: UUID) -> set[UUID]:
    """Collect root_id and the IDs of every comment transitively below it.

    Uses an explicit stack with a visited check so a corrupted, cyclic parent
    graph still terminates with the closure reached so far.
    """
    children_by_parent: dict[UUID | None, list[UUID]] = defaultdict(list)
    for comment in comments:
        children_by_parent[comment.parent_id].append(comment.comment_id)

    found: set[UUID] = set()
    stack = [root_id]
    while stack:
        current = stack.pop()
        if current in found:
            continue
        found.add(current)
        stack.extend(children_by_parent.get(current, ()))

    return found


def delete_comment_and_descendants(
    comments: Sequence[Comment], target_id: UUID
) -> list[Comment]:
    """Return the store without target_id and its whole subtree.

    Relative order of the remaining comments is preserved.

    Raises:
        NotFoundError: target_id is not in the store
    """
    if not any(comment.comment_id == target_id for comment in comments):
        raise NotFoundError("Comment not found")

    doomed = descendant_ids(comments, target_id)
    return [comment for comment in comments if comment.comment_id not in doomed]


def ancestor_ids(comments: Sequence[Comment], comment_id: UUID) -> list[UUID]:
    """Parent chain of a comment, nearest first.

    The walk stops at a root or at a dangling parent.

    Raises:
        NotFoundError: comment_id is not in the store
        InvalidInputError: the chain loops back on itself
    """
    by_id = {comment.comment_id: comment for comment in comments}
    if comment_id not in by_id:
        raise NotFoundError("Comment not found")

    chain: list[UUID] = []
    seen = {comment_id}
    parent_id = by_id[comment_id].parent_id
    while parent_id is not None and parent_id in by_id:
        if parent_id in seen:
            msg = "Comment thread contains a cycle"
            raise InvalidInputError(msg)
        seen.add(parent_id)
        chain.append(parent_id)
        parent_id = by_id[parent_id].parent_id

    return chain

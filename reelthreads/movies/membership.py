"""XOR membership toggles for watchlists and movie likes.

Unlike comment reactions, toggling twice restores the original state.
"""

from collections.abc import Set
from uuid import UUID


def toggle(members: Set[UUID], member_id: UUID) -> tuple[set[UUID], bool]:
    """Return (new_members, added) without mutating members.

    Examples:
        >>> movie = UUID(int=7)
        >>> toggle(set(), movie)
        ({UUID('00000000-0000-0000-0000-000000000007')}, True)
        >>> toggle({movie}, movie)
        (set(), False)
    """
    if member_id in members:
        return set(members) - {member_id}, False
    return set(members) | {member_id}, True

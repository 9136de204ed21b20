"""Caller identity and ownership checks.

Authentication happens outside this package. Every mutating operation receives
an already authenticated Caller; the only authorization decided here is the
owner-or-admin rule for editing and deleting comments, since it depends on
comment authorship.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from reelthreads.core.exceptions import ForbiddenError


class UserRole(str, Enum):
    """Catalog roles."""

    USER = "user"
    ADMIN = "admin"


def is_admin(role: UserRole | str) -> bool:
    """Check if role is ADMIN."""
    if isinstance(role, str):
        return role == UserRole.ADMIN.value
    return role == UserRole.ADMIN


@dataclass(frozen=True)
class Caller:
    """Authenticated user performing an operation."""

    user_id: UUID
    is_admin: bool = False

    @classmethod
    def from_role(cls, user_id: UUID, role: UserRole | str) -> "Caller":
        """Build a caller from a role claim (unknown roles are plain users)."""
        return cls(user_id=user_id, is_admin=is_admin(role))

    @property
    def role(self) -> UserRole:
        return UserRole.ADMIN if self.is_admin else UserRole.USER


def can_modify(caller: Caller, owner_id: UUID) -> bool:
    """Check if caller may edit or delete a resource owned by owner_id.

    Examples:
        >>> owner = UUID(int=1)
        >>> can_modify(Caller(owner), owner)
        True
        >>> can_modify(Caller(UUID(int=2), is_admin=True), owner)
        True
        >>> can_modify(Caller(UUID(int=2)), owner)
        False
    """
    return caller.is_admin or caller.user_id == owner_id


def ensure_can_modify(caller: Caller, owner_id: UUID) -> None:
    """Raise ForbiddenError unless caller is the owner or an admin."""
    if not can_modify(caller, owner_id):
        raise ForbiddenError

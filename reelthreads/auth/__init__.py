"""Caller identity and owner-or-admin checks."""

from reelthreads.auth.permissions import (
    Caller,
    UserRole,
    can_modify,
    ensure_can_modify,
    is_admin,
)


__all__ = [
    "Caller",
    "UserRole",
    "can_modify",
    "ensure_can_modify",
    "is_admin",
]

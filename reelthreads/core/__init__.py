# Core infrastructure
from reelthreads.core.context import (
    OperationContext,
    clear_context,
    get_context,
    get_movie_id,
    get_operation_id,
    get_user_id,
    set_movie_id,
    set_operation_id,
    set_user_id,
)
from reelthreads.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ReelThreadsError,
)
from reelthreads.core.logging import configure_structlog, get_logger


__all__ = [
    "ConflictError",
    "ForbiddenError",
    "InvalidInputError",
    "NotFoundError",
    "OperationContext",
    "ReelThreadsError",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_movie_id",
    "get_operation_id",
    "get_user_id",
    "set_movie_id",
    "set_operation_id",
    "set_user_id",
]

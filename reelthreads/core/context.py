"""Operation context management using contextvars.

Each engagement operation runs with a unique operation ID plus the caller and
movie it targets. Log records emitted anywhere below the operation pick these
values up without passing them explicitly.
"""

from contextvars import ContextVar
from typing import Any
from uuid import UUID, uuid4


# Context variables for operation tracking
operation_id_var: ContextVar[str] = ContextVar("operation_id", default="")
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
movie_id_var: ContextVar[str | None] = ContextVar("movie_id", default=None)


def generate_operation_id() -> str:
    """Generate a new unique operation ID."""
    return str(uuid4())


def get_operation_id() -> str:
    """Get the current operation ID."""
    return operation_id_var.get()


def set_operation_id(operation_id: str | None = None) -> str:
    """Set the operation ID for the current context.

    Args:
        operation_id: Optional operation ID. If not provided, generates a new one.

    Returns:
        The operation ID that was set.
    """
    oid = operation_id or generate_operation_id()
    operation_id_var.set(oid)
    return oid


def get_user_id() -> str | None:
    """Get the current user ID."""
    return user_id_var.get()


def set_user_id(user_id: str | UUID | None) -> None:
    """Set the user ID for the current context."""
    user_id_var.set(str(user_id) if user_id is not None else None)


def get_movie_id() -> str | None:
    """Get the current movie ID."""
    return movie_id_var.get()


def set_movie_id(movie_id: str | UUID | None) -> None:
    """Set the movie ID for the current context."""
    movie_id_var.set(str(movie_id) if movie_id is not None else None)


def get_context() -> dict[str, Any]:
    """Get all context variables as a dictionary.

    Returns:
        Dictionary with operation_id, user_id and movie_id (unset ones omitted).
    """
    context: dict[str, Any] = {}

    operation_id = get_operation_id()
    if operation_id:
        context["operation_id"] = operation_id

    user_id = get_user_id()
    if user_id:
        context["user_id"] = user_id

    movie_id = get_movie_id()
    if movie_id:
        context["movie_id"] = movie_id

    return context


def clear_context() -> None:
    """Clear all context variables."""
    operation_id_var.set("")
    user_id_var.set(None)
    movie_id_var.set(None)


class OperationContext:
    """Context manager for operation scope.

    Usage:
        with OperationContext(user_id=caller.user_id, movie_id=movie_id):
            logger.info("comment_added")  # Will include user_id, movie_id
    """

    def __init__(
        self,
        operation_id: str | None = None,
        user_id: str | UUID | None = None,
        movie_id: str | UUID | None = None,
    ) -> None:
        self.operation_id = operation_id
        self.user_id = user_id
        self.movie_id = movie_id
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "OperationContext":
        """Enter context and set variables."""
        self._tokens["operation_id"] = operation_id_var.set(
            self.operation_id or generate_operation_id()
        )

        if self.user_id is not None:
            self._tokens["user_id"] = user_id_var.set(str(self.user_id))

        if self.movie_id is not None:
            self._tokens["movie_id"] = movie_id_var.set(str(self.movie_id))

        return self

    def __exit__(self, *_: object) -> None:
        """Exit context and restore previous values."""
        for var_name, token in self._tokens.items():
            if var_name == "operation_id":
                operation_id_var.reset(token)
            elif var_name == "user_id":
                user_id_var.reset(token)
            elif var_name == "movie_id":
                movie_id_var.reset(token)
        self._tokens.clear()

"""Error kinds surfaced by the engagement core.

Every error carries a human readable message and a stable machine code so a
boundary layer can map it to its own transport (HTTP status, RPC code, ...).
"""


class ReelThreadsError(Exception):
    """Base engagement error."""

    def __init__(self, message: str, code: str = "reelthreads_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(ReelThreadsError):
    """Movie, comment or rating not present in the given state."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, "not_found")


class InvalidInputError(ReelThreadsError):
    """Input rejected before any mutation took place."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "invalid_input")


class ForbiddenError(ReelThreadsError):
    """Caller is neither the owner nor an admin."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, "forbidden")


class ConflictError(ReelThreadsError):
    """A concurrent write won the race. Raised by storage, never by the core."""

    def __init__(self, message: str = "Concurrent update conflict"):
        super().__init__(message, "conflict")

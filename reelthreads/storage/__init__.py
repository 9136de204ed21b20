"""Storage collaborators for movie aggregates."""

from reelthreads.storage.memory import InMemoryMovieStore


__all__ = ["InMemoryMovieStore"]

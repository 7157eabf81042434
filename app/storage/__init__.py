"""In-memory storage primitives shared by the repositories."""

from .memory import InMemoryStore, NotFoundError

__all__ = ["InMemoryStore", "NotFoundError"]

"""In-memory repository implementations for testing."""

from .base import FaultInjectionMixin
from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "FaultInjectionMixin",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]

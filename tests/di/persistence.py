"""Mock persistence providers for testing."""

from dishka import Scope, provide

from blog.domain.repository import CommentRepository, PostRepository, UserRepository
from blog.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
)
from blog.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so that every request against one container sees the
    same data; each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

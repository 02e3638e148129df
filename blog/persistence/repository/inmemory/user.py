"""In-memory user repository for testing."""

from typing import Optional, Sequence

from blog.domain.model.user import User
from blog.domain.repository.user import UserRepository
from blog.domain.value import UserId

from .base import FaultInjectionMixin


class InMemoryUserRepository(FaultInjectionMixin, UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        self._check_fault("find_by_id")
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

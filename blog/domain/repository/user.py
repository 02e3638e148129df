"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from blog.domain.model.user import User
from blog.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once.

        Args:
            user_ids: User IDs to load

        Returns:
            Found users (order not guaranteed)
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

"""Authorization predicate for content moderation."""

import logfire

from blog.domain.repository import UserRepository
from blog.domain.value import UserId

from .base import Service


class AuthorizationService(Service):
    """Decides whether a user may modify content owned by someone else."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize authorization service.

        Args:
            user_repository: User repository (for role lookups)
        """
        self.user_repository = user_repository

    async def is_author_or_admin(self, user_id: UserId, author_id: UserId) -> bool:
        """Check whether the acting user is the author or an admin.

        Args:
            user_id: Acting user
            author_id: Owner of the content

        Returns:
            True if the user may edit or delete the content
        """
        if user_id == author_id:
            return True

        user = await self.user_repository.find_by_id(user_id)
        allowed = user is not None and user.is_admin
        logfire.info(
            "Non-author access check",
            user_id=str(user_id),
            author_id=str(author_id),
            allowed=allowed,
        )
        return allowed

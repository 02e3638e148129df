"""User entity.

Users are provisioned by the identity provider; the blog only reads them
to display authors and to resolve elevated privileges.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.value import UserId, UserRole, Username


class User(DomainModel):
    """User entity."""

    id: UserId
    username: Username
    avatar_url: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        """Whether the user holds elevated privileges."""
        return self.role == UserRole.ADMIN

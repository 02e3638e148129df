"""Likes on posts and comments."""

from datetime import datetime

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.value import UserId


class Like(DomainModel):
    """A single user's like. At most one per user per post or comment."""

    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

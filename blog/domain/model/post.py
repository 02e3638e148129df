"""Post aggregate root.

Posts own the denormalized ``comment_count`` that the comment thread
keeps in step on every create and delete. ``views`` and ``likes`` are
likewise changed only through their own atomic store operations.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.model.like import Like
from blog.domain.value import PostId, PostStatus, Slug, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    slug: Slug
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    excerpt: Optional[str] = Field(default=None, max_length=300)
    author_id: UserId
    tags: list[str] = Field(default_factory=list)
    category: str = Field(default="General", max_length=50)
    cover_image: str = ""
    status: PostStatus = PostStatus.DRAFT
    views: int = Field(default=0, ge=0)
    likes: list[Like] = Field(default_factory=list)
    comment_count: int = Field(default=0, ge=0)
    reading_time: int = Field(default=1, ge=1)  # Minutes
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: UserId) -> bool:
        """Check whether a user has liked this post."""
        return any(like.user_id == user_id for like in self.likes)

"""Comment entity.

Comments are threaded discussions on posts with unlimited depth.
The thread structure is stored denormalized on both sides: every reply
points at its parent through ``parent_id`` and every parent lists its
direct children in ``replies``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.model.like import Like
from blog.domain.value import CommentId, PostId, UserId

COMMENT_MIN_LENGTH = 1
COMMENT_MAX_LENGTH = 1000


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level), never changes
    - replies: Ordered ids of direct children, kept in step with parent_id
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=COMMENT_MIN_LENGTH, max_length=COMMENT_MAX_LENGTH)
    parent_id: Optional[CommentId] = None
    replies: list[CommentId] = Field(default_factory=list)
    likes: list[Like] = Field(default_factory=list)
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def like_count(self) -> int:
        """Number of users who like this comment."""
        return len(self.likes)

    @property
    def reply_count(self) -> int:
        """Number of direct replies."""
        return len(self.replies)

    @property
    def is_top_level(self) -> bool:
        """Whether the comment is attached directly to the post."""
        return self.parent_id is None

    def is_liked_by(self, user_id: UserId) -> bool:
        """Check whether a user has liked this comment."""
        return any(like.user_id == user_id for like in self.likes)

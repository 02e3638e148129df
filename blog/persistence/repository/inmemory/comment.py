"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from blog.domain.model.comment import Comment, Like
from blog.domain.repository.comment import CommentRepository
from blog.domain.value import CommentId, PostId, UserId

from .base import FaultInjectionMixin


class InMemoryCommentRepository(FaultInjectionMixin, CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Each method completes without awaiting, so it is atomic with respect
    to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        super().__init__()
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        self._check_fault("find_by_id")
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments, keeping the order of ``comment_ids``."""
        self._check_fault("find_by_ids")
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find top-level comments of a post, oldest first."""
        self._check_fault("find_top_level_by_post")
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments[offset : offset + limit]

    async def count_top_level_by_post(self, post_id: PostId) -> int:
        """Count top-level comments of a post."""
        self._check_fault("count_top_level_by_post")
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        )

    async def count_by_post(self, post_id: PostId) -> int:
        """Count all comments of a post."""
        self._check_fault("count_by_post")
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments by a specific author, newest first."""
        self._check_fault("find_by_author")
        comments = [c for c in self._comments.values() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count comments by a specific author."""
        self._check_fault("count_by_author")
        return sum(1 for c in self._comments.values() if c.author_id == author_id)

    async def find_child_ids(self, parent_id: CommentId) -> list[CommentId]:
        """Find ids of comments pointing at the parent."""
        self._check_fault("find_child_ids")
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        children.sort(key=lambda c: c.created_at)
        return [c.id for c in children]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._check_fault("save")
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment; True if it existed."""
        self._check_fault("delete")
        return self._comments.pop(comment_id, None) is not None

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment of a post."""
        self._check_fault("delete_by_post")
        doomed = [cid for cid, c in self._comments.items() if c.post_id == post_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)

    async def push_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Append the reply id to the parent's replies (once)."""
        self._check_fault("push_reply")
        parent = self._comments.get(parent_id)
        if parent and reply_id not in parent.replies:
            self._comments[parent_id] = parent.model_copy(
                update={"replies": [*parent.replies, reply_id]}
            )

    async def pull_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Remove the reply id from the parent's replies."""
        self._check_fault("pull_reply")
        parent = self._comments.get(parent_id)
        if parent and reply_id in parent.replies:
            self._comments[parent_id] = parent.model_copy(
                update={"replies": [r for r in parent.replies if r != reply_id]}
            )

    async def add_like(self, comment_id: CommentId, like: Like) -> None:
        """Add a like unless the user already has one."""
        self._check_fault("add_like")
        comment = self._comments.get(comment_id)
        if comment and not comment.is_liked_by(like.user_id):
            self._comments[comment_id] = comment.model_copy(
                update={"likes": [*comment.likes, like]}
            )

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove a user's like; True if one existed."""
        self._check_fault("remove_like")
        comment = self._comments.get(comment_id)
        if comment is None or not comment.is_liked_by(user_id):
            return False
        self._comments[comment_id] = comment.model_copy(
            update={"likes": [like for like in comment.likes if like.user_id != user_id]}
        )
        return True

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content and mark the comment as edited."""
        self._check_fault("update_content")
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "edited_at": edited_at,
                "updated_at": edited_at,
            }
        )
        self._comments[comment_id] = updated
        return updated

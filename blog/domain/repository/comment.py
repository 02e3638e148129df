"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from blog.domain.model.comment import Comment, Like
from blog.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Every method touches a single comment record and is atomic on its own.
    Sequences spanning several records (create, cascade delete) are
    composed by the domain service.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments at once.

        Args:
            comment_ids: Comment IDs to load

        Returns:
            Found comments in the order of ``comment_ids``; missing ids are skipped
        """
        pass

    @abstractmethod
    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a post, oldest first.

        Args:
            post_id: The post ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of top-level comments in chronological order
        """
        pass

    @abstractmethod
    async def count_top_level_by_post(self, post_id: PostId) -> int:
        """Count top-level comments of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of top-level comments
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count all comments of a post at any depth.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments by a specific author, newest first.

        Args:
            author_id: The author's user ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments by the author
        """
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count comments by a specific author.

        Args:
            author_id: The author's user ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def find_child_ids(self, parent_id: CommentId) -> List[CommentId]:
        """Find ids of comments whose parent_id is the given comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of child comment IDs
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Remove a comment record.

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if this call removed the record, False if it was already gone
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove every comment of a post, with their likes.

        Args:
            post_id: The post whose discussion is removed

        Returns:
            Number of comments removed
        """
        pass

    @abstractmethod
    async def push_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Atomically append a reply id to the parent's replies.

        No-op if the parent no longer exists.

        Args:
            parent_id: The parent comment ID
            reply_id: The reply comment ID
        """
        pass

    @abstractmethod
    async def pull_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Atomically remove a reply id from the parent's replies.

        No-op if the parent no longer exists or does not list the reply.

        Args:
            parent_id: The parent comment ID
            reply_id: The reply comment ID
        """
        pass

    @abstractmethod
    async def add_like(self, comment_id: CommentId, like: Like) -> None:
        """Atomically add a like unless the user already has one.

        Args:
            comment_id: The comment ID
            like: The like to add
        """
        pass

    @abstractmethod
    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Atomically remove a user's like.

        Args:
            comment_id: The comment ID
            user_id: The user whose like is removed

        Returns:
            True if a like was removed, False if none existed
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace a comment's content and mark it as edited.

        Args:
            comment_id: ID of the comment to update
            content: New content
            edited_at: Edit timestamp

        Returns:
            Updated comment, or None if the comment doesn't exist
        """
        pass

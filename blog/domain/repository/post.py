"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from blog.domain.model.like import Like
from blog.domain.model.post import Post
from blog.domain.value import PostFilter, PostId, PostSort, PostStatus, Slug, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts at once.

        Args:
            post_ids: Post IDs to load

        Returns:
            Found posts (order not guaranteed)
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether a slug is already taken.

        Args:
            slug: Slug to check

        Returns:
            True if any post uses the slug
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        sort: PostSort = PostSort.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts matching the filter.

        Args:
            filters: Status, category, tag and author criteria
            sort: Listing order; ties are broken newest first
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the filter.

        Args:
            filters: Status, category, tag and author criteria

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def find_categories(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> List[str]:
        """Distinct categories in use, sorted."""
        pass

    @abstractmethod
    async def find_tags(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> List[str]:
        """Distinct tags in use, sorted."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        On update the stored ``comment_count``, ``views`` and ``likes`` are
        kept; they change only through their own operations.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post.

        Args:
            post_id: The post ID

        Returns:
            True if this call removed the post
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to the comment count (floored at 0).

        Uses a store-level increment to avoid race conditions.
        No-op if the post doesn't exist.

        Args:
            post_id: The post ID
            delta: Amount to add (negative to decrement)
        """
        pass

    @abstractmethod
    async def increment_views(self, post_id: PostId) -> None:
        """Atomically add one view. No-op if the post doesn't exist."""
        pass

    @abstractmethod
    async def add_like(self, post_id: PostId, like: Like) -> None:
        """Add a like unless the user already likes the post."""
        pass

    @abstractmethod
    async def remove_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like.

        Returns:
            True if a like was removed
        """
        pass

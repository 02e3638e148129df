"""In-memory post repository for testing."""

from typing import Optional, Sequence

from blog.domain.model.like import Like
from blog.domain.model.post import Post
from blog.domain.repository.post import PostRepository
from blog.domain.value import PostFilter, PostId, PostSort, PostStatus, Slug, UserId

from .base import FaultInjectionMixin


def _matches(post: Post, filters: PostFilter) -> bool:
    return (
        (filters.status is None or post.status == filters.status)
        and (filters.category is None or post.category == filters.category)
        and (filters.tag is None or filters.tag in post.tags)
        and (filters.author_id is None or post.author_id == filters.author_id)
    )


class InMemoryPostRepository(FaultInjectionMixin, PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        self._check_fault("find_by_id")
        return self._posts.get(post_id)

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Find several posts at once."""
        self._check_fault("find_by_ids")
        return [self._posts[pid] for pid in post_ids if pid in self._posts]

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken by any post."""
        return any(post.slug == slug for post in self._posts.values())

    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        sort: PostSort = PostSort.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts matching the filter in the requested order."""
        self._check_fault("find_all")
        posts = [p for p in self._posts.values() if _matches(p, filters)]
        # Sorts are stable, so newest first breaks ties
        posts.sort(key=lambda p: p.created_at, reverse=True)
        if sort == PostSort.OLDEST:
            posts.reverse()
        elif sort == PostSort.POPULAR:
            posts.sort(key=lambda p: p.views, reverse=True)
        elif sort == PostSort.LIKES:
            posts.sort(key=lambda p: p.like_count, reverse=True)
        return posts[offset : offset + limit]

    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the filter."""
        return sum(1 for p in self._posts.values() if _matches(p, filters))

    async def find_categories(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> list[str]:
        """Distinct categories in use, sorted."""
        return sorted(
            {
                p.category
                for p in self._posts.values()
                if _matches(p, PostFilter(status=status))
            }
        )

    async def find_tags(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> list[str]:
        """Distinct tags in use, sorted."""
        return sorted(
            {
                tag
                for p in self._posts.values()
                if _matches(p, PostFilter(status=status))
                for tag in p.tags
            }
        )

    async def save(self, post: Post) -> Post:
        """Save or update a post (stored counters and likes are kept on update)."""
        self._check_fault("save")
        existing = self._posts.get(post.id)
        if existing:
            post = post.model_copy(
                update={
                    "comment_count": existing.comment_count,
                    "views": existing.views,
                    "likes": existing.likes,
                }
            )
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post; True if it existed."""
        self._check_fault("delete")
        return self._posts.pop(post_id, None) is not None

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Add ``delta`` to the comment count, never below 0."""
        self._check_fault("increment_comment_count")
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"comment_count": max(post.comment_count + delta, 0)}
            )

    async def increment_views(self, post_id: PostId) -> None:
        """Add one view."""
        self._check_fault("increment_views")
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(update={"views": post.views + 1})

    async def add_like(self, post_id: PostId, like: Like) -> None:
        """Add a like unless the user already has one."""
        self._check_fault("add_like")
        post = self._posts.get(post_id)
        if post and not post.is_liked_by(like.user_id):
            self._posts[post_id] = post.model_copy(update={"likes": [*post.likes, like]})

    async def remove_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like; True if one existed."""
        self._check_fault("remove_like")
        post = self._posts.get(post_id)
        if post is None or not post.is_liked_by(user_id):
            return False
        self._posts[post_id] = post.model_copy(
            update={"likes": [like for like in post.likes if like.user_id != user_id]}
        )
        return True

"""Post domain service."""

import math
import re
from datetime import datetime
from typing import Any, Iterable

import logfire

from blog.domain.error import NotAuthorizedError, NotFoundError
from blog.domain.model.like import Like
from blog.domain.model.post import Post
from blog.domain.repository import PostRepository
from blog.domain.value import (
    PageRequest,
    Pagination,
    PostFilter,
    PostId,
    PostSort,
    PostStatus,
    Slug,
    UserId,
)

from .authorization_service import AuthorizationService
from .base import Service

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150

# Fields an author may change after creation
EDITABLE_FIELDS = frozenset(
    {"title", "content", "excerpt", "tags", "category", "cover_image", "status"}
)


class PostService(Service):
    """Domain service for post operations.

    Also acts as the post registry for the comment thread: existence checks
    and comment counter updates go through here.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        authorization_service: AuthorizationService,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            authorization_service: Author-or-admin check for edits and deletes
        """
        self.post_repository = post_repository
        self.authorization_service = authorization_service

    async def _authorize(self, action: str, post: Post, user_id: UserId) -> None:
        allowed = await self.authorization_service.is_author_or_admin(
            user_id, post.author_id
        )
        if not allowed:
            logfire.warn(
                "Post access denied",
                action=action,
                post_id=str(post.id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError(action, "post", str(post.id), str(user_id))

    async def save_post(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def require_post(self, post_id: PostId) -> Post:
        """Get a post by ID or fail.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def get_posts_by_ids(self, post_ids: Iterable[PostId]) -> dict[PostId, Post]:
        """Batch load posts, keyed by ID. Unknown IDs are absent."""
        unique_ids = list(dict.fromkeys(post_ids))
        if not unique_ids:
            return {}
        posts = await self.post_repository.find_by_ids(unique_ids)
        return {post.id: post for post in posts}

    async def list_posts(
        self,
        page: PageRequest,
        filters: PostFilter = PostFilter(),
        sort: PostSort = PostSort.NEWEST,
    ) -> tuple[list[Post], Pagination]:
        """Get a page of posts.

        Args:
            page: Page to fetch
            filters: Status, category, tag and author criteria
            sort: Listing order (newest first by default)

        Returns:
            Posts and pagination metadata
        """
        with logfire.span(
            "post_service.list_posts",
            page=page.page,
            page_size=page.page_size,
            status=filters.status.value if filters.status else None,
            category=filters.category,
            tag=filters.tag,
            author_id=str(filters.author_id) if filters.author_id else None,
            sort=sort.value,
        ):
            total = await self.post_repository.count(filters)
            posts = await self.post_repository.find_all(
                filters, sort, limit=page.limit, offset=page.offset
            )
            return posts, Pagination.from_total(page, total)

    async def list_categories(self) -> list[str]:
        """Categories used by published posts, sorted."""
        return await self.post_repository.find_categories(PostStatus.PUBLISHED)

    async def list_tags(self) -> list[str]:
        """Tags used by published posts, sorted."""
        return await self.post_repository.find_tags(PostStatus.PUBLISHED)

    async def update_post(
        self, post_id: PostId, user_id: UserId, changes: dict[str, Any]
    ) -> Post:
        """Apply an author's edits to a post.

        The slug stays as created so existing links keep working. Excerpt
        and reading time follow the new content unless an excerpt is given.

        Args:
            post_id: Post to edit
            user_id: Acting user (author or admin)
            changes: New values for editable fields; other keys are ignored

        Returns:
            Updated post

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
            pydantic.ValidationError: If the new values are invalid
        """
        with logfire.span(
            "post_service.update_post", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.require_modifiable(post_id, user_id, "update")

            updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
            if "tags" in updates:
                updates["tags"] = [tag.strip() for tag in updates["tags"] if tag.strip()]
            if "content" in updates:
                updates["reading_time"] = self.estimate_reading_time(updates["content"])
                if updates.get("excerpt") is None:
                    updates["excerpt"] = self.make_excerpt(updates["content"])
            updates["updated_at"] = datetime.now()

            updated = Post.model_validate({**post.model_dump(), **updates})
            saved = await self.post_repository.save(updated)
            logfire.info(
                "Post updated", post_id=str(post_id), fields=sorted(updates)
            )
            return saved

    async def require_modifiable(
        self, post_id: PostId, user_id: UserId, action: str
    ) -> Post:
        """Load a post the user is allowed to change.

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        post = await self.require_post(post_id)
        await self._authorize(action, post, user_id)
        return post

    async def remove_post(self, post_id: PostId) -> None:
        """Delete a post record.

        Callers check permissions first with ``require_modifiable``.

        Raises:
            NotFoundError: If the post was already gone
        """
        with logfire.span("post_service.remove_post", post_id=str(post_id)):
            if not await self.post_repository.delete(post_id):
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post deleted", post_id=str(post_id))

    async def record_view(self, post_id: PostId) -> None:
        """Count one view of a post. Unknown posts are ignored."""
        await self.post_repository.increment_views(post_id)

    async def toggle_like(self, post_id: PostId, user_id: UserId) -> Post:
        """Like the post, or remove the like if the user already has one.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "post_service.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            post = await self.require_post(post_id)

            if post.is_liked_by(user_id):
                await self.post_repository.remove_like(post_id, user_id)
                logfire.info("Post unliked", post_id=str(post_id))
            else:
                like = Like(user_id=user_id, created_at=datetime.now())
                await self.post_repository.add_like(post_id, like)
                logfire.info("Post liked", post_id=str(post_id))

            return await self.require_post(post_id)

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to a post's comment count.

        Args:
            post_id: Post ID
            delta: +1 on comment creation, -1 per deleted comment
        """
        with logfire.span(
            "post_service.adjust_comment_count", post_id=str(post_id), delta=delta
        ):
            await self.post_repository.increment_comment_count(post_id, delta)
            logfire.info("Comment count adjusted", post_id=str(post_id), delta=delta)

    async def generate_unique_slug(self, title: str, post_id: PostId) -> Slug:
        """Generate a unique slug from a title.

        Handles collisions by appending numeric suffixes.

        Args:
            title: Post title to slugify
            post_id: Post ID (used for fallback if title produces empty slug)

        Returns:
            Unique slug for the post
        """
        with logfire.span(
            "post_service.generate_unique_slug", post_id=str(post_id), title=title
        ):
            base_slug_str = self._slugify(title)

            if not base_slug_str:
                fallback = f"post-{post_id.hex[:8]}"
                logfire.info(
                    "Using fallback slug for empty title",
                    post_id=str(post_id),
                    slug=fallback,
                )
                return Slug(fallback)

            slug_str = base_slug_str
            counter = 1
            while await self.post_repository.slug_exists(Slug(slug_str)):
                suffix = f"-{counter}"
                # Ensure we don't exceed 100 chars with suffix
                slug_str = base_slug_str[: 100 - len(suffix)].rstrip("-") + suffix
                counter += 1

            slug = Slug(slug_str)
            logfire.info(
                "Generated unique slug",
                post_id=str(post_id),
                slug=str(slug),
                had_collision=counter > 1,
            )
            return slug

    @staticmethod
    def _slugify(title: str) -> str:
        """Convert title to URL-safe slug format.

        Args:
            title: Title to slugify

        Returns:
            URL-safe slug string (may be empty if title has no valid chars)
        """
        slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
        slug = re.sub(r"-+", "-", slug)
        return slug.strip("-")[:100]

    @staticmethod
    def make_excerpt(content: str) -> str:
        """First 150 characters of the content with markup stripped."""
        text = re.sub(r"<[^>]*>", "", content)
        if len(text) > EXCERPT_LENGTH:
            return text[:EXCERPT_LENGTH] + "..."
        return text

    @staticmethod
    def estimate_reading_time(content: str) -> int:
        """Reading time in minutes, at least 1."""
        words = re.sub(r"<[^>]*>", "", content).split()
        return max(1, math.ceil(len(words) / WORDS_PER_MINUTE))

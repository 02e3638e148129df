"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import Select, asc, delete, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import Like, Post
from blog.domain.repository.post import PostRepository
from blog.domain.value import PostFilter, PostId, PostSort, PostStatus, Slug, UserId
from blog.persistence.database import store_errors
from blog.persistence.mappers import post_to_dict, row_to_like, row_to_post
from blog.persistence.tables import post_likes_table, posts_table


def _apply_filters(stmt: Select, filters: PostFilter) -> Select:
    if filters.status is not None:
        stmt = stmt.where(posts_table.c.status == filters.status.value)
    if filters.category is not None:
        stmt = stmt.where(posts_table.c.category == filters.category)
    if filters.tag is not None:
        stmt = stmt.where(posts_table.c.tags.any(filters.tag))
    if filters.author_id is not None:
        stmt = stmt.where(posts_table.c.author_id == filters.author_id)
    return stmt


def _order_by(sort: PostSort) -> list:
    newest = desc(posts_table.c.created_at)
    if sort == PostSort.OLDEST:
        return [asc(posts_table.c.created_at)]
    if sort == PostSort.POPULAR:
        return [desc(posts_table.c.views), newest]
    if sort == PostSort.LIKES:
        like_count = (
            select(func.count())
            .select_from(post_likes_table)
            .where(post_likes_table.c.post_id == posts_table.c.id)
            .scalar_subquery()
        )
        return [desc(like_count), newest]
    return [newest]


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Likes are rows of post_likes keyed by (post_id, user_id); views and
    comment_count are updated with store-level increments.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _to_posts(self, rows: Sequence) -> List[Post]:
        if not rows:
            return []

        stmt = (
            select(post_likes_table)
            .where(post_likes_table.c.post_id.in_([row.id for row in rows]))
            .order_by(post_likes_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        likes: dict[UUID, list[Like]] = defaultdict(list)
        for like_row in result.fetchall():
            likes[like_row.post_id].append(row_to_like(like_row._asdict()))

        return [row_to_post(row._asdict(), likes.get(row.id)) for row in rows]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span(
            "post_repository.find_by_id", post_id=str(post_id)
        ), store_errors("find_post"):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                return None

            posts = await self._to_posts([row])
            return posts[0]

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts at once."""
        if not post_ids:
            return []

        with store_errors("find_posts"):
            stmt = select(posts_table).where(posts_table.c.id.in_(list(post_ids)))
            result = await self.session.execute(stmt)
            return await self._to_posts(result.fetchall())

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken by any post."""
        with logfire.span("post_repository.slug_exists", slug=str(slug)):
            stmt = (
                select(func.count())
                .select_from(posts_table)
                .where(posts_table.c.slug == str(slug))
            )
            result = await self.session.execute(stmt)
            exists = (result.scalar() or 0) > 0

            logfire.debug("Slug existence check", slug=str(slug), exists=exists)
            return exists

    async def find_all(
        self,
        filters: PostFilter = PostFilter(),
        sort: PostSort = PostSort.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts matching the filter in the requested order."""
        with logfire.span(
            "post_repository.find_all",
            status=filters.status.value if filters.status else None,
            category=filters.category,
            tag=filters.tag,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ), store_errors("find_posts"):
            stmt = _apply_filters(select(posts_table), filters)
            stmt = stmt.order_by(*_order_by(sort)).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = await self._to_posts(result.fetchall())
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self, filters: PostFilter = PostFilter()) -> int:
        """Count posts matching the filter."""
        with store_errors("count_posts"):
            stmt = _apply_filters(select(func.count()).select_from(posts_table), filters)
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def find_categories(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> List[str]:
        """Distinct categories in use, sorted."""
        with store_errors("find_categories"):
            stmt = _apply_filters(
                select(posts_table.c.category).distinct(), PostFilter(status=status)
            ).order_by(posts_table.c.category)
            result = await self.session.execute(stmt)
            return [row.category for row in result.fetchall()]

    async def find_tags(
        self, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> List[str]:
        """Distinct tags in use, sorted."""
        with store_errors("find_tags"):
            tags = _apply_filters(
                select(func.unnest(posts_table.c.tags).label("tag")),
                PostFilter(status=status),
            ).subquery()
            stmt = select(tags.c.tag).distinct().order_by(tags.c.tag)
            result = await self.session.execute(stmt)
            return [row.tag for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), title=post.title
        ), store_errors("save_post"):
            existing = await self.find_by_id(post.id)
            post_dict = post_to_dict(post)

            if existing:
                logfire.info("Updating existing post", post_id=str(post.id))
                # Counters are owned by their increment operations
                post_dict.pop("comment_count")
                post_dict.pop("views")
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                logfire.info("Inserting new post", post_id=str(post.id))
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return await self.find_by_id(post.id) or post

    async def delete(self, post_id: PostId) -> bool:
        """Hard delete a post; comments and likes follow by FK cascade."""
        with store_errors("delete_post"):
            stmt = (
                delete(posts_table)
                .where(posts_table.c.id == post_id)
                .returning(posts_table.c.id)
            )
            result = await self.session.execute(stmt)
            removed = result.fetchone() is not None
            await self.session.flush()
            return removed

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to the comment count, never below 0."""
        with store_errors("increment_comment_count"):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(
                    comment_count=func.greatest(posts_table.c.comment_count + delta, 0)
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def increment_views(self, post_id: PostId) -> None:
        """Atomically add one view."""
        with store_errors("increment_views"):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(views=posts_table.c.views + 1)
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def add_like(self, post_id: PostId, like: Like) -> None:
        """Insert a like; a second like by the same user is ignored."""
        with store_errors("add_post_like"):
            stmt = (
                pg_insert(post_likes_table)
                .values(post_id=post_id, user_id=like.user_id, created_at=like.created_at)
                .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove_like(self, post_id: PostId, user_id: UserId) -> bool:
        """Delete a user's like; True if one existed."""
        with store_errors("remove_post_like"):
            stmt = (
                delete(post_likes_table)
                .where(post_likes_table.c.post_id == post_id)
                .where(post_likes_table.c.user_id == user_id)
                .returning(post_likes_table.c.user_id)
            )
            result = await self.session.execute(stmt)
            removed = result.fetchone() is not None
            await self.session.flush()
            return removed

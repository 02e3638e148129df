"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import delete, desc, func, literal, select, update
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.model import Comment, Like
from blog.domain.repository import CommentRepository
from blog.domain.value import CommentId, PostId, UserId
from blog.persistence.database import store_errors
from blog.persistence.mappers import comment_to_dict, row_to_comment, row_to_like
from blog.persistence.tables import comment_likes_table, comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    ``replies`` is a uuid[] column updated with array_append/array_remove,
    and likes are rows of comment_likes keyed by (comment_id, user_id).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_likes(self, comment_ids: list[UUID]) -> dict[UUID, list[Like]]:
        """Fetch likes for several comments in a single query.

        Args:
            comment_ids: List of comment IDs

        Returns:
            Dict mapping comment_id -> likes, oldest first
        """
        if not comment_ids:
            return {}

        stmt = (
            select(comment_likes_table)
            .where(comment_likes_table.c.comment_id.in_(comment_ids))
            .order_by(comment_likes_table.c.created_at)
        )
        result = await self.session.execute(stmt)

        likes: dict[UUID, list[Like]] = defaultdict(list)
        for row in result.fetchall():
            likes[row.comment_id].append(row_to_like(row._asdict()))
        return likes

    async def _to_comments(self, rows: Sequence) -> List[Comment]:
        if not rows:
            return []
        likes = await self._fetch_likes([row.id for row in rows])
        return [row_to_comment(row._asdict(), likes.get(row.id)) for row in rows]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        with store_errors("find_by_id"):
            stmt = select(comments_table).where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                return None
            comments = await self._to_comments([row])
            return comments[0]

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments, keeping the order of ``comment_ids``."""
        if not comment_ids:
            return []

        with store_errors("find_by_ids"):
            stmt = select(comments_table).where(
                comments_table.c.id.in_(list(comment_ids))
            )
            result = await self.session.execute(stmt)
            by_id = {c.id: c for c in await self._to_comments(result.fetchall())}
            return [by_id[cid] for cid in comment_ids if cid in by_id]

    async def find_top_level_by_post(
        self,
        post_id: PostId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a post, oldest first."""
        with logfire.span(
            "comment_repository.find_top_level_by_post",
            post_id=str(post_id),
            limit=limit,
            offset=offset,
        ), store_errors("find_top_level_by_post"):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .where(comments_table.c.parent_id.is_(None))
                .order_by(comments_table.c.created_at, comments_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return await self._to_comments(result.fetchall())

    async def count_top_level_by_post(self, post_id: PostId) -> int:
        """Count top-level comments of a post."""
        with store_errors("count_top_level_by_post"):
            stmt = (
                select(func.count())
                .select_from(comments_table)
                .where(comments_table.c.post_id == post_id)
                .where(comments_table.c.parent_id.is_(None))
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def count_by_post(self, post_id: PostId) -> int:
        """Count all comments of a post."""
        with store_errors("count_by_post"):
            stmt = (
                select(func.count())
                .select_from(comments_table)
                .where(comments_table.c.post_id == post_id)
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments by a specific author, newest first."""
        with store_errors("find_by_author"):
            stmt = (
                select(comments_table)
                .where(comments_table.c.author_id == author_id)
                .order_by(desc(comments_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return await self._to_comments(result.fetchall())

    async def count_by_author(self, author_id: UserId) -> int:
        """Count comments by a specific author."""
        with store_errors("count_by_author"):
            stmt = (
                select(func.count())
                .select_from(comments_table)
                .where(comments_table.c.author_id == author_id)
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def find_child_ids(self, parent_id: CommentId) -> List[CommentId]:
        """Find ids of comments pointing at the parent."""
        with store_errors("find_child_ids"):
            stmt = (
                select(comments_table.c.id)
                .where(comments_table.c.parent_id == parent_id)
                .order_by(comments_table.c.created_at)
            )
            result = await self.session.execute(stmt)
            return [CommentId(row.id) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        with logfire.span(
            "comment_repository.save",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
        ), store_errors("save"):
            stmt = comments_table.insert().values(**comment_to_dict(comment))
            await self.session.execute(stmt)
            await self.session.flush()
            return comment

    async def delete(self, comment_id: CommentId) -> bool:
        """Hard delete a comment; True if this call removed it."""
        with store_errors("delete"):
            stmt = (
                delete(comments_table)
                .where(comments_table.c.id == comment_id)
                .returning(comments_table.c.id)
            )
            result = await self.session.execute(stmt)
            removed = result.fetchone() is not None
            await self.session.flush()
            return removed

    async def delete_by_post(self, post_id: PostId) -> int:
        """Hard delete all comments of a post; likes go with them (FK cascade)."""
        with store_errors("delete_by_post"):
            stmt = (
                delete(comments_table)
                .where(comments_table.c.post_id == post_id)
                .returning(comments_table.c.id)
            )
            result = await self.session.execute(stmt)
            removed = len(result.fetchall())
            await self.session.flush()
            return removed

    async def push_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Append the reply id to the parent's replies (once)."""
        with store_errors("push_reply"):
            reply = literal(reply_id, PG_UUID)
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == parent_id)
                .where(~comments_table.c.replies.any(reply_id))
                .values(
                    replies=func.array_append(
                        comments_table.c.replies,
                        reply,
                        type_=comments_table.c.replies.type,
                    )
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def pull_reply(self, parent_id: CommentId, reply_id: CommentId) -> None:
        """Remove the reply id from the parent's replies."""
        with store_errors("pull_reply"):
            reply = literal(reply_id, PG_UUID)
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == parent_id)
                .values(
                    replies=func.array_remove(
                        comments_table.c.replies,
                        reply,
                        type_=comments_table.c.replies.type,
                    )
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def add_like(self, comment_id: CommentId, like: Like) -> None:
        """Insert a like; a second like by the same user is ignored."""
        with store_errors("add_like"):
            stmt = (
                pg_insert(comment_likes_table)
                .values(
                    comment_id=comment_id,
                    user_id=like.user_id,
                    created_at=like.created_at,
                )
                .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like; True if one existed."""
        with store_errors("remove_like"):
            stmt = (
                delete(comment_likes_table)
                .where(comment_likes_table.c.comment_id == comment_id)
                .where(comment_likes_table.c.user_id == user_id)
                .returning(comment_likes_table.c.user_id)
            )
            result = await self.session.execute(stmt)
            removed = result.fetchone() is not None
            await self.session.flush()
            return removed

    async def update_content(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content and mark the comment as edited."""
        with store_errors("update_content"):
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(
                    content=content,
                    is_edited=True,
                    edited_at=edited_at,
                    updated_at=edited_at,
                )
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if row is None:
                return None

            await self.session.flush()
            comments = await self._to_comments([row])
            return comments[0]

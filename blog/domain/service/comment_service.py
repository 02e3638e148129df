"""Comment domain service.

Owns the comment graph: the parent/replies linkage, the owning post's
comment counter, likes, and cascading deletion of whole subtrees.

The store offers only single-record atomic operations, so every
multi-record change here is an explicit sequence of such operations:

- create: insert, push into parent.replies, increment post counter
  (compensated on failure)
- delete: per node in the subtree, remove the record (the claim), pull it
  from its parent's replies, decrement the post counter. Follow-up writes
  that fail are retried after the walk; the walk itself always continues
  past a removed node.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, TypeVar
from uuid import uuid4

import logfire

from blog.config import StoreSettings
from blog.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from blog.domain.model.comment import (
    COMMENT_MAX_LENGTH,
    COMMENT_MIN_LENGTH,
    Comment,
    Like,
)
from blog.domain.repository import CommentRepository
from blog.domain.value import CommentId, PageRequest, Pagination, PostId, UserId
from blog.util.retry import with_retry

from .authorization_service import AuthorizationService
from .base import Service
from .post_service import PostService

T = TypeVar("T")


@dataclass
class CommentThread:
    """A top-level comment with its direct replies resolved."""

    comment: Comment
    replies: list[Comment]


@dataclass
class ThreadPage:
    """One page of a post's discussion."""

    threads: list[CommentThread]
    pagination: Pagination


@dataclass
class CommentPage:
    """One page of a flat comment listing."""

    comments: list[Comment]
    pagination: Pagination


@dataclass
class _Removal:
    """A comment removed by the cascade and the follow-up writes it still owes."""

    comment: Comment
    children: list[CommentId]
    failed: list[str] = field(default_factory=list)


def _stale_links(removals: list[_Removal]) -> dict[str, list[str]]:
    return {str(r.comment.id): r.failed for r in removals if r.failed}


def _rolled_back(error: BaseException) -> bool:
    return isinstance(error, StoreUnavailableError) and error.rolled_back


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        authorization_service: AuthorizationService,
        store_settings: StoreSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service (owner of comment counters)
            authorization_service: Author-or-admin predicate
            store_settings: Retry policy for transient store errors
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.authorization_service = authorization_service
        self.store_settings = store_settings

    async def _store(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        return await with_retry(operation, call, self.store_settings)

    @staticmethod
    def _validate_content(content: str) -> None:
        if not COMMENT_MIN_LENGTH <= len(content) <= COMMENT_MAX_LENGTH:
            raise ValidationError(
                f"Comment must be between {COMMENT_MIN_LENGTH} and "
                f"{COMMENT_MAX_LENGTH} characters"
            )

    async def _require_comment(self, comment_id: CommentId) -> Comment:
        comment = await self._store(
            "find_comment", lambda: self.comment_repository.find_by_id(comment_id)
        )
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _authorize(self, action: str, comment: Comment, user_id: UserId) -> None:
        allowed = await self.authorization_service.is_author_or_admin(
            user_id, comment.author_id
        )
        if not allowed:
            logfire.warn(
                "Comment access denied",
                action=action,
                comment_id=str(comment.id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError(action, "comment", str(comment.id), str(user_id))

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self._store(
                "find_comment", lambda: self.comment_repository.find_by_id(comment_id)
            )

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If content length is out of range or the parent
                belongs to another post
            NotFoundError: If the post or parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            self._validate_content(content)

            await self._store(
                "find_post", lambda: self.post_service.require_post(post_id)
            )

            if parent_id is not None:
                parent = await self._store(
                    "find_parent",
                    lambda: self.comment_repository.find_by_id(parent_id),
                )
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                replies=[],
                likes=[],
                is_edited=False,
                edited_at=None,
                created_at=now,
                updated_at=now,
            )

            saved = await self._store(
                "insert_comment", lambda: self.comment_repository.save(comment)
            )

            try:
                if parent_id is not None:
                    await self._store(
                        "push_reply",
                        lambda: self.comment_repository.push_reply(parent_id, saved.id),
                    )
                await self._store(
                    "increment_comment_count",
                    lambda: self.post_service.adjust_comment_count(post_id, 1),
                )
            except Exception as e:
                logfire.error(
                    "Comment linkage failed, compensating",
                    comment_id=str(saved.id),
                    post_id=str(post_id),
                    parent_id=str(parent_id) if parent_id else None,
                    error=str(e),
                )
                if not _rolled_back(e):
                    await self._undo_create(saved)
                raise

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def _undo_create(self, comment: Comment) -> None:
        """Remove a comment whose linkage could not be completed."""
        try:
            if comment.parent_id is not None:
                await self.comment_repository.pull_reply(comment.parent_id, comment.id)
            await self.comment_repository.delete(comment.id)
            logfire.info("Comment creation rolled back", comment_id=str(comment.id))
        except Exception as e:
            logfire.error(
                "Compensation failed, comment needs reconciliation",
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                error=str(e),
            )

    async def update_content(
        self, comment_id: CommentId, content: str, user_id: UserId
    ) -> Comment:
        """Replace a comment's content and mark it as edited.

        Args:
            comment_id: Comment ID
            content: New content
            user_id: Acting user (must be author or admin)

        Returns:
            Updated comment

        Raises:
            ValidationError: If content length is out of range
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            user_id=str(user_id),
            content_length=len(content),
        ):
            self._validate_content(content)
            comment = await self._require_comment(comment_id)
            await self._authorize("edit", comment, user_id)

            updated = await self._store(
                "update_content",
                lambda: self.comment_repository.update_content(
                    comment_id, content, datetime.now()
                ),
            )
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment content updated", comment_id=str(comment_id))
            return updated

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Like the comment, or remove the like if the user already has one.

        Args:
            comment_id: Comment ID
            user_id: Acting user

        Returns:
            Comment with its current likes

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self._require_comment(comment_id)

            if comment.is_liked_by(user_id):
                await self._store(
                    "remove_like",
                    lambda: self.comment_repository.remove_like(comment_id, user_id),
                )
                logfire.info("Comment unliked", comment_id=str(comment_id))
            else:
                like = Like(user_id=user_id, created_at=datetime.now())
                await self._store(
                    "add_like",
                    lambda: self.comment_repository.add_like(comment_id, like),
                )
                logfire.info("Comment liked", comment_id=str(comment_id))

            return await self._require_comment(comment_id)

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Delete a comment and every reply beneath it.

        Args:
            comment_id: Root of the subtree to delete
            user_id: Acting user (must be author or admin)

        Raises:
            NotFoundError: If the comment doesn't exist (including already deleted)
            NotAuthorizedError: If the user is neither author nor admin
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self._require_comment(comment_id)
            await self._authorize("delete", comment, user_id)

            deleted = await self._cascade_delete(comment.id)
            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                deleted=deleted,
            )

    async def _cascade_delete(self, root_id: CommentId) -> int:
        """Walk the subtree with an explicit stack, deleting each node once.

        Each node's writes are shielded from cancellation: a cancelled request
        still finishes the node in flight, then logs what is left.

        Once a node is removed its children are always queued, even when its
        parent link or counter update failed. Those updates are retried after
        the walk. A failure before a node is removed stops the walk; every id
        logged as unprocessed then still exists, so deleting it again resumes.

        Returns:
            Number of comments removed by this call

        Raises:
            StoreUnavailableError: If the root could not be removed, or the
                store rolled back the request's writes
        """
        pending: list[CommentId] = [root_id]
        deleted = 0
        unlinked: list[_Removal] = []

        while pending:
            current = pending.pop()
            step = asyncio.ensure_future(self._delete_node(current))
            try:
                removal = await asyncio.shield(step)
            except asyncio.CancelledError:
                removal, error = await self._finish_in_flight(step)
                if error is not None:
                    pending.append(current)
                elif removal is not None:
                    deleted += 1
                    pending.extend(reversed(removal.children))
                    if removal.failed:
                        unlinked.append(removal)
                logfire.warn(
                    "Cascade delete cancelled",
                    root_id=str(root_id),
                    deleted=deleted,
                    unprocessed=[str(cid) for cid in pending],
                    stale_links=_stale_links(unlinked),
                    error=repr(error) if error is not None else None,
                )
                raise
            except Exception as e:
                if current == root_id or _rolled_back(e):
                    raise
                logfire.error(
                    "Cascade delete incomplete, subtree needs reconciliation",
                    root_id=str(root_id),
                    failed_id=str(current),
                    unprocessed=[str(cid) for cid in [current, *pending]],
                    error=str(e),
                )
                break

            if removal is None:
                continue
            deleted += 1
            pending.extend(reversed(removal.children))
            if removal.failed:
                unlinked.append(removal)

        await self._retry_unlinks(root_id, unlinked)
        return deleted

    @staticmethod
    async def _finish_in_flight(
        step: "asyncio.Future[_Removal | None]",
    ) -> tuple[_Removal | None, BaseException | None]:
        """Wait for a node step to settle, ignoring repeated cancellation."""
        while not step.done():
            try:
                await asyncio.shield(step)
            except asyncio.CancelledError:
                continue
            except Exception:
                break
        if step.cancelled():
            return None, None
        error = step.exception()
        if error is not None:
            return None, error
        return step.result(), None

    async def _delete_node(self, comment_id: CommentId) -> _Removal | None:
        """Delete one comment and fix the records that point at it.

        Removing the record comes first and acts as a claim: only the caller
        that actually removed it applies the counter and replies updates.

        Returns:
            The removal with the node's children, or None if it was already gone
        """
        comment = await self._store(
            "find_comment", lambda: self.comment_repository.find_by_id(comment_id)
        )
        if comment is None:
            return None

        # Children by both pointers, so replies orphaned by a create/delete
        # race are still collected.
        linked = await self._store(
            "find_children", lambda: self.comment_repository.find_child_ids(comment_id)
        )
        children = list(dict.fromkeys([*comment.replies, *linked]))

        removed = await self._store(
            "delete_comment", lambda: self.comment_repository.delete(comment_id)
        )
        if not removed:
            return None

        removal = _Removal(comment=comment, children=children)
        removal.failed = await self._unlink(comment, self._unlink_steps(comment))
        return removal

    @staticmethod
    def _unlink_steps(comment: Comment) -> list[str]:
        steps = ["decrement_comment_count"]
        if comment.parent_id is not None:
            steps.insert(0, "pull_reply")
        return steps

    async def _unlink(self, comment: Comment, steps: list[str]) -> list[str]:
        """Run the writes owed by a removed comment.

        Returns:
            The steps that still failed after retries
        """
        calls: dict[str, Callable[[], Awaitable[None]]] = {
            "pull_reply": lambda: self.comment_repository.pull_reply(
                comment.parent_id, comment.id
            ),
            "decrement_comment_count": lambda: self.post_service.adjust_comment_count(
                comment.post_id, -1
            ),
        }
        failed = []
        for operation in steps:
            try:
                await self._store(operation, calls[operation])
            except StoreUnavailableError as e:
                if e.rolled_back:
                    raise
                failed.append(operation)
        return failed

    async def _retry_unlinks(
        self, root_id: CommentId, unlinked: list[_Removal]
    ) -> None:
        """Give failed link and counter updates one more round after the walk."""
        for removal in unlinked:
            removal.failed = await self._unlink(removal.comment, removal.failed)

        stale = _stale_links(unlinked)
        if stale:
            logfire.error(
                "Cascade delete left stale links, post needs reconciliation",
                root_id=str(root_id),
                stale_links=stale,
            )

    async def list_thread_for_post(
        self, post_id: PostId, page: PageRequest
    ) -> ThreadPage:
        """Get a page of top-level comments with their direct replies.

        Top-level comments are ordered oldest first. Replies keep the order of
        the parent's ``replies`` list; deeper levels are not expanded.

        Args:
            post_id: Post ID
            page: Page to fetch

        Returns:
            Threads and pagination metadata
        """
        with logfire.span(
            "comment_service.list_thread_for_post",
            post_id=str(post_id),
            page=page.page,
            page_size=page.page_size,
        ):
            total = await self._store(
                "count_top_level",
                lambda: self.comment_repository.count_top_level_by_post(post_id),
            )
            comments = await self._store(
                "find_top_level",
                lambda: self.comment_repository.find_top_level_by_post(
                    post_id, limit=page.limit, offset=page.offset
                ),
            )

            reply_ids = [reply_id for c in comments for reply_id in c.replies]
            replies = await self._store(
                "find_replies", lambda: self.comment_repository.find_by_ids(reply_ids)
            )
            replies_by_id = {reply.id: reply for reply in replies}

            threads = [
                CommentThread(
                    comment=comment,
                    replies=[
                        replies_by_id[reply_id]
                        for reply_id in comment.replies
                        if reply_id in replies_by_id
                    ],
                )
                for comment in comments
            ]
            logfire.info(
                "Thread retrieved for post",
                post_id=str(post_id),
                count=len(threads),
                total=total,
            )
            return ThreadPage(
                threads=threads, pagination=Pagination.from_total(page, total)
            )

    async def list_comments_by_user(
        self, user_id: UserId, page: PageRequest
    ) -> CommentPage:
        """Get a page of a user's comments, newest first.

        Args:
            user_id: Author ID
            page: Page to fetch

        Returns:
            Comments and pagination metadata
        """
        with logfire.span(
            "comment_service.list_comments_by_user",
            user_id=str(user_id),
            page=page.page,
            page_size=page.page_size,
        ):
            total = await self._store(
                "count_by_author",
                lambda: self.comment_repository.count_by_author(user_id),
            )
            comments = await self._store(
                "find_by_author",
                lambda: self.comment_repository.find_by_author(
                    user_id, limit=page.limit, offset=page.offset
                ),
            )
            return CommentPage(
                comments=comments, pagination=Pagination.from_total(page, total)
            )

    async def reconcile_comment_count(self, post_id: PostId) -> int:
        """Reset a post's comment counter to the number of live comments.

        Used to repair counters after an incomplete cascade delete.

        Args:
            post_id: Post ID

        Returns:
            The corrected comment count

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span(
            "comment_service.reconcile_comment_count", post_id=str(post_id)
        ):
            post = await self._store(
                "find_post", lambda: self.post_service.require_post(post_id)
            )
            actual = await self._store(
                "count_by_post", lambda: self.comment_repository.count_by_post(post_id)
            )
            drift = actual - post.comment_count
            if drift:
                await self._store(
                    "adjust_comment_count",
                    lambda: self.post_service.adjust_comment_count(post_id, drift),
                )
                logfire.warn(
                    "Comment count drift repaired",
                    post_id=str(post_id),
                    stored=post.comment_count,
                    actual=actual,
                )
            return actual

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        """Remove the whole discussion of a deleted post.

        Args:
            post_id: Post whose comments are removed

        Returns:
            Number of comments removed
        """
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            removed = await self._store(
                "delete_by_post",
                lambda: self.comment_repository.delete_by_post(post_id),
            )
            logfire.info(
                "Post comments deleted", post_id=str(post_id), removed=removed
            )
            return removed

"""Integration tests for PostgresCommentRepository.

These tests need a PostgreSQL database with migrations applied, reachable
at DATABASE__URL. They are skipped when that variable is not set.
"""

import os
from datetime import datetime
from uuid import uuid4

import pytest

from blog.domain.model.comment import Comment, Like
from blog.domain.repository import CommentRepository, PostRepository, UserRepository
from blog.domain.value import CommentId
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed_comment(integration_env, parent: Comment | None = None) -> Comment:
    user_repo = await integration_env.get(UserRepository)
    post_repo = await integration_env.get(PostRepository)
    comment_repo = await integration_env.get(CommentRepository)

    if parent is None:
        author = await seed_user(user_repo, f"it-{uuid4().hex[:8]}")
        post = await seed_post(post_repo, author.id)
        post_id, author_id = post.id, author.id
    else:
        post_id, author_id = parent.post_id, parent.author_id

    comment = Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id,
        content="Integration comment",
        parent_id=parent.id if parent else None,
        created_at=datetime.now(),
        updated_at=datetime.now(),
    )
    return await comment_repo.save(comment)


class TestCommentRepositoryIntegration:
    """Integration tests for the single-record atomic operations."""

    @pytest.mark.asyncio
    async def test_push_reply_is_idempotent_and_pull_removes(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        parent = await _seed_comment(integration_env)
        reply = await _seed_comment(integration_env, parent=parent)

        # Act
        await comment_repo.push_reply(parent.id, reply.id)
        await comment_repo.push_reply(parent.id, reply.id)
        linked = await comment_repo.find_by_id(parent.id)
        await comment_repo.pull_reply(parent.id, reply.id)
        unlinked = await comment_repo.find_by_id(parent.id)

        # Assert
        assert linked.replies == [reply.id]
        assert unlinked.replies == []
        assert await comment_repo.find_child_ids(parent.id) == [reply.id]

    @pytest.mark.asyncio
    async def test_delete_reports_whether_record_was_removed(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await _seed_comment(integration_env)

        # Act
        first = await comment_repo.delete(comment.id)
        second = await comment_repo.delete(comment.id)

        # Assert
        assert first is True
        assert second is False
        assert await comment_repo.find_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_likes_are_unique_per_user(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await _seed_comment(integration_env)
        like = Like(user_id=comment.author_id, created_at=datetime.now())

        # Act
        await comment_repo.add_like(comment.id, like)
        await comment_repo.add_like(comment.id, like)
        liked = await comment_repo.find_by_id(comment.id)
        removed = await comment_repo.remove_like(comment.id, comment.author_id)
        unliked = await comment_repo.find_by_id(comment.id)

        # Assert
        assert liked.like_count == 1
        assert removed is True
        assert unliked.like_count == 0

    @pytest.mark.asyncio
    async def test_comment_counter_never_goes_negative(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        comment = await _seed_comment(integration_env)

        # Act
        await post_repo.increment_comment_count(comment.post_id, -5)

        # Assert
        post = await post_repo.find_by_id(comment.post_id)
        assert post.comment_count == 0

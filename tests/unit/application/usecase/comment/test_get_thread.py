"""Unit tests for GetThreadUseCase and GetUserCommentsUseCase."""

import pytest

from blog.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    GetUserCommentsRequest,
    GetUserCommentsUseCase,
)
from blog.domain.repository import PostRepository, UserRepository
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetThreadUseCase:
    """Tests for GetThreadUseCase."""

    @pytest.mark.asyncio
    async def test_thread_has_two_levels_with_authors(self, unit_env):
        """Top-level comments carry their direct replies and author names."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        create_use_case = await unit_env.get(CreateCommentUseCase)
        thread_use_case = await unit_env.get(GetThreadUseCase)

        author = await seed_user(user_repo, "author")
        replier = await seed_user(user_repo, "replier")
        post = await seed_post(post_repo, author.id)
        top = await create_use_case.execute(
            CreateCommentRequest(post_id=str(post.id), content="Top", author_id=str(author.id))
        )
        reply = await create_use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                content="Reply",
                author_id=str(replier.id),
                parent_id=top.comment_id,
            )
        )

        # Act
        response = await thread_use_case.execute(GetThreadRequest(post_id=str(post.id)))

        # Assert
        assert response.post_id == str(post.id)
        assert len(response.comments) == 1
        thread = response.comments[0]
        assert thread.comment_id == top.comment_id
        assert thread.author.username == "author"
        assert thread.reply_ids == [reply.comment_id]
        assert [r.comment_id for r in thread.replies] == [reply.comment_id]
        assert thread.replies[0].author.username == "replier"
        assert response.pagination.total == 1
        assert response.pagination.page_size == 20

    @pytest.mark.asyncio
    async def test_limit_is_capped_at_maximum(self, unit_env):
        """Oversized limits are clamped to the configured maximum."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        thread_use_case = await unit_env.get(GetThreadUseCase)
        author = await seed_user(user_repo, "author")
        post = await seed_post(post_repo, author.id)

        # Act
        response = await thread_use_case.execute(
            GetThreadRequest(post_id=str(post.id), limit=5000)
        )

        # Assert
        assert response.pagination.page_size == 100
        assert response.comments == []


class TestGetUserCommentsUseCase:
    """Tests for GetUserCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_user_comments_include_post_summary(self, unit_env):
        """Each comment is returned with the title and slug of its post."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        create_use_case = await unit_env.get(CreateCommentUseCase)
        user_comments_use_case = await unit_env.get(GetUserCommentsUseCase)

        author = await seed_user(user_repo, "author")
        post = await seed_post(post_repo, author.id, title="Threads")
        await create_use_case.execute(
            CreateCommentRequest(post_id=str(post.id), content="Mine", author_id=str(author.id))
        )

        # Act
        response = await user_comments_use_case.execute(
            GetUserCommentsRequest(user_id=str(author.id), page=1, limit=10)
        )

        # Assert
        assert response.user_id == str(author.id)
        assert len(response.comments) == 1
        item = response.comments[0]
        assert item.content == "Mine"
        assert item.post.title == "Threads"
        assert item.post.slug == str(post.slug)
        assert response.pagination.total == 1
        assert response.pagination.page_size == 10

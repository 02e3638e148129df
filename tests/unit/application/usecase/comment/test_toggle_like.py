"""Unit tests for ToggleLikeUseCase."""

import pytest

from blog.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    ToggleLikeRequest,
    ToggleLikeUseCase,
)
from blog.domain.repository import PostRepository, UserRepository
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestToggleLikeUseCase:
    """Tests for ToggleLikeUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_like_twice_returns_to_zero(self, unit_env):
        """Second toggle removes the like instead of adding another."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        create_use_case = await unit_env.get(CreateCommentUseCase)
        toggle_use_case = await unit_env.get(ToggleLikeUseCase)

        author = await seed_user(user_repo, "author")
        reader = await seed_user(user_repo, "reader")
        post = await seed_post(post_repo, author.id)
        comment = await create_use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id), content="Nice", author_id=str(author.id)
            )
        )
        request = ToggleLikeRequest(comment_id=comment.comment_id, user_id=str(reader.id))

        # Act
        first = await toggle_use_case.execute(request)
        second = await toggle_use_case.execute(request)

        # Assert
        assert first.liked is True
        assert first.like_count == 1
        assert first.likes[0].user_id == str(reader.id)
        assert second.liked is False
        assert second.like_count == 0
        assert second.likes == []

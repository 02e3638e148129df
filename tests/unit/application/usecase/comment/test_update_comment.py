"""Unit tests for UpdateCommentUseCase."""

import pytest

from blog.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from blog.domain.error import NotAuthorizedError, ValidationError
from blog.domain.repository import PostRepository, UserRepository
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _create_comment(unit_env, content: str = "Original"):
    post_repo = await unit_env.get(PostRepository)
    user_repo = await unit_env.get(UserRepository)
    create_use_case = await unit_env.get(CreateCommentUseCase)

    author = await seed_user(user_repo, "author")
    post = await seed_post(post_repo, author.id)
    comment = await create_use_case.execute(
        CreateCommentRequest(post_id=str(post.id), content=content, author_id=str(author.id))
    )
    return author, comment


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_update_comment_content(self, unit_env):
        """Author can edit their comment; it is flagged as edited."""
        # Arrange
        author, comment = await _create_comment(unit_env)
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act
        response = await use_case.execute(
            UpdateCommentRequest(
                comment_id=comment.comment_id,
                user_id=str(author.id),
                content="Updated",
            )
        )

        # Assert
        assert response.content == "Updated"
        assert response.is_edited is True
        assert response.edited_at is not None
        assert response.author.username == "author"

    @pytest.mark.asyncio
    async def test_update_comment_by_non_author_fails(self, unit_env):
        """Only author or admin can edit."""
        # Arrange
        _, comment = await _create_comment(unit_env)
        user_repo = await unit_env.get(UserRepository)
        stranger = await seed_user(user_repo, "stranger")
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=comment.comment_id,
                    user_id=str(stranger.id),
                    content="Hijacked",
                )
            )

    @pytest.mark.asyncio
    async def test_update_comment_too_long_fails(self, unit_env):
        """Edited content over 1000 characters is rejected."""
        # Arrange
        author, comment = await _create_comment(unit_env)
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=comment.comment_id,
                    user_id=str(author.id),
                    content="x" * 1001,
                )
            )

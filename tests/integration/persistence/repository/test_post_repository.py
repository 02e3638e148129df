"""Integration tests for PostgresPostRepository.

These tests need a PostgreSQL database with migrations applied, reachable
at DATABASE__URL. They are skipped when that variable is not set.
"""

import os
from datetime import datetime
from uuid import uuid4

import pytest

from blog.domain.model import Like
from blog.domain.repository import PostRepository, UserRepository
from blog.domain.value import PostFilter, PostSort
from tests.factories import seed_post, seed_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostRepositoryIntegration:
    """Integration tests for filters, counters and likes."""

    @pytest.mark.asyncio
    async def test_tag_filter_and_like_sort(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        author = await seed_user(user_repo, f"it-{uuid4().hex[:8]}")
        reader = await seed_user(user_repo, f"it-{uuid4().hex[:8]}")
        tag = f"tag-{uuid4().hex[:8]}"
        plain = await seed_post(post_repo, author.id, tags=[tag])
        liked = await seed_post(post_repo, author.id, tags=[tag, "other"])
        await post_repo.add_like(liked.id, Like(user_id=reader.id, created_at=datetime.now()))

        # Act
        posts = await post_repo.find_all(PostFilter(tag=tag), PostSort.LIKES)
        total = await post_repo.count(PostFilter(tag=tag))

        # Assert
        assert [p.id for p in posts] == [liked.id, plain.id]
        assert posts[0].like_count == 1
        assert total == 2
        assert tag in await post_repo.find_tags()

    @pytest.mark.asyncio
    async def test_like_is_idempotent_and_removable(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        author = await seed_user(user_repo, f"it-{uuid4().hex[:8]}")
        post = await seed_post(post_repo, author.id)
        like = Like(user_id=author.id, created_at=datetime.now())

        # Act
        await post_repo.add_like(post.id, like)
        await post_repo.add_like(post.id, like)
        after_like = await post_repo.find_by_id(post.id)
        removed = await post_repo.remove_like(post.id, author.id)
        removed_again = await post_repo.remove_like(post.id, author.id)

        # Assert
        assert after_like.like_count == 1
        assert removed is True
        assert removed_again is False

    @pytest.mark.asyncio
    async def test_views_survive_resave_and_delete_reports_existence(
        self, integration_env
    ):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        author = await seed_user(user_repo, f"it-{uuid4().hex[:8]}")
        post = await seed_post(post_repo, author.id)

        # Act
        await post_repo.increment_views(post.id)
        saved = await post_repo.save(post.model_copy(update={"title": "Renamed"}))
        deleted = await post_repo.delete(post.id)
        deleted_again = await post_repo.delete(post.id)

        # Assert
        assert saved.views == 1
        assert saved.title == "Renamed"
        assert deleted is True
        assert deleted_again is False

"""End-to-end tests for the post endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from blog.config import AuthSettings, Settings
from blog.domain.repository import PostRepository, UserRepository
from blog.domain.value import UserRole
from blog.interface.api.app import create_app
from blog.util.jwt import create_token
from tests.di import build_test_container
from tests.factories import seed_post, seed_user


class _World:
    """Seeded users and a post, plus auth cookies for each user."""

    def __init__(self, client: TestClient, users: dict, post) -> None:
        self.client = client
        self.users = users
        self.post = post
        auth_settings: AuthSettings = Settings().auth
        self.cookies = {
            name: {"auth_token": create_token(str(user.id), name, auth_settings)}
            for name, user in users.items()
        }


async def _seed(container):
    async with container() as request_container:
        user_repo = await request_container.get(UserRepository)
        post_repo = await request_container.get(PostRepository)
        users = {
            "alice": await seed_user(user_repo, "alice"),
            "bob": await seed_user(user_repo, "bob"),
            "admin": await seed_user(user_repo, "admin", role=UserRole.ADMIN),
        }
        post = await seed_post(
            post_repo, users["alice"].id, category="Code", tags=["python"]
        )
        await seed_post(post_repo, users["bob"].id, category="Life", tags=["travel"])
        return users, post


@pytest.fixture
def world():
    """App wired to in-memory persistence, seeded with users and posts."""
    container = build_test_container()
    users, post = asyncio.run(_seed(container))
    with TestClient(create_app(container)) as client:
        yield _World(client, users, post)


class TestPostFlow:
    """End-to-end tests for post API endpoints."""

    def test_list_filters_and_user_posts(self, world):
        # Act
        by_tag = world.client.get("/posts", params={"tag": "python"})
        by_author = world.client.get(f"/posts/user/{world.users['bob'].id}")
        bad_sort = world.client.get("/posts", params={"sort": "random"})

        # Assert
        assert [p["post_id"] for p in by_tag.json()["posts"]] == [str(world.post.id)]
        assert [p["author"]["username"] for p in by_author.json()["posts"]] == ["bob"]
        assert bad_sort.status_code == 422

    def test_categories_and_tags(self, world):
        categories = world.client.get("/posts/categories")
        tags = world.client.get("/posts/tags")

        assert categories.json() == {"categories": ["Code", "Life"]}
        assert tags.json() == {"tags": ["python", "travel"]}

    def test_reads_count_views(self, world):
        world.client.get(f"/posts/{world.post.id}")
        response = world.client.get(f"/posts/{world.post.id}")

        assert response.json()["views"] == 2

    def test_update_by_author_and_forbidden_for_others(self, world):
        # Act
        updated = world.client.put(
            f"/posts/{world.post.id}",
            json={"title": "Edited"},
            cookies=world.cookies["alice"],
        )
        forbidden = world.client.put(
            f"/posts/{world.post.id}",
            json={"title": "Hijacked"},
            cookies=world.cookies["bob"],
        )
        anonymous = world.client.put(f"/posts/{world.post.id}", json={"title": "X"})

        # Assert
        assert updated.status_code == 200
        assert updated.json()["title"] == "Edited"
        assert forbidden.status_code == 403
        assert anonymous.status_code == 401

    def test_like_toggles(self, world):
        url = f"/posts/{world.post.id}/like"

        liked = world.client.post(url, cookies=world.cookies["bob"])
        unliked = world.client.post(url, cookies=world.cookies["bob"])

        assert liked.json()["like_count"] == 1
        assert liked.json()["liked"] is True
        assert unliked.json()["like_count"] == 0

    def test_admin_delete_removes_post_and_comments(self, world):
        # Arrange
        world.client.post(
            "/comments",
            json={"content": "First!", "post_id": str(world.post.id)},
            cookies=world.cookies["bob"],
        )

        # Act
        response = world.client.delete(
            f"/posts/{world.post.id}", cookies=world.cookies["admin"]
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["deleted_comments"] == 1
        assert world.client.get(f"/posts/{world.post.id}").status_code == 404
        thread = world.client.get(f"/comments/post/{world.post.id}")
        assert thread.json()["comments"] == []

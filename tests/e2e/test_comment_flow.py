"""End-to-end tests for the comment endpoints."""

import asyncio
from uuid import uuid4

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

    def create_comment(self, as_user: str, content: str, parent_id: str | None = None):
        return self.client.post(
            "/comments",
            json={
                "content": content,
                "post_id": str(self.post.id),
                "parent_id": parent_id,
            },
            cookies=self.cookies[as_user],
        )

    def comment_count(self) -> int:
        return self.client.get(f"/posts/{self.post.id}").json()["comment_count"]


async def _seed(container):
    async with container() as request_container:
        user_repo = await request_container.get(UserRepository)
        post_repo = await request_container.get(PostRepository)
        users = {
            "alice": await seed_user(user_repo, "alice"),
            "bob": await seed_user(user_repo, "bob"),
            "admin": await seed_user(user_repo, "admin", role=UserRole.ADMIN),
        }
        post = await seed_post(post_repo, users["alice"].id)
        return users, post


@pytest.fixture
def world():
    """App wired to in-memory persistence, seeded with users and a post."""
    container = build_test_container()
    users, post = asyncio.run(_seed(container))
    with TestClient(create_app(container)) as client:
        yield _World(client, users, post)


class TestCommentFlow:
    """End-to-end tests for comment API endpoints.

    Note: These tests focus on the HTTP API interface layer.
    Cascade and failure handling are covered by the service unit tests.
    """

    def test_create_reply_and_read_thread(self, world):
        """Comments and replies show up in the two-level thread view."""
        # Act
        top = world.create_comment("alice", "Top-level")
        reply = world.create_comment("bob", "Reply", parent_id=top.json()["comment_id"])
        response = world.client.get(f"/comments/post/{world.post.id}")

        # Assert
        assert top.status_code == 201
        assert reply.status_code == 201
        assert response.status_code == 200
        body = response.json()
        assert len(body["comments"]) == 1
        thread = body["comments"][0]
        assert thread["author"]["username"] == "alice"
        assert thread["reply_count"] == 1
        assert thread["replies"][0]["content"] == "Reply"
        assert thread["replies"][0]["author"]["username"] == "bob"
        assert body["pagination"]["total"] == 1
        assert world.comment_count() == 2

    def test_delete_cascades_and_updates_counter(self, world):
        """A -> B -> C: deleting A removes the chain and zeroes the count."""
        # Arrange
        a = world.create_comment("alice", "A").json()
        b = world.create_comment("bob", "B", parent_id=a["comment_id"]).json()
        world.create_comment("alice", "C", parent_id=b["comment_id"])
        d = world.create_comment("bob", "D").json()
        assert world.comment_count() == 4

        # Act
        response = world.client.delete(
            f"/comments/{a['comment_id']}", cookies=world.cookies["alice"]
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["message"] == "Comment deleted"
        thread = world.client.get(f"/comments/post/{world.post.id}").json()
        assert [c["comment_id"] for c in thread["comments"]] == [d["comment_id"]]
        assert world.comment_count() == 1

    def test_second_delete_returns_404(self, world):
        # Arrange
        comment = world.create_comment("alice", "Once").json()
        url = f"/comments/{comment['comment_id']}"
        world.client.delete(url, cookies=world.cookies["alice"])

        # Act
        response = world.client.delete(url, cookies=world.cookies["alice"])

        # Assert
        assert response.status_code == 404
        assert world.comment_count() == 0

    def test_like_toggles(self, world):
        """Liking twice removes the like."""
        # Arrange
        comment = world.create_comment("alice", "Like me").json()
        url = f"/comments/{comment['comment_id']}/like"

        # Act
        first = world.client.post(url, cookies=world.cookies["bob"])
        second = world.client.post(url, cookies=world.cookies["bob"])

        # Assert
        assert first.status_code == 200
        assert first.json()["liked"] is True
        assert first.json()["like_count"] == 1
        assert second.json()["liked"] is False
        assert second.json()["like_count"] == 0

    def test_edit_by_author_marks_edited(self, world):
        # Arrange
        comment = world.create_comment("alice", "Original").json()

        # Act
        response = world.client.put(
            f"/comments/{comment['comment_id']}",
            json={"content": "Edited"},
            cookies=world.cookies["alice"],
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["content"] == "Edited"
        assert response.json()["is_edited"] is True

    def test_edit_by_other_user_is_forbidden(self, world):
        # Arrange
        comment = world.create_comment("alice", "Original").json()

        # Act
        response = world.client.put(
            f"/comments/{comment['comment_id']}",
            json={"content": "Hijacked"},
            cookies=world.cookies["bob"],
        )

        # Assert
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to edit this comment"

    def test_admin_can_delete_any_comment(self, world):
        # Arrange
        comment = world.create_comment("bob", "Spam").json()

        # Act
        response = world.client.delete(
            f"/comments/{comment['comment_id']}", cookies=world.cookies["admin"]
        )

        # Assert
        assert response.status_code == 200
        assert world.comment_count() == 0

    def test_create_without_auth_returns_401(self, world):
        # Act
        response = world.client.post(
            "/comments",
            json={"content": "Anonymous", "post_id": str(world.post.id)},
        )

        # Assert
        assert response.status_code == 401

    def test_create_with_invalid_token_returns_401(self, world):
        # Act
        response = world.client.post(
            "/comments",
            json={"content": "Forged", "post_id": str(world.post.id)},
            cookies={"auth_token": "invalid-token"},
        )

        # Assert
        assert response.status_code == 401

    @pytest.mark.parametrize("content", ["", "x" * 1001])
    def test_create_with_invalid_content_returns_400(self, world, content):
        # Act
        response = world.create_comment("alice", content)

        # Assert
        assert response.status_code == 400
        assert world.comment_count() == 0

    def test_create_on_unknown_post_returns_404(self, world):
        # Act
        response = world.client.post(
            "/comments",
            json={"content": "Lost", "post_id": str(uuid4())},
            cookies=world.cookies["alice"],
        )

        # Assert
        assert response.status_code == 404

    def test_create_with_malformed_parent_returns_400(self, world):
        # Act
        response = world.create_comment("alice", "Reply", parent_id="not-a-uuid")

        # Assert
        assert response.status_code == 400

    def test_user_comments_listing(self, world):
        # Arrange
        world.create_comment("bob", "First")
        world.create_comment("bob", "Second")
        world.create_comment("alice", "Not bob")

        # Act
        response = world.client.get(
            f"/comments/user/{world.users['bob'].id}", params={"limit": 1}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [c["content"] for c in body["comments"]] == ["Second"]
        assert body["comments"][0]["post"]["post_id"] == str(world.post.id)
        assert body["pagination"]["total"] == 2
        assert body["pagination"]["has_next"] is True


class TestHealth:
    """Health endpoint."""

    def test_health(self, world):
        response = world.client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

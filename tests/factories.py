"""Helpers for seeding users and posts in tests."""

from datetime import datetime
from uuid import uuid4

from blog.domain.model.post import Post
from blog.domain.model.user import User
from blog.domain.repository import PostRepository, UserRepository
from blog.domain.value import PostId, PostStatus, UserId, UserRole, Username
from tests.conftest import make_slug


async def seed_user(
    user_repo: UserRepository,
    username: str = "reader",
    role: UserRole = UserRole.USER,
) -> User:
    """Save and return a user."""
    user = User(
        id=UserId(uuid4()),
        username=Username(root=username),
        avatar_url=None,
        role=role,
        created_at=datetime.now(),
    )
    return await user_repo.save(user)


async def seed_post(
    post_repo: PostRepository,
    author_id: UserId,
    title: str = "Test Post",
    status: PostStatus = PostStatus.PUBLISHED,
    comment_count: int = 0,
    tags: list[str] | None = None,
    category: str = "General",
) -> Post:
    """Save and return a post."""
    post_id = PostId(uuid4())
    now = datetime.now()
    post = Post(
        id=post_id,
        slug=make_slug(f"{title} {post_id.hex[:6]}", post_id),
        title=title,
        content="Test content",
        excerpt="Test content",
        author_id=author_id,
        tags=tags or [],
        category=category,
        status=status,
        comment_count=comment_count,
        reading_time=1,
        created_at=now,
        updated_at=now,
    )
    return await post_repo.save(post)

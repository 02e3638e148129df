"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional, Sequence
from uuid import UUID

from blog.domain.model import Comment, Like, Post, User
from blog.domain.value import (
    CommentId,
    PostId,
    PostStatus,
    Slug,
    UserId,
    UserRole,
    Username,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        avatar_url=row.get("avatar_url"),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    user_dict = user.model_dump()
    user_dict["role"] = user.role.value
    return user_dict


def row_to_post(row: Dict[str, Any], likes: Optional[Sequence[Like]] = None) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        likes: Likes loaded from the post_likes table

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        content=row["content"],
        excerpt=row.get("excerpt"),
        author_id=UserId(_uuid(row["author_id"])),
        tags=list(row.get("tags") or []),
        category=row["category"],
        cover_image=row.get("cover_image") or "",
        status=PostStatus(row["status"]),
        views=row.get("views") or 0,
        likes=list(likes or []),
        comment_count=row["comment_count"],
        reading_time=row["reading_time"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a posts row.

    Status is serialized to its primitive value; likes live in their own table.
    """
    post_dict = post.model_dump(exclude={"likes"})
    post_dict["status"] = post.status.value
    return post_dict


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert a comment_likes or post_likes row to a Like."""
    return Like(user_id=UserId(_uuid(row["user_id"])), created_at=row["created_at"])


def row_to_comment(
    row: Dict[str, Any], likes: Optional[Sequence[Like]] = None
) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict
        likes: Likes loaded from the comment_likes table

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        replies=[CommentId(_uuid(r)) for r in row.get("replies") or []],
        likes=list(likes or []),
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to a comments row.

    Likes live in their own table and are excluded.
    """
    return comment.model_dump(exclude={"likes"})

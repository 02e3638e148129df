"""Response items shared by several use cases."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel

from blog.domain.model import Comment, Like, Post, User
from blog.domain.value import UserId


class AuthorSummary(BaseModel):
    """Display fields of a comment or post author."""

    user_id: str
    username: str | None  # None if the account no longer exists
    avatar_url: str | None


class LikeItem(BaseModel):
    """A like in a response."""

    user_id: str
    created_at: datetime


class CommentItem(BaseModel):
    """Comment in a response, with its author resolved."""

    comment_id: str
    post_id: str
    author: AuthorSummary
    content: str
    parent_id: str | None
    reply_ids: list[str]
    reply_count: int
    likes: list[LikeItem]
    like_count: int
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime
    updated_at: datetime


class PostSummary(BaseModel):
    """Minimal post fields shown next to a comment."""

    post_id: str
    title: str
    slug: str


def author_summary(author_id: UserId, users: dict[UserId, User]) -> AuthorSummary:
    """Build the author summary, tolerating unknown users."""
    user = users.get(author_id)
    return AuthorSummary(
        user_id=str(author_id),
        username=str(user.username) if user else None,
        avatar_url=user.avatar_url if user else None,
    )


def like_items(likes: Sequence[Like]) -> list[LikeItem]:
    """Convert the likes of a comment or post to response items."""
    return [
        LikeItem(user_id=str(like.user_id), created_at=like.created_at)
        for like in likes
    ]


def comment_fields(comment: Comment, users: dict[UserId, User]) -> dict:
    """Field values shared by every comment response model."""
    return {
        "comment_id": str(comment.id),
        "post_id": str(comment.post_id),
        "author": author_summary(comment.author_id, users),
        "content": comment.content,
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
        "reply_ids": [str(reply_id) for reply_id in comment.replies],
        "reply_count": comment.reply_count,
        "likes": like_items(comment.likes),
        "like_count": comment.like_count,
        "is_edited": comment.is_edited,
        "edited_at": comment.edited_at,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def post_summary(post: Post) -> PostSummary:
    """Build the post summary."""
    return PostSummary(post_id=str(post.id), title=post.title, slug=str(post.slug))


def resolve_page_size(requested: int | None, default: int, maximum: int) -> int:
    """Apply the default page size and cap it at the configured maximum."""
    if requested is None:
        return default
    return min(requested, maximum)

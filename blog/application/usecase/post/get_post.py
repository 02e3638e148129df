"""Get post use case."""

from datetime import datetime

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import (
    AuthorSummary,
    LikeItem,
    author_summary,
    like_items,
)
from blog.domain.model import Post, User
from blog.domain.service import PostService, UserService
from blog.domain.value import PostId, PostStatus, UserId, parse_uuid


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string


class GetPostResponse(BaseModel):
    """Get post response."""

    post_id: str
    slug: str
    title: str
    content: str
    excerpt: str | None
    author: AuthorSummary
    tags: list[str]
    category: str
    cover_image: str
    status: PostStatus
    views: int
    likes: list[LikeItem]
    like_count: int
    comment_count: int
    reading_time: int
    created_at: datetime
    updated_at: datetime


def post_fields(post: Post, users: dict[UserId, User]) -> dict:
    """Field values of a full post response."""
    return {
        "post_id": str(post.id),
        "slug": str(post.slug),
        "title": post.title,
        "content": post.content,
        "excerpt": post.excerpt,
        "author": author_summary(post.author_id, users),
        "tags": post.tags,
        "category": post.category,
        "cover_image": post.cover_image,
        "status": post.status,
        "views": post.views,
        "likes": like_items(post.likes),
        "like_count": post.like_count,
        "comment_count": post.comment_count,
        "reading_time": post.reading_time,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


class GetPostUseCase(BaseUseCase[GetPostRequest, GetPostResponse]):
    """Use case for reading a post by ID. Each read counts as a view."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        The view is recorded before loading, so the response includes it.

        Raises:
            ValidationError: If the post ID is malformed
            NotFoundError: If the post doesn't exist
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        await self.post_service.record_view(post_id)
        post = await self.post_service.require_post(post_id)
        users = await self.user_service.get_users_by_ids([post.author_id])
        return GetPostResponse(**post_fields(post, users))

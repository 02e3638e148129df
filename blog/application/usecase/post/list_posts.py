"""List posts use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import (
    AuthorSummary,
    author_summary,
    resolve_page_size,
)
from blog.config import PaginationSettings
from blog.domain.service import PostService, UserService
from blog.domain.value import (
    PageRequest,
    Pagination,
    PostFilter,
    PostSort,
    UserId,
    parse_uuid,
)


class PostListItem(BaseModel):
    """Post list item in response."""

    post_id: str
    slug: str
    title: str
    excerpt: str | None
    author: AuthorSummary
    tags: list[str]
    category: str
    cover_image: str
    views: int
    like_count: int
    comment_count: int
    reading_time: int
    created_at: datetime


class ListPostsRequest(BaseModel):
    """List posts request."""

    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    category: str | None = None
    tag: str | None = None
    author_id: str | None = None  # UUID string
    sort: PostSort = PostSort.NEWEST


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostListItem]
    pagination: Pagination


class ListPostsUseCase(BaseUseCase[ListPostsRequest, ListPostsResponse]):
    """Use case for listing published posts, optionally filtered and sorted."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
            pagination_settings: Default and maximum page sizes
        """
        self.post_service = post_service
        self.user_service = user_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with pagination, filters and sort

        Returns:
            Page of published posts

        Raises:
            ValidationError: If the author ID is malformed
        """
        page = PageRequest(
            page=request.page,
            page_size=resolve_page_size(
                request.limit,
                self.pagination_settings.posts_page_size,
                self.pagination_settings.max_page_size,
            ),
        )
        filters = PostFilter(
            category=request.category or None,
            tag=request.tag or None,
            author_id=(
                UserId(parse_uuid(request.author_id, "author_id"))
                if request.author_id
                else None
            ),
        )

        with logfire.span(
            "list_posts.execute",
            page=page.page,
            limit=page.limit,
            sort=request.sort.value,
        ):
            posts, pagination = await self.post_service.list_posts(
                page, filters, request.sort
            )
            users = await self.user_service.get_users_by_ids(
                [post.author_id for post in posts]
            )

            post_items = [
                PostListItem(
                    post_id=str(post.id),
                    slug=str(post.slug),
                    title=post.title,
                    excerpt=post.excerpt,
                    author=author_summary(post.author_id, users),
                    tags=post.tags,
                    category=post.category,
                    cover_image=post.cover_image,
                    views=post.views,
                    like_count=post.like_count,
                    comment_count=post.comment_count,
                    reading_time=post.reading_time,
                    created_at=post.created_at,
                )
                for post in posts
            ]

            return ListPostsResponse(posts=post_items, pagination=pagination)

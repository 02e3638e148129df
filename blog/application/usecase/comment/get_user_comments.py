"""Get user comments use case."""

from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import (
    CommentItem,
    PostSummary,
    comment_fields,
    post_summary,
    resolve_page_size,
)
from blog.config import PaginationSettings
from blog.domain.service import CommentService, PostService, UserService
from blog.domain.value import PageRequest, Pagination, UserId, parse_uuid


class UserCommentItem(CommentItem):
    """Comment with the post it belongs to."""

    post: PostSummary | None  # None if the post no longer exists


class GetUserCommentsRequest(BaseModel):
    """Get user comments request."""

    user_id: str  # UUID string
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class GetUserCommentsResponse(BaseModel):
    """Get user comments response."""

    user_id: str
    comments: list[UserCommentItem]
    pagination: Pagination


class GetUserCommentsUseCase(
    BaseUseCase[GetUserCommentsRequest, GetUserCommentsResponse]
):
    """Use case for listing a user's comments, newest first."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize get user comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service (post summaries)
            user_service: User domain service (author display fields)
            pagination_settings: Default and maximum page sizes
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.pagination_settings = pagination_settings

    async def execute(
        self, request: GetUserCommentsRequest
    ) -> GetUserCommentsResponse:
        """Execute get user comments flow.

        Args:
            request: Get user comments request with user ID and pagination

        Returns:
            Page of the user's comments with post summaries
        """
        user_id = UserId(parse_uuid(request.user_id, "user_id"))
        page = PageRequest(
            page=request.page,
            page_size=resolve_page_size(
                request.limit,
                self.pagination_settings.comments_page_size,
                self.pagination_settings.max_page_size,
            ),
        )

        comment_page = await self.comment_service.list_comments_by_user(user_id, page)

        posts = await self.post_service.get_posts_by_ids(
            [c.post_id for c in comment_page.comments]
        )
        users = await self.user_service.get_users_by_ids([user_id])

        items = [
            UserCommentItem(
                **comment_fields(comment, users),
                post=post_summary(posts[comment.post_id])
                if comment.post_id in posts
                else None,
            )
            for comment in comment_page.comments
        ]

        return GetUserCommentsResponse(
            user_id=request.user_id,
            comments=items,
            pagination=comment_page.pagination,
        )

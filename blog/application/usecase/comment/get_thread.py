"""Get thread use case."""

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import (
    CommentItem,
    comment_fields,
    resolve_page_size,
)
from blog.config import PaginationSettings
from blog.domain.service import CommentService, UserService
from blog.domain.value import PageRequest, Pagination, PostId, parse_uuid


class ThreadItem(CommentItem):
    """Top-level comment with its direct replies."""

    replies: list[CommentItem]


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str  # UUID string
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post_id: str
    comments: list[ThreadItem]
    pagination: Pagination


class GetThreadUseCase(BaseUseCase[GetThreadRequest, GetThreadResponse]):
    """Use case for reading a post's discussion, two levels deep."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service (author display fields)
            pagination_settings: Default and maximum page sizes
        """
        self.comment_service = comment_service
        self.user_service = user_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Top-level comments come oldest first; each carries its direct replies
        in reply order. Deeper replies are only referenced by ``reply_ids``.

        Args:
            request: Get thread request with post ID and pagination

        Returns:
            Page of top-level comments with replies and pagination metadata
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        page = PageRequest(
            page=request.page,
            page_size=resolve_page_size(
                request.limit,
                self.pagination_settings.comments_page_size,
                self.pagination_settings.max_page_size,
            ),
        )

        with logfire.span(
            "get_thread.execute", post_id=request.post_id, page=page.page
        ):
            thread_page = await self.comment_service.list_thread_for_post(
                post_id, page
            )

            author_ids = [
                c.author_id
                for thread in thread_page.threads
                for c in [thread.comment, *thread.replies]
            ]
            users = await self.user_service.get_users_by_ids(author_ids)

            items = [
                ThreadItem(
                    **comment_fields(thread.comment, users),
                    replies=[
                        CommentItem(**comment_fields(reply, users))
                        for reply in thread.replies
                    ],
                )
                for thread in thread_page.threads
            ]

            return GetThreadResponse(
                post_id=request.post_id,
                comments=items,
                pagination=thread_page.pagination,
            )

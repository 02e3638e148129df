"""Update comment use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import CommentItem, comment_fields
from blog.domain.service import CommentService, UserService
from blog.domain.value import CommentId, UserId, parse_uuid


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author or admin)
    content: str  # New content


class UpdateCommentResponse(CommentItem):
    """Update comment response."""


class UpdateCommentUseCase(BaseUseCase[UpdateCommentRequest, UpdateCommentResponse]):
    """Use case for editing a comment's content."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
            user_service: User service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, user ID and new content

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user is neither the author nor an admin
            ValidationError: If the content is invalid
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))

        updated = await self.comment_service.update_content(
            comment_id, request.content, user_id
        )

        users = await self.user_service.get_users_by_ids([updated.author_id])
        return UpdateCommentResponse(**comment_fields(updated, users))

"""Delete comment use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import CommentService
from blog.domain.value import CommentId, UserId, parse_uuid


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author or admin)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    message: str


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]):
    """Use case for deleting a comment together with all of its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))

        await self.comment_service.delete_comment(comment_id, user_id)

        return DeleteCommentResponse(
            comment_id=request.comment_id, message="Comment deleted"
        )

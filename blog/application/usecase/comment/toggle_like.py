"""Toggle like use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import LikeItem, like_items
from blog.domain.service import CommentService
from blog.domain.value import CommentId, UserId, parse_uuid


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    comment_id: str
    liked: bool  # Whether the user likes the comment after the toggle
    like_count: int
    likes: list[LikeItem]


class ToggleLikeUseCase(BaseUseCase[ToggleLikeRequest, ToggleLikeResponse]):
    """Use case for liking a comment, or removing the like if already present."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize toggle like use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))

        comment = await self.comment_service.toggle_like(comment_id, user_id)

        return ToggleLikeResponse(
            comment_id=str(comment.id),
            liked=comment.is_liked_by(user_id),
            like_count=comment.like_count,
            likes=like_items(comment.likes),
        )

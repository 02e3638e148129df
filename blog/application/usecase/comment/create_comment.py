"""Create comment use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import CommentItem, comment_fields
from blog.domain.service import CommentService, UserService
from blog.domain.value import CommentId, PostId, UserId, parse_uuid


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(CommentItem):
    """Create comment response."""


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CreateCommentResponse]):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service (author display fields)
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        The comment service inserts the comment, links it into the parent's
        replies and bumps the post's comment count.

        Args:
            request: Create comment request

        Returns:
            Created comment with its author resolved

        Raises:
            ValidationError: If an id is malformed or the content is invalid
            NotFoundError: If the post or parent comment doesn't exist
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        author_id = UserId(parse_uuid(request.author_id, "author_id"))
        parent_id = (
            CommentId(parse_uuid(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=author_id,
            content=request.content,
            parent_id=parent_id,
        )

        users = await self.user_service.get_users_by_ids([comment.author_id])
        return CreateCommentResponse(**comment_fields(comment, users))

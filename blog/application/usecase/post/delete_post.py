"""Delete post use case."""

import logfire
from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import CommentService, PostService
from blog.domain.value import PostId, UserId, parse_uuid


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author or admin)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted_comments: int
    message: str


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for deleting a post together with its discussion."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))

        with logfire.span("delete_post.execute", post_id=str(post_id)):
            await self.post_service.require_modifiable(post_id, user_id, "delete")
            removed = await self.comment_service.delete_comments_for_post(post_id)
            await self.post_service.remove_post(post_id)

        return DeletePostResponse(
            post_id=request.post_id,
            deleted_comments=removed,
            message="Post deleted",
        )

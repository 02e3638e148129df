"""Update post use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.post.get_post import GetPostResponse, post_fields
from blog.domain.service import PostService, UserService
from blog.domain.value import PostId, PostStatus, UserId, parse_uuid


class UpdatePostRequest(BaseModel):
    """Update post request. Fields left as None are unchanged."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author or admin)
    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    tags: list[str] | None = None
    category: str | None = None
    cover_image: str | None = None
    status: PostStatus | None = None


class UpdatePostResponse(GetPostResponse):
    """Update post response."""


class UpdatePostUseCase(BaseUseCase[UpdatePostRequest, UpdatePostResponse]):
    """Use case for editing a post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user is neither author nor admin
            pydantic.ValidationError: If the new values are invalid
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))
        changes = request.model_dump(
            exclude={"post_id", "user_id"}, exclude_none=True
        )

        post = await self.post_service.update_post(post_id, user_id, changes)
        users = await self.user_service.get_users_by_ids([post.author_id])
        return UpdatePostResponse(**post_fields(post, users))

"""Toggle post like use case."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.common import LikeItem, like_items
from blog.domain.service import PostService
from blog.domain.value import PostId, UserId, parse_uuid


class TogglePostLikeRequest(BaseModel):
    """Toggle post like request."""

    post_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class TogglePostLikeResponse(BaseModel):
    """Toggle post like response."""

    post_id: str
    liked: bool  # Whether the user likes the post after the toggle
    like_count: int
    likes: list[LikeItem]


class TogglePostLikeUseCase(
    BaseUseCase[TogglePostLikeRequest, TogglePostLikeResponse]
):
    """Use case for liking a post, or removing the like if already present."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: TogglePostLikeRequest) -> TogglePostLikeResponse:
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        user_id = UserId(parse_uuid(request.user_id, "user_id"))

        post = await self.post_service.toggle_like(post_id, user_id)

        return TogglePostLikeResponse(
            post_id=str(post.id),
            liked=post.is_liked_by(user_id),
            like_count=post.like_count,
            likes=like_items(post.likes),
        )

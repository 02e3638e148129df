"""Create post use case."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.post.get_post import GetPostResponse, post_fields
from blog.domain.model.post import Post
from blog.domain.service import PostService, UserService
from blog.domain.value import PostId, PostStatus, UserId, parse_uuid


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    content: str
    author_id: str  # User ID from authenticated user
    excerpt: str | None = None  # Derived from content if omitted
    tags: list[str] = Field(default_factory=list)
    category: str = "General"
    cover_image: str = ""
    status: PostStatus = PostStatus.DRAFT


class CreatePostResponse(GetPostResponse):
    """Create post response."""


class CreatePostUseCase(BaseUseCase[CreatePostRequest, CreatePostResponse]):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Load the author (via UserService)
        2. Generate unique slug from title (via PostService)
        3. Derive excerpt and reading time from the content
        4. Create Post entity (validation happens in domain model) and save it

        Args:
            request: Create post request

        Returns:
            Create post response with post details

        Raises:
            NotFoundError: If the author doesn't exist
            pydantic.ValidationError: If the post fields are invalid
        """
        author_id = UserId(parse_uuid(request.author_id, "author_id"))
        user = await self.user_service.get_by_id(author_id)  # Raises NotFoundError

        with logfire.span(
            "create_post.execute", title=request.title, author=str(user.username)
        ):
            post_id = PostId(uuid4())
            slug = await self.post_service.generate_unique_slug(request.title, post_id)

            now = datetime.now()
            post = Post(
                id=post_id,
                slug=slug,
                title=request.title,
                content=request.content,
                excerpt=request.excerpt or self.post_service.make_excerpt(request.content),
                author_id=author_id,
                tags=[tag.strip() for tag in request.tags if tag.strip()],
                category=request.category,
                cover_image=request.cover_image,
                status=request.status,
                comment_count=0,
                reading_time=self.post_service.estimate_reading_time(request.content),
                created_at=now,
                updated_at=now,
            )

            saved_post = await self.post_service.save_post(post)

            logfire.info(
                "Post created successfully",
                post_id=str(saved_post.id),
                slug=str(saved_post.slug),
            )

            return CreatePostResponse(**post_fields(saved_post, {user.id: user}))

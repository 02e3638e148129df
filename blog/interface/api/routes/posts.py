"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from blog.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    ListTagsResponse,
    ListTagsUseCase,
    ListTaxonomyRequest,
    TogglePostLikeRequest,
    TogglePostLikeResponse,
    TogglePostLikeUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from blog.domain.service import JWTService
from blog.domain.value import PostSort, PostStatus
from blog.interface.api.auth import require_user_id
from blog.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    excerpt: str | None = Field(default=None, max_length=300)
    tags: list[str] = Field(default_factory=list)
    category: str = Field(default="General", max_length=50)
    cover_image: str = ""
    status: PostStatus = PostStatus.DRAFT


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = Field(default=None, max_length=300)
    tags: list[str] | None = None
    category: str | None = Field(default=None, max_length=50)
    cover_image: str | None = None
    status: PostStatus | None = None


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post details
    """
    user_id = require_user_id(jwt_service, auth_token, "create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                content=request.content,
                excerpt=request.excerpt,
                tags=request.tags,
                category=request.category,
                cover_image=request.cover_image,
                status=request.status,
                author_id=user_id,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create post") from e


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    category: str | None = Query(default=None),
    tag: str | None = Query(default=None),
    author: str | None = Query(default=None),
    sort: PostSort = Query(default=PostSort.NEWEST),
) -> ListPostsResponse:
    """List published posts.

    Args:
        list_posts_use_case: List posts use case from DI
        page: 1-based page number
        limit: Page size (default 10, capped at 100)
        category: Only posts in this category
        tag: Only posts carrying this tag
        author: Only posts by this user ID
        sort: newest (default), oldest, popular (most viewed) or likes
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                page=page,
                limit=limit,
                category=category,
                tag=tag,
                author_id=author,
                sort=sort,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "list posts") from e


@router.get("/categories", response_model=ListCategoriesResponse)
async def list_categories(
    list_categories_use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """Categories used by published posts."""
    try:
        return await list_categories_use_case.execute(ListTaxonomyRequest())
    except Exception as e:
        raise to_http_exception(e, "list categories") from e


@router.get("/tags", response_model=ListTagsResponse)
async def list_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
) -> ListTagsResponse:
    """Tags used by published posts."""
    try:
        return await list_tags_use_case.execute(ListTaxonomyRequest())
    except Exception as e:
        raise to_http_exception(e, "list tags") from e


@router.get("/user/{user_id}", response_model=ListPostsResponse)
async def list_user_posts(
    user_id: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ListPostsResponse:
    """List a user's published posts, newest first."""
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(page=page, limit=limit, author_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "list user posts") from e


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> GetPostResponse:
    """Get a single post by ID. Each read counts as a view."""
    try:
        return await get_post_use_case.execute(GetPostRequest(post_id=post_id))
    except Exception as e:
        raise to_http_exception(e, "load post") from e


@router.put("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdatePostResponse:
    """Edit a post.

    Only the post author or an admin can edit.
    """
    user_id = require_user_id(jwt_service, auth_token, "edit posts")

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=post_id,
                user_id=user_id,
                **request.model_dump(exclude_none=True),
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update post") from e


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post and all of its comments.

    Only the post author or an admin can delete.
    """
    user_id = require_user_id(jwt_service, auth_token, "delete posts")

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=post_id, user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete post") from e


@router.post("/{post_id}/like", response_model=TogglePostLikeResponse)
async def toggle_post_like(
    post_id: str,
    toggle_post_like_use_case: FromDishka[TogglePostLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TogglePostLikeResponse:
    """Like a post, or remove the like if the user already has one."""
    user_id = require_user_id(jwt_service, auth_token, "like posts")

    try:
        return await toggle_post_like_use_case.execute(
            TogglePostLikeRequest(post_id=post_id, user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle post like") from e

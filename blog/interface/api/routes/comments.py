"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from blog.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from blog.domain.service import JWTService
from blog.interface.api.auth import require_user_id
from blog.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Content length is checked by the domain so that it yields 400.
    """

    content: str
    post_id: str
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str


@router.get("/post/{post_id}", response_model=GetThreadResponse)
async def get_thread(
    post_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> GetThreadResponse:
    """Get a page of a post's top-level comments with their direct replies.

    Args:
        post_id: Post UUID
        get_thread_use_case: Get thread use case from DI
        page: 1-based page number
        limit: Page size (default 20, capped at 100)

    Returns:
        Top-level comments oldest first, with pagination metadata
    """
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(post_id=post_id, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "load comments") from e


@router.get("/user/{user_id}", response_model=GetUserCommentsResponse)
async def get_user_comments(
    user_id: str,
    get_user_comments_use_case: FromDishka[GetUserCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> GetUserCommentsResponse:
    """Get a page of a user's comments, newest first."""
    try:
        return await get_user_comments_use_case.execute(
            GetUserCommentsRequest(user_id=user_id, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "load user comments") from e


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment details

    Raises:
        HTTPException: If not authenticated, the post or parent is missing,
            or validation fails
    """
    user_id = require_user_id(jwt_service, auth_token, "create comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=request.post_id,
                content=request.content,
                author_id=user_id,
                parent_id=request.parent_id,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create comment") from e


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Only the comment author or an admin can edit.
    """
    user_id = require_user_id(jwt_service, auth_token, "edit comments")

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, user_id=user_id, content=request.content
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update comment") from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies.

    Only the comment author or an admin can delete.
    """
    user_id = require_user_id(jwt_service, auth_token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete comment") from e


@router.post("/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or remove the like if the user already has one."""
    user_id = require_user_id(jwt_service, auth_token, "like comments")

    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(comment_id=comment_id, user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle like") from e

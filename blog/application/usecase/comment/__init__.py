"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase
from .get_user_comments import (
    GetUserCommentsRequest,
    GetUserCommentsResponse,
    GetUserCommentsUseCase,
)
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "GetUserCommentsRequest",
    "GetUserCommentsResponse",
    "GetUserCommentsUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]

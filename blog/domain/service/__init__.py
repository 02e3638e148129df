"""Domain services."""

from .authorization_service import AuthorizationService
from .base import Service
from .comment_service import CommentPage, CommentService, CommentThread, ThreadPage
from .jwt_service import JWTService
from .post_service import PostService
from .user_service import UserService

__all__ = [
    "AuthorizationService",
    "CommentPage",
    "CommentService",
    "CommentThread",
    "JWTService",
    "PostService",
    "Service",
    "ThreadPage",
    "UserService",
]

"""Domain value objects for the blog."""

from blog.domain.value.identifiers import CommentId, PostId, UserId, parse_uuid
from blog.domain.value.pagination import PageRequest, Pagination
from blog.domain.value.query import PostFilter
from blog.domain.value.types import PostSort, PostStatus, Slug, UserRole, Username

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "parse_uuid",
    # Pagination and listing criteria
    "PageRequest",
    "Pagination",
    "PostFilter",
    # Types
    "PostSort",
    "PostStatus",
    "Slug",
    "UserRole",
    "Username",
]

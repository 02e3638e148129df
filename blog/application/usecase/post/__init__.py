"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .like_post import (
    TogglePostLikeRequest,
    TogglePostLikeResponse,
    TogglePostLikeUseCase,
)
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .taxonomy import (
    ListCategoriesResponse,
    ListCategoriesUseCase,
    ListTagsResponse,
    ListTagsUseCase,
    ListTaxonomyRequest,
)
from .update_post import UpdatePostRequest, UpdatePostResponse, UpdatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "ListTagsResponse",
    "ListTagsUseCase",
    "ListTaxonomyRequest",
    "TogglePostLikeRequest",
    "TogglePostLikeResponse",
    "TogglePostLikeUseCase",
    "UpdatePostRequest",
    "UpdatePostResponse",
    "UpdatePostUseCase",
]

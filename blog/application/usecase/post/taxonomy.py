"""Category and tag listing use cases."""

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.service import PostService


class ListTaxonomyRequest(BaseModel):
    """Request for a category or tag listing."""


class ListCategoriesResponse(BaseModel):
    """Categories used by published posts."""

    categories: list[str]


class ListTagsResponse(BaseModel):
    """Tags used by published posts."""

    tags: list[str]


class ListCategoriesUseCase(BaseUseCase[ListTaxonomyRequest, ListCategoriesResponse]):
    """Use case for listing post categories."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: ListTaxonomyRequest) -> ListCategoriesResponse:
        return ListCategoriesResponse(
            categories=await self.post_service.list_categories()
        )


class ListTagsUseCase(BaseUseCase[ListTaxonomyRequest, ListTagsResponse]):
    """Use case for listing post tags."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: ListTaxonomyRequest) -> ListTagsResponse:
        return ListTagsResponse(tags=await self.post_service.list_tags())

"""Pagination value objects."""

import math

from pydantic import Field

from blog.domain.value.common import ValueObject


class PageRequest(ValueObject):
    """A 1-based page request."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        """Number of items to skip."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Maximum number of items to return."""
        return self.page_size


class Pagination(ValueObject):
    """Page metadata derived from a page request and a total count."""

    current_page: int
    page_size: int
    total_pages: int
    total: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_total(cls, request: PageRequest, total: int) -> "Pagination":
        """Build pagination metadata.

        Args:
            request: The page that was requested
            total: Total number of items across all pages

        Returns:
            Pagination metadata
        """
        total_pages = math.ceil(total / request.page_size) if total else 0
        return cls(
            current_page=request.page,
            page_size=request.page_size,
            total_pages=total_pages,
            total=total,
            has_next=request.page < total_pages,
            has_previous=request.page > 1,
        )

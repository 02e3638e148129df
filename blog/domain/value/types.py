"""Domain value objects for the blog.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from blog.domain.value.common import RootValueObject


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "user"
    ADMIN = "admin"


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Username(RootValueObject[str]):
    """Display name of a user.

    Must be 3-30 characters of letters, digits, underscores or hyphens.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_' or '-'"
            )
        return v


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'hello-world', 'notes-on-threaded-comments'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class PostSort(str, Enum):
    """Ordering of post listings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"  # Most viewed
    LIKES = "likes"  # Most liked

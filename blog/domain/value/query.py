"""Criteria for post listings."""

from typing import Optional

from blog.domain.value.common import ValueObject
from blog.domain.value.identifiers import UserId
from blog.domain.value.types import PostStatus


class PostFilter(ValueObject):
    """Which posts a listing includes. Unset criteria match every post."""

    status: Optional[PostStatus] = PostStatus.PUBLISHED
    category: Optional[str] = None
    tag: Optional[str] = None
    author_id: Optional[UserId] = None

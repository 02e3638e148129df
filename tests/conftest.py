"""Test configuration and fixtures."""

import os
import re
from uuid import UUID

import logfire

from blog.domain.value import Slug

# Keep retry backoff short so exhausted-retry tests stay fast
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORE__RETRY_BASE_DELAY", "0.001")
os.environ.setdefault("STORE__RETRY_MAX_DELAY", "0.005")

logfire.configure(send_to_logfire=False, console=False)


def make_slug(title: str, post_id: UUID | str | None = None) -> Slug:
    """Helper function to generate slugs for test posts.

    Mimics the slug generation logic for testing purposes.

    Args:
        title: Post title to generate slug from
        post_id: Optional post ID (UUID or str) for fallback slug generation

    Returns:
        Valid Slug value object
    """
    slug_str = re.sub(r"[^a-z0-9]+", "-", title.lower())
    slug_str = re.sub(r"-+", "-", slug_str)
    slug_str = slug_str.strip("-")[:100]

    if not slug_str and post_id:
        slug_str = f"post-{str(post_id)[:8]}"
    elif not slug_str:
        slug_str = "test-post"

    return Slug(slug_str)

"""Strongly typed identifiers for blog domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from blog.domain.error import ValidationError

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)


def parse_uuid(value: str, field: str) -> UUID:
    """Parse a client-supplied identifier.

    Args:
        value: Raw identifier string
        field: Field name used in the error message

    Returns:
        Parsed UUID

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid {field}: {value!r}")

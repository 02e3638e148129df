"""Base model for blog entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for users, posts and comments.

    Entities are frozen; updates produce changed copies via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

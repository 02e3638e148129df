"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Immutable value compared by its fields (pagination, page requests)."""

    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive, e.g. a username or slug.

    ``model_dump()`` yields the primitive, and ``str()`` renders it.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)

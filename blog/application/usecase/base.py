"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One blog operation: validate the request, call domain services, shape the response."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass

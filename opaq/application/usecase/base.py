"""Base use case."""

from abc import ABC, abstractmethod
from math import ceil
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from opaq.domain.value import UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class Pagination(BaseModel):
    """Pagination metadata for list responses."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=ceil(total / limit))


def parse_user_id(user_id: str | None) -> UserId | None:
    """Convert an optional caller ID string into a UserId."""
    return UserId(UUID(user_id)) if user_id else None

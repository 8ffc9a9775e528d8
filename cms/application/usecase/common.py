"""Response models shared by several use cases."""

import math

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    """Page-based pagination parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination block returned with paged lists."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class AffectedResponse(BaseModel):
    """Confirmation message for bulk operations."""

    message: str
    affected: int

"""Create category use case."""

from typing import Optional

from pydantic import BaseModel

from cms.domain.service import CategoryService

from ..base import BaseUseCase
from .view import CategoryResponse


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str
    description: Optional[str] = None


class CreateCategoryUseCase(BaseUseCase):
    """Use case for creating a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CategoryResponse:
        """Create a category; clashing slugs receive a numeric suffix.

        Raises:
            ValidationError: If the name is blank or has no slug characters
        """
        category = await self.category_service.create_category(
            request.name, request.description
        )
        return CategoryResponse.from_category(category, post_count=0)

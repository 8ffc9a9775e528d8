"""Update category use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import CategoryService
from cms.domain.value import CategoryId

from ..base import BaseUseCase
from .view import CategoryResponse


class UpdateCategoryRequest(BaseModel):
    """Update category request.

    An explicit ``description=None`` clears the description.
    """

    category_id: UUID
    name: Optional[str] = None
    description: Optional[str] = None


class UpdateCategoryUseCase(BaseUseCase):
    """Use case for renaming or describing a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> CategoryResponse:
        """Apply the given changes.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the new name is blank
        """
        category_id = CategoryId(request.category_id)
        clear_description = (
            "description" in request.model_fields_set and request.description is None
        )
        category = await self.category_service.update_category(
            category_id,
            name=request.name,
            description=request.description,
            clear_description=clear_description,
        )
        counts = await self.category_service.count_published_posts([category_id])
        return CategoryResponse.from_category(
            category, post_count=counts.get(category_id, 0)
        )

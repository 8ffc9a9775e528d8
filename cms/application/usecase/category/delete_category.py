"""Delete category use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import CategoryService
from cms.domain.value import CategoryId

from ..base import BaseUseCase
from ..common import MessageResponse


class DeleteCategoryRequest(BaseModel):
    """Delete category request."""

    category_id: UUID


class DeleteCategoryUseCase(BaseUseCase):
    """Use case for deleting an unused category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> MessageResponse:
        """Delete the category.

        Raises:
            NotFoundError: If the category does not exist
            ResourceInUseError: If posts still belong to it
        """
        await self.category_service.delete_category(CategoryId(request.category_id))
        return MessageResponse(message="Category deleted successfully")

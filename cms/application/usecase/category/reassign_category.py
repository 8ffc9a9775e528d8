"""Reassign category use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import CategoryService
from cms.domain.value import CategoryId

from ..base import BaseUseCase
from ..common import AffectedResponse


class ReassignCategoryRequest(BaseModel):
    """Move every post of ``category_id`` into ``new_category_id``."""

    category_id: UUID
    new_category_id: UUID


class ReassignCategoryUseCase(BaseUseCase):
    """Use case for moving posts between categories."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: ReassignCategoryRequest) -> AffectedResponse:
        """Reassign posts and report how many moved.

        Raises:
            ValidationError: If both categories are the same
            NotFoundError: If either category does not exist
        """
        new_category, affected = await self.category_service.reassign_category(
            CategoryId(request.category_id), CategoryId(request.new_category_id)
        )
        return AffectedResponse(
            message=f"{affected} posts reassigned to {new_category.name}",
            affected=affected,
        )

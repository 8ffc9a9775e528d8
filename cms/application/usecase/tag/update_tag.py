"""Update tag use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import TagService
from cms.domain.value import TagId

from ..base import BaseUseCase
from .view import TagResponse


class UpdateTagRequest(BaseModel):
    """Rename tag request."""

    tag_id: UUID
    name: str


class UpdateTagUseCase(BaseUseCase):
    """Use case for renaming a tag."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: UpdateTagRequest) -> TagResponse:
        """Rename the tag.

        Raises:
            NotFoundError: If the tag does not exist
            ValidationError: If the name is blank
            ConflictError: If another tag already uses the new slug
        """
        tag_id = TagId(request.tag_id)
        tag = await self.tag_service.update_tag(tag_id, request.name)
        counts = await self.tag_service.count_published_posts([tag_id])
        return TagResponse.from_tag(tag, post_count=counts.get(tag_id, 0))

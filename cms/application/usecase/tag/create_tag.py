"""Create tag use case."""

from pydantic import BaseModel

from cms.domain.service import TagService

from ..base import BaseUseCase
from .view import TagResponse


class CreateTagRequest(BaseModel):
    """Create tag request."""

    name: str


class CreateTagUseCase(BaseUseCase):
    """Use case for creating a tag ahead of its first use."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: CreateTagRequest) -> TagResponse:
        """Create a tag.

        Raises:
            ValidationError: If the name is blank or has no slug characters
            ConflictError: If a tag with the same slug exists
        """
        tag = await self.tag_service.create_tag(request.name)
        return TagResponse.from_tag(tag, post_count=0)

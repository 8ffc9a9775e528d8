"""Delete tag use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import TagService
from cms.domain.value import TagId

from ..base import BaseUseCase
from ..common import MessageResponse


class DeleteTagRequest(BaseModel):
    """Delete tag request."""

    tag_id: UUID


class DeleteTagUseCase(BaseUseCase):
    """Use case for deleting an unused tag."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: DeleteTagRequest) -> MessageResponse:
        """Delete the tag.

        Raises:
            NotFoundError: If the tag does not exist
            ResourceInUseError: If posts still carry it
        """
        await self.tag_service.delete_tag(TagId(request.tag_id))
        return MessageResponse(message="Tag deleted successfully")

"""Remove tag from posts use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import TagService
from cms.domain.value import TagId

from ..base import BaseUseCase
from ..common import AffectedResponse


class RemoveTagFromPostsRequest(BaseModel):
    """Remove tag from posts request."""

    tag_id: UUID


class RemoveTagFromPostsUseCase(BaseUseCase):
    """Use case for unlinking a tag from every post before deleting it."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: RemoveTagFromPostsRequest) -> AffectedResponse:
        """Unlink the tag from all posts.

        Raises:
            NotFoundError: If the tag does not exist
        """
        removed = await self.tag_service.remove_from_posts(TagId(request.tag_id))
        return AffectedResponse(
            message=f"Tag removed from {removed} posts", affected=removed
        )

"""Popular tags use case."""

from pydantic import BaseModel, Field

from cms.domain.service import TagService

from ..base import BaseUseCase
from .view import TagResponse


class PopularTagsRequest(BaseModel):
    """Popular tags request."""

    limit: int = Field(default=10, ge=1, le=100)


class PopularTagsResponse(BaseModel):
    """Tags ordered by published-post count, most used first."""

    tags: list[TagResponse]


class PopularTagsUseCase(BaseUseCase):
    """Use case for the popular tags widget."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: PopularTagsRequest) -> PopularTagsResponse:
        popular = await self.tag_service.get_popular_tags(limit=request.limit)
        return PopularTagsResponse(
            tags=[TagResponse.from_tag(tag, post_count=count) for tag, count in popular]
        )

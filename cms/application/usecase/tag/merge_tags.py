"""Merge tags use case."""

from uuid import UUID

from pydantic import BaseModel

from cms.domain.service import TagService
from cms.domain.value import TagId

from ..base import BaseUseCase
from .view import TagResponse


class MergeTagsRequest(BaseModel):
    """Merge ``tag_id`` into ``target_tag_id``."""

    tag_id: UUID
    target_tag_id: UUID


class MergeTagsResponse(BaseModel):
    """Merge result."""

    message: str
    merged_posts: int
    target_tag: TagResponse


class MergeTagsUseCase(BaseUseCase):
    """Use case for folding a duplicate tag into another."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: MergeTagsRequest) -> MergeTagsResponse:
        """Merge the tags and delete the source.

        Raises:
            InvalidMergeError: If both IDs name the same tag
            NotFoundError: If either tag does not exist
        """
        source, target, merged = await self.tag_service.merge_tag(
            TagId(request.tag_id), TagId(request.target_tag_id)
        )
        counts = await self.tag_service.count_published_posts([target.id])
        return MergeTagsResponse(
            message=f'Tag "{source.name}" merged into "{target.name}"',
            merged_posts=merged,
            target_tag=TagResponse.from_tag(target, post_count=counts.get(target.id, 0)),
        )

"""Get tag use case."""

from pydantic import BaseModel

from cms.application.usecase.post.view import PostSummary
from cms.domain.repository import PostSortOrder
from cms.domain.service import PostService, TagService
from cms.domain.value import PostStatus

from ..base import BaseUseCase
from ..common import PageRequest, Pagination
from .view import TagResponse


class GetTagRequest(PageRequest):
    """Get tag request."""

    slug: str


class TagDetailResponse(BaseModel):
    """Tag with a page of its published posts."""

    tag: TagResponse
    posts: list[PostSummary]
    pagination: Pagination


class GetTagUseCase(BaseUseCase):
    """Use case for a tag page."""

    def __init__(self, tag_service: TagService, post_service: PostService) -> None:
        self.tag_service = tag_service
        self.post_service = post_service

    async def execute(self, request: GetTagRequest) -> TagDetailResponse:
        """Fetch a tag and its published posts, newest first.

        Raises:
            NotFoundError: If no tag has this slug
        """
        tag = await self.tag_service.get_by_slug(request.slug)

        posts, total = await self.post_service.list_posts(
            status=PostStatus.PUBLISHED,
            tag_slug=tag.slug.root,
            sort=PostSortOrder.PUBLISHED,
            limit=request.limit,
            offset=request.offset,
        )

        return TagDetailResponse(
            tag=TagResponse.from_tag(tag, post_count=total),
            posts=[PostSummary.from_post(p) for p in posts],
            pagination=Pagination.build(request.page, request.limit, total),
        )

"""List tags use case."""

from typing import Optional

from pydantic import BaseModel, Field

from cms.application.usecase.post.view import PostSummary
from cms.domain.repository import PostSortOrder
from cms.domain.service import PostService, TagService
from cms.domain.value import PostStatus

from ..base import BaseUseCase
from .view import TagResponse

# Recent posts embedded per tag
RECENT_POSTS_LIMIT = 5


class ListTagsRequest(BaseModel):
    """List tags request."""

    search: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=200)
    include_posts: bool = False
    include_count: bool = False


class ListTagsResponse(BaseModel):
    """Tags ordered by name."""

    tags: list[TagResponse]


class ListTagsUseCase(BaseUseCase):
    """Use case for listing and searching tags."""

    def __init__(self, tag_service: TagService, post_service: PostService) -> None:
        """Initialize list tags use case.

        Args:
            tag_service: Tag domain service
            post_service: Post domain service (for embedded posts)
        """
        self.tag_service = tag_service
        self.post_service = post_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """List tags matching the search, optionally with counts and posts."""
        tags = await self.tag_service.get_all_tags(
            search=request.search or None, limit=request.limit
        )

        counts = {}
        if request.include_count:
            counts = await self.tag_service.count_published_posts([t.id for t in tags])

        results = []
        for tag in tags:
            posts = None
            if request.include_posts:
                recent, _ = await self.post_service.list_posts(
                    status=PostStatus.PUBLISHED,
                    tag_slug=tag.slug.root,
                    sort=PostSortOrder.PUBLISHED,
                    limit=RECENT_POSTS_LIMIT,
                )
                posts = [PostSummary.from_post(p) for p in recent]

            post_count = None
            if request.include_count:
                post_count = counts.get(tag.id, 0)
            results.append(TagResponse.from_tag(tag, post_count=post_count, posts=posts))

        return ListTagsResponse(tags=results)

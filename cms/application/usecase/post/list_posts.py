"""List posts use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from cms.domain.error import NotAuthorizedError
from cms.domain.service import PostService, UserService
from cms.domain.value import CategoryId, PostStatus, UserId

from ..base import BaseUseCase
from ..common import PageRequest, Pagination
from .view import PostSummary


class ListPostsRequest(PageRequest):
    """List posts request.

    ``status=None`` lists every status. Anything other than published
    requires an author or admin viewer.
    """

    status: Optional[PostStatus] = PostStatus.PUBLISHED
    category_id: Optional[UUID] = None
    tag: Optional[str] = None  # Tag slug
    search: Optional[str] = None
    viewer_id: Optional[UUID] = None


class ListPostsResponse(BaseModel):
    """Paginated post list."""

    posts: list[PostSummary]
    pagination: Pagination


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts with filters."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Raises:
            NotAuthorizedError: If a reader asks for unpublished posts
        """
        if request.status != PostStatus.PUBLISHED:
            await self._ensure_can_see_unpublished(request.viewer_id)

        posts, total = await self.post_service.list_posts(
            status=request.status,
            category_id=CategoryId(request.category_id) if request.category_id else None,
            tag_slug=request.tag,
            search=request.search,
            limit=request.limit,
            offset=request.offset,
        )

        return ListPostsResponse(
            posts=[PostSummary.from_post(p) for p in posts],
            pagination=Pagination.build(request.page, request.limit, total),
        )

    async def _ensure_can_see_unpublished(self, viewer_id: Optional[UUID]) -> None:
        if viewer_id is not None:
            viewer = await self.user_service.get_by_id(UserId(viewer_id))
            if viewer.is_active and viewer.role.can_author:
                return
        logfire.warn(
            "Unpublished post listing refused",
            viewer_id=str(viewer_id) if viewer_id else None,
        )
        raise NotAuthorizedError("Author access required to list unpublished posts")

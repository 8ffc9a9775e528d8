"""Get post use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from cms.domain.error import NotFoundError
from cms.domain.service import PostService, UserService
from cms.domain.value import UserId

from ..base import BaseUseCase
from .view import PostResponse


class GetPostRequest(BaseModel):
    """Get post request."""

    slug: str
    viewer_id: Optional[UUID] = None


class GetPostUseCase(BaseUseCase):
    """Use case for fetching a single post by slug."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetPostRequest) -> PostResponse:
        """Fetch a post visible to the viewer.

        Drafts and archived posts are reported as missing to anyone but
        their author and admins.

        Raises:
            NotFoundError: If the post does not exist or is hidden
        """
        post = await self.post_service.get_post_by_slug(request.slug)

        viewer = None
        if request.viewer_id is not None:
            viewer = await self.user_service.get_by_id(UserId(request.viewer_id))

        if not self.post_service.can_view(post, viewer):
            raise NotFoundError("Post", request.slug)

        return PostResponse.from_post(post)

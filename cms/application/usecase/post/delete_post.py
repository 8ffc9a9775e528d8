"""Delete post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cms.domain.service import PostService, UserService
from cms.domain.value import PostId, UserId

from ..base import BaseUseCase
from ..common import MessageResponse


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: UUID
    user_id: UUID


class DeletePostUseCase(BaseUseCase):
    """Use case for deleting a post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: DeletePostRequest) -> MessageResponse:
        """Delete a post owned by the user (or any post, for admins).

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is neither the owner nor an admin
        """
        with logfire.span("delete_post.execute", post_id=str(request.post_id)):
            post = await self.post_service.get_post_by_id(PostId(request.post_id))
            user = await self.user_service.get_by_id(UserId(request.user_id))
            self.post_service.ensure_can_modify(post, user, verb="delete")

            await self.post_service.delete_post(post.id)
            return MessageResponse(message="Post deleted successfully")

"""Bulk post action use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from cms.domain.error import ValidationError
from cms.domain.service import PostService
from cms.domain.value import BulkAction, PostId

from ..base import BaseUseCase
from ..common import AffectedResponse

# Past tense used in the confirmation message
_DONE = {
    BulkAction.PUBLISH: "published",
    BulkAction.UNPUBLISH: "unpublished",
    BulkAction.ARCHIVE: "archived",
    BulkAction.DELETE: "deleted",
}


class BulkPostActionRequest(BaseModel):
    """Bulk post action request.

    ``action`` is kept as a plain string so an unknown action is reported
    as a validation error rather than a schema error.
    """

    action: str
    post_ids: list[UUID] = Field(default_factory=list)


class BulkPostActionUseCase(BaseUseCase):
    """Use case for admin bulk publish/unpublish/archive/delete."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: BulkPostActionRequest) -> AffectedResponse:
        """Apply the action to every listed post.

        Raises:
            ValidationError: If the action is unknown or no posts are given
        """
        try:
            action = BulkAction(request.action)
        except ValueError:
            choices = ", ".join(a.value for a in BulkAction)
            raise ValidationError(f"Invalid action. Must be one of: {choices}")

        affected = await self.post_service.bulk_action(
            action, [PostId(pid) for pid in request.post_ids]
        )
        return AffectedResponse(
            message=f"{affected} posts {_DONE[action]} successfully", affected=affected
        )

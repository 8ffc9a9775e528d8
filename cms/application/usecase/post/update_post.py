"""Update post use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from cms.domain.service import CategoryService, PostService, TagService, UserService
from cms.domain.value import CategoryId, PostId, PostStatus, UserId

from ..base import BaseUseCase
from .view import PostResponse

_CONTENT_FIELDS = (
    "content",
    "excerpt",
    "featured_image",
    "meta_title",
    "meta_description",
    "meta_keywords",
)


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only fields that were explicitly set are applied, so ``category_id=None``
    removes the category while an omitted ``category_id`` keeps it. ``tags``
    always replaces the post's tag set; omitting it clears the tags.
    """

    post_id: UUID
    user_id: UUID
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[PostStatus] = None
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class UpdatePostUseCase(BaseUseCase):
    """Use case for editing a post."""

    def __init__(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        user_service: UserService,
    ) -> None:
        self.post_service = post_service
        self.category_service = category_service
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: UpdatePostRequest) -> PostResponse:
        """Execute post update flow.

        Raises:
            NotFoundError: If the post, user or new category does not exist
            NotAuthorizedError: If the user is neither the owner nor an admin
            ValidationError: If the title or content would become blank
        """
        with logfire.span("update_post.execute", post_id=str(request.post_id)):
            post_id = PostId(request.post_id)
            post = await self.post_service.get_post_by_id(post_id)
            user = await self.user_service.get_by_id(UserId(request.user_id))
            self.post_service.ensure_can_modify(post, user)

            given = request.model_fields_set
            changes = {k: getattr(request, k) for k in _CONTENT_FIELDS if k in given}

            category_id = None
            if "category_id" in given and request.category_id:
                category_id = CategoryId(request.category_id)
                await self.category_service.get_by_id(category_id)

            await self.post_service.update_post(
                post,
                title=request.title if "title" in given else None,
                status=request.status if "status" in given else None,
                **changes,
            )

            if "category_id" in given:
                await self.category_service.set_post_category(post_id, category_id)
            await self.tag_service.reconcile_tags(post_id, request.tags)

            updated = await self.post_service.get_post_by_id(post_id)
            return PostResponse.from_post(updated)

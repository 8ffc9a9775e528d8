"""Create post use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from cms.domain.error import NotAuthorizedError
from cms.domain.service import CategoryService, PostService, TagService, UserService
from cms.domain.value import CategoryId, PostStatus, UserId

from ..base import BaseUseCase
from .view import PostResponse


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: UUID
    title: str
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)  # Tag names
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post with its category and tags."""

    def __init__(
        self,
        post_service: PostService,
        category_service: CategoryService,
        tag_service: TagService,
        user_service: UserService,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            category_service: Category domain service
            tag_service: Tag domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.category_service = category_service
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute post creation flow.

        Steps:
        1. Load the author and check they may write
        2. Check the category exists
        3. Create the post with a unique slug
        4. Link the category and reconcile tags by name

        All steps share the request transaction.

        Raises:
            NotFoundError: If the author or category does not exist
            NotAuthorizedError: If the author lacks the author role
            ValidationError: If title or content is blank or a tag name is unusable
        """
        with logfire.span(
            "create_post.execute",
            author_id=str(request.author_id),
            title=request.title,
            tag_count=len(request.tags),
        ):
            author = await self.user_service.get_by_id(UserId(request.author_id))
            if not author.role.can_author:
                raise NotAuthorizedError("Author access required")

            category_id = None
            if request.category_id:
                category_id = CategoryId(request.category_id)
                await self.category_service.get_by_id(category_id)

            post = await self.post_service.create_post(
                author=author,
                title=request.title,
                content=request.content,
                status=request.status,
                excerpt=request.excerpt,
                featured_image=request.featured_image,
                meta_title=request.meta_title,
                meta_description=request.meta_description,
                meta_keywords=request.meta_keywords,
            )

            if category_id:
                await self.category_service.set_post_category(post.id, category_id)
            if request.tags:
                await self.tag_service.reconcile_tags(post.id, request.tags)

            created = await self.post_service.get_post_by_id(post.id)
            return PostResponse.from_post(created)

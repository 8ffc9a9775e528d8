"""Get category use case."""

from pydantic import BaseModel

from cms.application.usecase.post.view import PostSummary
from cms.domain.repository import PostSortOrder
from cms.domain.service import CategoryService, PostService
from cms.domain.value import PostStatus

from ..base import BaseUseCase
from ..common import PageRequest, Pagination
from .view import CategoryResponse


class GetCategoryRequest(PageRequest):
    """Get category request."""

    slug: str


class CategoryDetailResponse(BaseModel):
    """Category with a page of its published posts."""

    category: CategoryResponse
    posts: list[PostSummary]
    pagination: Pagination


class GetCategoryUseCase(BaseUseCase):
    """Use case for a category page."""

    def __init__(
        self, category_service: CategoryService, post_service: PostService
    ) -> None:
        self.category_service = category_service
        self.post_service = post_service

    async def execute(self, request: GetCategoryRequest) -> CategoryDetailResponse:
        """Fetch a category and its published posts, newest first.

        Raises:
            NotFoundError: If no category has this slug
        """
        category = await self.category_service.get_by_slug(request.slug)

        posts, total = await self.post_service.list_posts(
            status=PostStatus.PUBLISHED,
            category_id=category.id,
            sort=PostSortOrder.PUBLISHED,
            limit=request.limit,
            offset=request.offset,
        )

        return CategoryDetailResponse(
            category=CategoryResponse.from_category(category, post_count=total),
            posts=[PostSummary.from_post(p) for p in posts],
            pagination=Pagination.build(request.page, request.limit, total),
        )

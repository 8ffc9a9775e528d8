"""List categories use case."""

from pydantic import BaseModel

from cms.application.usecase.post.view import PostSummary
from cms.domain.repository import PostSortOrder
from cms.domain.service import CategoryService, PostService
from cms.domain.value import PostStatus

from ..base import BaseUseCase
from .view import CategoryResponse

# Recent posts embedded per category
RECENT_POSTS_LIMIT = 5


class ListCategoriesRequest(BaseModel):
    """List categories request."""

    include_posts: bool = False
    include_count: bool = False


class ListCategoriesResponse(BaseModel):
    """Categories ordered by name."""

    categories: list[CategoryResponse]


class ListCategoriesUseCase(BaseUseCase):
    """Use case for listing categories."""

    def __init__(
        self, category_service: CategoryService, post_service: PostService
    ) -> None:
        """Initialize list categories use case.

        Args:
            category_service: Category domain service
            post_service: Post domain service (for embedded posts)
        """
        self.category_service = category_service
        self.post_service = post_service

    async def execute(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        """List all categories, optionally with counts and recent posts.

        Counts and embedded posts only consider published posts.
        """
        categories = await self.category_service.get_all_categories()

        counts = {}
        if request.include_count:
            counts = await self.category_service.count_published_posts(
                [c.id for c in categories]
            )

        results = []
        for category in categories:
            posts = None
            if request.include_posts:
                recent, _ = await self.post_service.list_posts(
                    status=PostStatus.PUBLISHED,
                    category_id=category.id,
                    sort=PostSortOrder.PUBLISHED,
                    limit=RECENT_POSTS_LIMIT,
                )
                posts = [PostSummary.from_post(p) for p in recent]

            post_count = None
            if request.include_count:
                post_count = counts.get(category.id, 0)
            results.append(
                CategoryResponse.from_category(category, post_count=post_count, posts=posts)
            )

        return ListCategoriesResponse(categories=results)

"""In-memory category repository for testing."""

from typing import Optional

from cms.domain.error import ConcurrencyConflictError
from cms.domain.model.category import Category
from cms.domain.repository.category import CategoryRepository
from cms.domain.value import CategoryId, PostId, PostStatus, Slug

from .database import InMemoryDatabase


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        return self._db.categories.get(category_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug."""
        for category in self._db.categories.values():
            if category.slug == slug:
                return category
        return None

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        return sorted(self._db.categories.values(), key=lambda c: c.name)

    async def slug_exists(
        self, slug: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if another category uses the slug."""
        return any(
            c.slug.root == slug and c.id != exclude_id
            for c in self._db.categories.values()
        )

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        if await self.slug_exists(category.slug.root, exclude_id=category.id):
            raise ConcurrencyConflictError("Conflicting category slug")
        self._db.categories[category.id] = category
        return category

    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category."""
        self._db.categories.pop(category_id, None)

    async def count_posts(
        self, category_id: CategoryId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a category."""
        counts = await self.count_posts_by_category([category_id], status)
        return counts.get(category_id, 0)

    async def count_posts_by_category(
        self, category_ids: list[CategoryId], status: Optional[PostStatus] = None
    ) -> dict[CategoryId, int]:
        """Count linked posts per category."""
        counts: dict[CategoryId, int] = {}
        for post_id, category_id in self._db.post_categories.items():
            if category_id not in category_ids:
                continue
            post = self._db.posts.get(post_id)
            if status and (post is None or post.status != status):
                continue
            counts[category_id] = counts.get(category_id, 0) + 1
        return counts

    async def set_post_category(
        self, post_id: PostId, category_id: Optional[CategoryId]
    ) -> None:
        """Replace the category edge of a post."""
        if category_id:
            self._db.post_categories[post_id] = category_id
        else:
            self._db.post_categories.pop(post_id, None)

    async def reassign(self, old_id: CategoryId, new_id: CategoryId) -> int:
        """Move every post edge from one category to another."""
        moved = [
            post_id
            for post_id, category_id in self._db.post_categories.items()
            if category_id == old_id
        ]
        for post_id in moved:
            self._db.post_categories[post_id] = new_id
        return len(moved)

"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cms.domain.model.category import Category
from cms.domain.value import CategoryId, PostId, PostStatus, Slug


class CategoryRepository(ABC):
    """Repository for Category entities and post-category edges."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID.

        Args:
            category_id: Category identifier

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug.

        Args:
            slug: Category slug

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        pass

    @abstractmethod
    async def slug_exists(
        self, slug: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check whether a category already uses a slug.

        Args:
            slug: Candidate slug
            exclude_id: Category whose own row is ignored (for renames)

        Returns:
            True if another category holds the slug
        """
        pass

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Save or update a category.

        Args:
            category: Category to save

        Returns:
            Saved category

        Raises:
            ConcurrencyConflictError: If the slug was taken concurrently
        """
        pass

    @abstractmethod
    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category.

        Args:
            category_id: Category identifier
        """
        pass

    @abstractmethod
    async def count_posts(
        self, category_id: CategoryId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a category.

        Args:
            category_id: Category identifier
            status: Only count posts with this status (None for all)

        Returns:
            Number of linked posts
        """
        pass

    @abstractmethod
    async def count_posts_by_category(
        self, category_ids: list[CategoryId], status: Optional[PostStatus] = None
    ) -> dict[CategoryId, int]:
        """Count linked posts for many categories in a single query.

        Args:
            category_ids: Categories to count for
            status: Only count posts with this status (None for all)

        Returns:
            Mapping of category ID to post count (missing IDs have no posts)
        """
        pass

    @abstractmethod
    async def set_post_category(
        self, post_id: PostId, category_id: Optional[CategoryId]
    ) -> None:
        """Replace the category edge of a post.

        Args:
            post_id: Post identifier
            category_id: New category, or None to leave the post uncategorised
        """
        pass

    @abstractmethod
    async def reassign(self, old_id: CategoryId, new_id: CategoryId) -> int:
        """Move every post edge from one category to another.

        Args:
            old_id: Category whose edges are rewritten
            new_id: Category the edges point to afterwards

        Returns:
            Number of rewritten edges
        """
        pass

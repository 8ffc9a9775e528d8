"""Category domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from cms.domain.error import (
    ConcurrencyConflictError,
    NotFoundError,
    ResourceInUseError,
    ValidationError,
)
from cms.domain.model.category import Category
from cms.domain.repository import CategoryRepository
from cms.domain.value import CategoryId, PostId, PostStatus, Slug, SluggableKind

from .base import Service
from .slug_service import SlugService, require_name


def _clean_description(description: Optional[str]) -> Optional[str]:
    """Trim a description; blank becomes None."""
    if description is None:
        return None
    return description.strip() or None


class CategoryService(Service):
    """Domain service for category operations."""

    def __init__(
        self, category_repository: CategoryRepository, slug_service: SlugService
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            slug_service: Slug generation service
        """
        self.category_repository = category_repository
        self.slug_service = slug_service

    async def get_by_id(self, category_id: CategoryId) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If category not found
        """
        category = await self.category_repository.find_by_id(category_id)
        if not category:
            logfire.warn("Category not found", category_id=str(category_id))
            raise NotFoundError("Category", str(category_id))
        return category

    async def get_by_slug(self, slug: str) -> Category:
        """Get category by slug.

        Raises:
            NotFoundError: If category not found
        """
        with logfire.span("category_service.get_by_slug", slug=slug):
            category = None
            if slug and slug == self.slug_service.slugify(slug):
                category = await self.category_repository.find_by_slug(Slug(slug))
            if not category:
                logfire.warn("Category not found by slug", slug=slug)
                raise NotFoundError("Category", slug)
            return category

    async def get_all_categories(self) -> list[Category]:
        """Get every category ordered by name."""
        with logfire.span("category_service.get_all_categories"):
            categories = await self.category_repository.find_all()
            logfire.info("Categories retrieved", count=len(categories))
            return categories

    async def count_published_posts(
        self, category_ids: list[CategoryId]
    ) -> dict[CategoryId, int]:
        """Count published posts for each category."""
        return await self.category_repository.count_posts_by_category(
            category_ids, status=PostStatus.PUBLISHED
        )

    async def create_category(
        self, name: str, description: Optional[str] = None
    ) -> Category:
        """Create a category with a unique slug.

        If another writer takes the resolved slug between probing and insert,
        the resolve-and-insert sequence runs once more.

        Args:
            name: Category display name
            description: Optional description

        Returns:
            Created category

        Raises:
            ValidationError: If the name is blank or has no slug characters
            ConcurrencyConflictError: If the retry collides as well
        """
        name = require_name(name, "Category name is required")
        with logfire.span("category_service.create_category", name=name):
            category_id = CategoryId(uuid4())
            description = _clean_description(description)

            try:
                saved = await self._insert(category_id, name, description)
            except ConcurrencyConflictError:
                logfire.warn("Category slug taken concurrently, retrying", name=name)
                saved = await self._insert(category_id, name, description)

            logfire.info(
                "Category created", category_id=str(saved.id), slug=saved.slug.root
            )
            return saved

    async def _insert(
        self, category_id: CategoryId, name: str, description: Optional[str]
    ) -> Category:
        """Resolve a free slug and insert the category."""
        slug = await self.slug_service.generate_unique_slug(
            SluggableKind.CATEGORY, name
        )
        return await self.category_repository.save(
            Category(id=category_id, name=name, slug=slug, description=description)
        )

    async def update_category(
        self,
        category_id: CategoryId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> Category:
        """Update a category's name and/or description.

        A changed name re-derives the slug; the category's own current slug
        does not count as a collision.

        Args:
            category_id: Category to update
            name: New name (None keeps the current one)
            description: New description (None keeps the current one)
            clear_description: Set the description to None

        Returns:
            Updated category

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the new name is blank or has no slug characters
            ConcurrencyConflictError: If the new slug is taken concurrently twice
        """
        with logfire.span(
            "category_service.update_category", category_id=str(category_id)
        ):
            category = await self.get_by_id(category_id)
            changes: dict = {"updated_at": datetime.now()}

            if name is not None:
                name = require_name(name, "Category name cannot be empty")
                changes["name"] = name
                if name != category.name:
                    changes["slug"] = await self.slug_service.generate_unique_slug(
                        SluggableKind.CATEGORY, name, exclude_id=category_id
                    )

            if clear_description:
                changes["description"] = None
            elif description is not None:
                changes["description"] = _clean_description(description)

            try:
                saved = await self.category_repository.save(
                    category.model_copy(update=changes)
                )
            except ConcurrencyConflictError:
                if "slug" not in changes:
                    raise
                logfire.warn(
                    "Category slug taken concurrently, retrying",
                    category_id=str(category_id),
                )
                changes["slug"] = await self.slug_service.generate_unique_slug(
                    SluggableKind.CATEGORY, changes["name"], exclude_id=category_id
                )
                saved = await self.category_repository.save(
                    category.model_copy(update=changes)
                )
            logfire.info(
                "Category updated", category_id=str(category_id), slug=saved.slug.root
            )
            return saved

    async def delete_category(self, category_id: CategoryId) -> None:
        """Delete a category that no post uses.

        Raises:
            NotFoundError: If the category does not exist
            ResourceInUseError: If posts are still linked to the category
        """
        with logfire.span(
            "category_service.delete_category", category_id=str(category_id)
        ):
            await self.get_by_id(category_id)

            post_count = await self.category_repository.count_posts(category_id)
            if post_count > 0:
                logfire.warn(
                    "Category still in use",
                    category_id=str(category_id),
                    post_count=post_count,
                )
                raise ResourceInUseError(
                    "category",
                    post_count,
                    "Please reassign or delete posts first.",
                )

            await self.category_repository.delete(category_id)
            logfire.info("Category deleted", category_id=str(category_id))

    async def reassign_category(
        self, old_id: CategoryId, new_id: CategoryId
    ) -> tuple[Category, int]:
        """Move every post from one category to another.

        Args:
            old_id: Category the posts leave
            new_id: Category the posts join

        Returns:
            (new category, number of reassigned posts)

        Raises:
            ValidationError: If both IDs are the same
            NotFoundError: If either category does not exist
        """
        with logfire.span(
            "category_service.reassign_category",
            old_id=str(old_id),
            new_id=str(new_id),
        ):
            if old_id == new_id:
                raise ValidationError("Cannot reassign a category to itself")

            await self.get_by_id(old_id)
            new_category = await self.get_by_id(new_id)

            affected = await self.category_repository.reassign(old_id, new_id)
            logfire.info(
                "Posts reassigned",
                old_id=str(old_id),
                new_id=str(new_id),
                affected=affected,
            )
            return new_category, affected

    async def set_post_category(
        self, post_id: PostId, category_id: Optional[CategoryId]
    ) -> Optional[Category]:
        """Replace the category of a post.

        Args:
            post_id: Post identifier
            category_id: New category, or None to remove it

        Returns:
            The linked category, or None

        Raises:
            NotFoundError: If the category does not exist
        """
        category = await self.get_by_id(category_id) if category_id else None
        await self.category_repository.set_post_category(post_id, category_id)
        logfire.info(
            "Post category set",
            post_id=str(post_id),
            category_id=str(category_id) if category_id else None,
        )
        return category

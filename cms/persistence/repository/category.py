"""PostgreSQL implementation of Category repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cms.domain.model.category import Category
from cms.domain.repository import CategoryRepository
from cms.domain.value import CategoryId, PostId, PostStatus, Slug
from cms.persistence.database import unique_guard
from cms.persistence.mappers import category_to_dict, row_to_category
from cms.persistence.tables import categories_table, post_categories_table, posts_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug."""
        stmt = select(categories_table).where(categories_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        stmt = select(categories_table).order_by(categories_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def slug_exists(
        self, slug: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if another category uses the slug."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.slug == slug)
        )
        if exclude_id:
            stmt = stmt.where(categories_table.c.id != exclude_id)
        result = await self.session.execute(stmt)
        exists = (result.scalar() or 0) > 0
        logfire.debug("Category slug existence check", slug=slug, exists=exists)
        return exists

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        category_dict = category_to_dict(category)

        existing = await self.find_by_id(category.id)

        async with unique_guard(self.session, "category slug"):
            if existing:
                stmt = (
                    update(categories_table)
                    .where(categories_table.c.id == category.id)
                    .values(**category_dict)
                )
            else:
                stmt = insert(categories_table).values(**category_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return category

    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category."""
        stmt = delete(categories_table).where(categories_table.c.id == category_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_posts(
        self, category_id: CategoryId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a category."""
        counts = await self.count_posts_by_category([category_id], status)
        return counts.get(category_id, 0)

    async def count_posts_by_category(
        self, category_ids: list[CategoryId], status: Optional[PostStatus] = None
    ) -> dict[CategoryId, int]:
        """Count linked posts per category in a single query."""
        if not category_ids:
            return {}

        stmt = (
            select(post_categories_table.c.category_id, func.count())
            .select_from(post_categories_table)
            .where(post_categories_table.c.category_id.in_(category_ids))
            .group_by(post_categories_table.c.category_id)
        )
        if status:
            stmt = stmt.join(
                posts_table, posts_table.c.id == post_categories_table.c.post_id
            ).where(posts_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return {CategoryId(row[0]): row[1] for row in result.fetchall()}

    async def set_post_category(
        self, post_id: PostId, category_id: Optional[CategoryId]
    ) -> None:
        """Replace the category edge of a post."""
        await self.session.execute(
            delete(post_categories_table).where(
                post_categories_table.c.post_id == post_id
            )
        )
        if category_id:
            await self.session.execute(
                insert(post_categories_table).values(
                    post_id=post_id, category_id=category_id
                )
            )
        await self.session.flush()

    async def reassign(self, old_id: CategoryId, new_id: CategoryId) -> int:
        """Bulk-rewrite post edges from one category to another.

        ``uq_post_category`` guarantees one edge per post, so rewriting the
        category column can never produce a duplicate pair.
        """
        with logfire.span(
            "category_repository.reassign", old_id=str(old_id), new_id=str(new_id)
        ):
            stmt = (
                update(post_categories_table)
                .where(post_categories_table.c.category_id == old_id)
                .values(category_id=new_id)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount or 0

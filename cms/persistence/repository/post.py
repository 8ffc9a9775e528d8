"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

import logfire
from sqlalchemy import Select, delete, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cms.domain.model import CategoryRef, Post, TagRef
from cms.domain.repository import PostRepository, PostSortOrder
from cms.domain.value import CategoryId, PostId, PostStatus, Slug
from cms.persistence.database import unique_guard
from cms.persistence.mappers import (
    post_to_dict,
    row_to_category_ref,
    row_to_post,
    row_to_tag_ref,
)
from cms.persistence.tables import (
    categories_table,
    post_categories_table,
    post_tags_table,
    posts_table,
    tags_table,
)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_posts(
        self, post_ids: list[UUID]
    ) -> dict[UUID, list[TagRef]]:
        """Fetch tags for multiple posts in a single query.

        Args:
            post_ids: List of post IDs

        Returns:
            Dict mapping post_id -> list of tag references
        """
        if not post_ids:
            return {}

        stmt = (
            select(
                post_tags_table.c.post_id,
                tags_table.c.id.label("tag_id"),
                tags_table.c.name.label("tag_name"),
                tags_table.c.slug.label("tag_slug"),
            )
            .select_from(post_tags_table)
            .join(tags_table, post_tags_table.c.tag_id == tags_table.c.id)
            .where(post_tags_table.c.post_id.in_(post_ids))
            .order_by(tags_table.c.name)
        )
        result = await self.session.execute(stmt)

        # Build lookup: post_id -> [tags]
        post_tag_map: dict[UUID, list[TagRef]] = defaultdict(list)
        for row in result.fetchall():
            post_tag_map[row.post_id].append(row_to_tag_ref(row._asdict()))

        return post_tag_map

    async def _fetch_categories_for_posts(
        self, post_ids: list[UUID]
    ) -> dict[UUID, CategoryRef]:
        """Fetch the category of multiple posts in a single query."""
        if not post_ids:
            return {}

        stmt = (
            select(
                post_categories_table.c.post_id,
                categories_table.c.id.label("category_id"),
                categories_table.c.name.label("category_name"),
                categories_table.c.slug.label("category_slug"),
            )
            .select_from(post_categories_table)
            .join(
                categories_table,
                post_categories_table.c.category_id == categories_table.c.id,
            )
            .where(post_categories_table.c.post_id.in_(post_ids))
        )
        result = await self.session.execute(stmt)
        return {
            row.post_id: row_to_category_ref(row._asdict())
            for row in result.fetchall()
        }

    async def _build_posts(self, rows: list[Any]) -> List[Post]:
        """Attach categories and tags to post rows."""
        post_ids = [row.id for row in rows]
        post_tag_map = await self._fetch_tags_for_posts(post_ids)
        post_category_map = await self._fetch_categories_for_posts(post_ids)
        return [
            row_to_post(
                row._asdict(),
                category=post_category_map.get(row.id),
                tags=post_tag_map.get(row.id, []),
            )
            for row in rows
        ]

    @staticmethod
    def _apply_filters(
        stmt: Select,
        status: Optional[PostStatus],
        category_id: Optional[CategoryId],
        tag_slug: Optional[Slug],
        search: Optional[str],
    ) -> Select:
        """Add WHERE clauses shared by find_all and count."""
        if status:
            stmt = stmt.where(posts_table.c.status == status.value)

        if category_id:
            stmt = stmt.where(
                posts_table.c.id.in_(
                    select(post_categories_table.c.post_id).where(
                        post_categories_table.c.category_id == category_id
                    )
                )
            )

        if tag_slug:
            stmt = stmt.where(
                posts_table.c.id.in_(
                    select(post_tags_table.c.post_id)
                    .join(tags_table, post_tags_table.c.tag_id == tags_table.c.id)
                    .where(tags_table.c.slug == tag_slug.root)
                )
            )

        if search:
            stmt = stmt.where(
                or_(
                    posts_table.c.title.icontains(search, autoescape=True),
                    posts_table.c.excerpt.icontains(search, autoescape=True),
                    posts_table.c.content.icontains(search, autoescape=True),
                )
            )

        return stmt

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return (await self._build_posts([row]))[0]

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == slug.root)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found by slug", slug=str(slug))
                return None

            return (await self._build_posts([row]))[0]

    async def slug_exists(self, slug: str, exclude_id: Optional[PostId] = None) -> bool:
        """Check if another post uses the slug."""
        with logfire.span("post_repository.slug_exists", slug=slug):
            stmt = (
                select(func.count())
                .select_from(posts_table)
                .where(posts_table.c.slug == slug)
            )
            if exclude_id:
                stmt = stmt.where(posts_table.c.id != exclude_id)
            result = await self.session.execute(stmt)
            count = result.scalar()
            exists = (count or 0) > 0

            logfire.debug("Slug existence check", slug=slug, exists=exists)
            return exists

    async def find_all(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[Slug] = None,
        search: Optional[str] = None,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            status=status.value if status else None,
            category_id=str(category_id) if category_id else None,
            tag=str(tag_slug) if tag_slug else None,
            search=search,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(
                select(posts_table), status, category_id, tag_slug, search
            )

            # Sort order
            if sort == PostSortOrder.PUBLISHED:
                stmt = stmt.order_by(
                    posts_table.c.published_at.desc().nulls_last(),
                    desc(posts_table.c.created_at),
                )
            else:
                stmt = stmt.order_by(desc(posts_table.c.created_at))

            # Pagination
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                logfire.info("No posts found")
                return []

            posts = await self._build_posts(post_rows)
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[Slug] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(posts_table),
            status,
            category_id,
            tag_slug,
            search,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id), title=post.title):
            existing = await self._exists(post.id)

            post_dict = post_to_dict(post)  # Note: category and tags are excluded

            async with unique_guard(self.session, "post slug"):
                if existing:
                    logfire.info("Updating existing post", post_id=str(post.id))
                    stmt = (
                        update(posts_table)
                        .where(posts_table.c.id == post.id)
                        .values(**post_dict)
                    )
                else:
                    logfire.info("Inserting new post", post_id=str(post.id))
                    stmt = insert(posts_table).values(**post_dict)
                await self.session.execute(stmt)

            await self.session.flush()
            return post

    async def _exists(self, post_id: PostId) -> bool:
        """Check whether a post row with this ID exists."""
        stmt = select(posts_table.c.id).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def delete(self, post_id: PostId) -> None:
        """Delete a post (hard delete). Edges cascade."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def bulk_update_status(
        self,
        post_ids: list[PostId],
        status: PostStatus,
        published_at: Optional[datetime] = None,
    ) -> int:
        """Set the status of many posts at once."""
        values: dict[str, Any] = {"status": status.value, "updated_at": func.now()}
        if published_at:
            # Keep the original publication time of already published posts
            values["published_at"] = func.coalesce(
                posts_table.c.published_at, published_at
            )

        stmt = update(posts_table).where(posts_table.c.id.in_(post_ids)).values(**values)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def bulk_delete(self, post_ids: list[PostId]) -> int:
        """Delete many posts at once."""
        stmt = delete(posts_table).where(posts_table.c.id.in_(post_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

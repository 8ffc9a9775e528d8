"""PostgreSQL implementation of Tag repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from cms.domain.model.tag import Tag
from cms.domain.repository import TagRepository
from cms.domain.value import PostId, PostStatus, Slug, TagId
from cms.persistence.database import unique_guard
from cms.persistence.mappers import row_to_tag, tag_to_dict
from cms.persistence.tables import post_tags_table, posts_table, tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        tag_dict = tag_to_dict(tag)

        # Try to find existing tag
        existing = await self.find_by_id(tag.id)

        async with unique_guard(self.session, "tag slug"):
            if existing:
                stmt = (
                    update(tags_table).where(tags_table.c.id == tag.id).values(**tag_dict)
                )
            else:
                stmt = insert(tags_table).values(**tag_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        stmt = select(tags_table).where(tags_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(self, search: Optional[str] = None, limit: int = 50) -> list[Tag]:
        """Find tags ordered by name."""
        stmt = select(tags_table).order_by(tags_table.c.name).limit(limit)
        if search:
            stmt = stmt.where(tags_table.c.name.icontains(search, autoescape=True))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_popular(
        self, limit: int = 10, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> list[tuple[Tag, int]]:
        """Find the most used tags with their post counts."""
        post_count = func.count(post_tags_table.c.post_id).label("post_count")
        stmt = (
            select(tags_table, post_count)
            .select_from(tags_table)
            .join(post_tags_table, post_tags_table.c.tag_id == tags_table.c.id)
            .join(posts_table, posts_table.c.id == post_tags_table.c.post_id)
            .group_by(tags_table.c.id)
            .order_by(desc(post_count), tags_table.c.name)
            .limit(limit)
        )
        if status:
            stmt = stmt.where(posts_table.c.status == status.value)

        result = await self.session.execute(stmt)
        popular = []
        for row in result.fetchall():
            data = row._asdict()
            count = data.pop("post_count")
            popular.append((row_to_tag(data), count))
        return popular

    async def slug_exists(self, slug: str, exclude_id: Optional[TagId] = None) -> bool:
        """Check if another tag uses the slug."""
        stmt = (
            select(func.count())
            .select_from(tags_table)
            .where(tags_table.c.slug == slug)
        )
        if exclude_id:
            stmt = stmt.where(tags_table.c.id != exclude_id)
        result = await self.session.execute(stmt)
        exists = (result.scalar() or 0) > 0
        logfire.debug("Tag slug existence check", slug=slug, exists=exists)
        return exists

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag."""
        stmt = delete(tags_table).where(tags_table.c.id == tag_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_posts(
        self, tag_id: TagId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a tag."""
        counts = await self.count_posts_by_tag([tag_id], status)
        return counts.get(tag_id, 0)

    async def count_posts_by_tag(
        self, tag_ids: list[TagId], status: Optional[PostStatus] = None
    ) -> dict[TagId, int]:
        """Count linked posts per tag in a single query."""
        if not tag_ids:
            return {}

        stmt = (
            select(post_tags_table.c.tag_id, func.count())
            .select_from(post_tags_table)
            .where(post_tags_table.c.tag_id.in_(tag_ids))
            .group_by(post_tags_table.c.tag_id)
        )
        if status:
            stmt = stmt.join(
                posts_table, posts_table.c.id == post_tags_table.c.post_id
            ).where(posts_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return {TagId(row[0]): row[1] for row in result.fetchall()}

    async def find_post_ids(self, tag_id: TagId) -> list[PostId]:
        """Find IDs of every post linked to a tag."""
        stmt = select(post_tags_table.c.post_id).where(post_tags_table.c.tag_id == tag_id)
        result = await self.session.execute(stmt)
        return [PostId(row[0]) for row in result.fetchall()]

    async def delete_edges(self, post_id: PostId) -> None:
        """Remove every tag edge of a post."""
        stmt = delete(post_tags_table).where(post_tags_table.c.post_id == post_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def insert_edges(self, post_id: PostId, tag_ids: list[TagId]) -> None:
        """Link a post to tags, skipping pairs that already exist."""
        if not tag_ids:
            return
        stmt = (
            pg_insert(post_tags_table)
            .values([{"post_id": post_id, "tag_id": tag_id} for tag_id in tag_ids])
            .on_conflict_do_nothing(index_elements=["post_id", "tag_id"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def rewrite_edge(
        self, post_id: PostId, old_tag_id: TagId, new_tag_id: TagId
    ) -> bool:
        """Point a post's edge at another tag.

        The target edge is inserted with ON CONFLICT DO NOTHING, then the
        source edge is removed, so a concurrent writer can never leave a
        duplicate pair behind.
        """
        insert_stmt = (
            pg_insert(post_tags_table)
            .values(post_id=post_id, tag_id=new_tag_id)
            .on_conflict_do_nothing(index_elements=["post_id", "tag_id"])
        )
        inserted = await self.session.execute(insert_stmt)

        await self.session.execute(
            delete(post_tags_table).where(
                post_tags_table.c.post_id == post_id,
                post_tags_table.c.tag_id == old_tag_id,
            )
        )
        await self.session.flush()
        return (inserted.rowcount or 0) > 0

    async def remove_from_posts(self, tag_id: TagId) -> int:
        """Unlink a tag from every post."""
        stmt = delete(post_tags_table).where(post_tags_table.c.tag_id == tag_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

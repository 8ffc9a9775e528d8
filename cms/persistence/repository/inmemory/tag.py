"""In-memory tag repository for testing."""

from typing import Optional

from cms.domain.error import ConcurrencyConflictError
from cms.domain.model.tag import Tag
from cms.domain.repository.tag import TagRepository
from cms.domain.value import PostId, PostStatus, Slug, TagId

from .database import InMemoryDatabase


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        return self._db.tags.get(tag_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        for tag in self._db.tags.values():
            if tag.slug == slug:
                return tag
        return None

    async def find_all(self, search: Optional[str] = None, limit: int = 50) -> list[Tag]:
        """Find tags ordered by name."""
        tags = list(self._db.tags.values())
        if search:
            tags = [t for t in tags if search.lower() in t.name.lower()]
        tags.sort(key=lambda t: t.name)
        return tags[:limit]

    async def find_popular(
        self, limit: int = 10, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> list[tuple[Tag, int]]:
        """Find the most used tags with their post counts."""
        counts = await self.count_posts_by_tag(list(self._db.tags), status)
        popular = [(self._db.tags[tag_id], n) for tag_id, n in counts.items() if n > 0]
        popular.sort(key=lambda pair: (-pair[1], pair[0].name))
        return popular[:limit]

    async def slug_exists(self, slug: str, exclude_id: Optional[TagId] = None) -> bool:
        """Check if another tag uses the slug."""
        return any(
            t.slug.root == slug and t.id != exclude_id for t in self._db.tags.values()
        )

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        if await self.slug_exists(tag.slug.root, exclude_id=tag.id):
            raise ConcurrencyConflictError("Conflicting tag slug")
        self._db.tags[tag.id] = tag
        return tag

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag."""
        self._db.tags.pop(tag_id, None)

    async def count_posts(
        self, tag_id: TagId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a tag."""
        counts = await self.count_posts_by_tag([tag_id], status)
        return counts.get(tag_id, 0)

    async def count_posts_by_tag(
        self, tag_ids: list[TagId], status: Optional[PostStatus] = None
    ) -> dict[TagId, int]:
        """Count linked posts per tag."""
        counts: dict[TagId, int] = {}
        for post_id, tag_id in self._db.post_tags:
            if tag_id not in tag_ids:
                continue
            post = self._db.posts.get(post_id)
            if status and (post is None or post.status != status):
                continue
            counts[tag_id] = counts.get(tag_id, 0) + 1
        return counts

    async def find_post_ids(self, tag_id: TagId) -> list[PostId]:
        """Find IDs of every post linked to a tag."""
        return [post_id for post_id, t in self._db.post_tags if t == tag_id]

    async def delete_edges(self, post_id: PostId) -> None:
        """Remove every tag edge of a post."""
        self._db.post_tags = {e for e in self._db.post_tags if e[0] != post_id}

    async def insert_edges(self, post_id: PostId, tag_ids: list[TagId]) -> None:
        """Link a post to tags."""
        self._db.post_tags.update((post_id, tag_id) for tag_id in tag_ids)

    async def rewrite_edge(
        self, post_id: PostId, old_tag_id: TagId, new_tag_id: TagId
    ) -> bool:
        """Point a post's edge at another tag, dropping it on duplicate."""
        rewritten = (post_id, new_tag_id) not in self._db.post_tags
        self._db.post_tags.add((post_id, new_tag_id))
        self._db.post_tags.discard((post_id, old_tag_id))
        return rewritten

    async def remove_from_posts(self, tag_id: TagId) -> int:
        """Unlink a tag from every post."""
        before = len(self._db.post_tags)
        self._db.post_tags = {e for e in self._db.post_tags if e[1] != tag_id}
        return before - len(self._db.post_tags)

"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from cms.domain.error import ConcurrencyConflictError
from cms.domain.model import CategoryRef, Post, TagRef
from cms.domain.repository.post import PostRepository, PostSortOrder
from cms.domain.value import CategoryId, PostId, PostStatus, Slug

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    def _with_edges(self, post: Post) -> Post:
        """Attach the post's current category and tags."""
        category = None
        category_id = self._db.post_categories.get(post.id)
        if category_id and category_id in self._db.categories:
            c = self._db.categories[category_id]
            category = CategoryRef(id=c.id, name=c.name, slug=c.slug)

        tags = []
        for post_id, tag_id in self._db.post_tags:
            tag = self._db.tags.get(tag_id)
            if post_id == post.id and tag:
                tags.append(TagRef(id=tag.id, name=tag.name, slug=tag.slug))
        tags.sort(key=lambda ref: ref.name)
        return post.model_copy(update={"category": category, "tags": tags})

    def _filter(
        self,
        status: Optional[PostStatus],
        category_id: Optional[CategoryId],
        tag_slug: Optional[Slug],
        search: Optional[str],
    ) -> list[Post]:
        posts = list(self._db.posts.values())

        if status is not None:
            posts = [p for p in posts if p.status == status]

        if category_id is not None:
            posts = [
                p for p in posts if self._db.post_categories.get(p.id) == category_id
            ]

        if tag_slug is not None:
            tag_ids = {t.id for t in self._db.tags.values() if t.slug == tag_slug}
            posts = [
                p
                for p in posts
                if any((p.id, tag_id) in self._db.post_tags for tag_id in tag_ids)
            ]

        if search:
            needle = search.lower()
            posts = [
                p
                for p in posts
                if needle in p.title.lower()
                or needle in (p.excerpt or "").lower()
                or needle in p.content.lower()
            ]

        return posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        post = self._db.posts.get(post_id)
        return self._with_edges(post) if post else None

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        for post in self._db.posts.values():
            if post.slug == slug:
                return self._with_edges(post)
        return None

    async def slug_exists(self, slug: str, exclude_id: Optional[PostId] = None) -> bool:
        """Check if another post uses the slug."""
        return any(
            p.slug.root == slug and p.id != exclude_id for p in self._db.posts.values()
        )

    async def find_all(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[Slug] = None,
        search: Optional[str] = None,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._filter(status, category_id, tag_slug, search)

        # Sort
        if sort == PostSortOrder.PUBLISHED:
            posts.sort(
                key=lambda p: (p.published_at or datetime.min, p.created_at),
                reverse=True,
            )
        else:
            posts.sort(key=lambda p: p.created_at, reverse=True)

        # Paginate
        return [self._with_edges(p) for p in posts[offset : offset + limit]]

    async def count(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[Slug] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filter(status, category_id, tag_slug, search))

    async def save(self, post: Post) -> Post:
        """Save or update a post (edges are stored separately)."""
        if await self.slug_exists(post.slug.root, exclude_id=post.id):
            raise ConcurrencyConflictError("Conflicting post slug")
        self._db.posts[post.id] = post.model_copy(update={"category": None, "tags": []})
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post and its edges."""
        self._db.delete_post(post_id)

    async def bulk_update_status(
        self,
        post_ids: list[PostId],
        status: PostStatus,
        published_at: Optional[datetime] = None,
    ) -> int:
        """Set the status of many posts at once."""
        affected = 0
        for post_id in post_ids:
            post = self._db.posts.get(post_id)
            if post is None:
                continue
            update: dict = {"status": status, "updated_at": datetime.now()}
            if published_at and post.published_at is None:
                update["published_at"] = published_at
            self._db.posts[post_id] = post.model_copy(update=update)
            affected += 1
        return affected

    async def bulk_delete(self, post_ids: list[PostId]) -> int:
        """Delete many posts at once."""
        return sum(1 for post_id in post_ids if self._db.delete_post(post_id))

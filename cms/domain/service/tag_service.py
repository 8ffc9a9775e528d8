"""Tag domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from cms.domain.error import (
    ConcurrencyConflictError,
    ConflictError,
    InvalidMergeError,
    NotFoundError,
    ResourceInUseError,
    ValidationError,
)
from cms.domain.model.tag import Tag
from cms.domain.repository import TagRepository
from cms.domain.value import PostId, PostStatus, Slug, TagId

from .base import Service
from .slug_service import SlugService, require_name


class TagService(Service):
    """Domain service for tag operations.

    Owns the post-tag edge set: find-or-create by slug, full-replace
    reconciliation and tag merging.
    """

    def __init__(self, tag_repository: TagRepository, slug_service: SlugService) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            slug_service: Slug generation service
        """
        self.tag_repository = tag_repository
        self.slug_service = slug_service

    async def get_by_id(self, tag_id: TagId) -> Tag:
        """Get tag by ID.

        Raises:
            NotFoundError: If tag not found
        """
        tag = await self.tag_repository.find_by_id(tag_id)
        if not tag:
            logfire.warn("Tag not found", tag_id=str(tag_id))
            raise NotFoundError("Tag", str(tag_id))
        return tag

    async def get_by_slug(self, slug: str) -> Tag:
        """Get tag by slug.

        Raises:
            NotFoundError: If tag not found
        """
        with logfire.span("tag_service.get_by_slug", slug=slug):
            tag = None
            # Malformed slugs cannot exist in storage
            if slug and slug == self.slug_service.slugify(slug):
                tag = await self.tag_repository.find_by_slug(Slug(slug))
            if not tag:
                logfire.warn("Tag not found by slug", slug=slug)
                raise NotFoundError("Tag", slug)
            return tag

    async def get_all_tags(
        self, search: Optional[str] = None, limit: int = 50
    ) -> list[Tag]:
        """Get tags ordered by name.

        Args:
            search: Case-insensitive name filter
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        with logfire.span("tag_service.get_all_tags", search=search, limit=limit):
            tags = await self.tag_repository.find_all(search=search, limit=limit)
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def get_popular_tags(self, limit: int = 10) -> list[tuple[Tag, int]]:
        """Get tags ordered by number of published posts.

        Tags without published posts are left out.
        """
        with logfire.span("tag_service.get_popular_tags", limit=limit):
            popular = await self.tag_repository.find_popular(
                limit=limit, status=PostStatus.PUBLISHED
            )
            logfire.info("Popular tags retrieved", count=len(popular))
            return popular

    async def count_published_posts(self, tag_ids: list[TagId]) -> dict[TagId, int]:
        """Count published posts for each tag."""
        return await self.tag_repository.count_posts_by_tag(
            tag_ids, status=PostStatus.PUBLISHED
        )

    async def create_tag(self, name: str) -> Tag:
        """Create a tag.

        Unlike categories, tags do not get numeric suffixes: a second tag
        whose name slugifies to an existing slug is rejected.

        Args:
            name: Tag display name

        Returns:
            Created tag

        Raises:
            ValidationError: If the name is blank or has no slug characters
            ConflictError: If a tag with the same slug exists
        """
        name = require_name(name, "Tag name is required")
        with logfire.span("tag_service.create_tag", name=name):
            slug = self._slug_for(name)

            if await self.tag_repository.find_by_slug(slug):
                logfire.warn("Tag already exists", slug=slug.root)
                raise ConflictError("Tag already exists")

            tag = Tag(id=TagId(uuid4()), name=name, slug=slug)
            try:
                saved = await self.tag_repository.save(tag)
            except ConcurrencyConflictError:
                logfire.warn("Tag created concurrently", slug=slug.root)
                raise ConflictError("Tag already exists")

            logfire.info("Tag created", tag_id=str(saved.id), slug=saved.slug.root)
            return saved

    async def update_tag(self, tag_id: TagId, name: str) -> Tag:
        """Rename a tag, re-deriving its slug when the name changes.

        Raises:
            ValidationError: If the name is blank or has no slug characters
            NotFoundError: If the tag does not exist
            ConflictError: If another tag already uses the new slug
        """
        name = require_name(name, "Tag name is required")
        with logfire.span("tag_service.update_tag", tag_id=str(tag_id), name=name):
            tag = await self.get_by_id(tag_id)

            slug = tag.slug
            if name != tag.name:
                slug = self._slug_for(name)
                if await self.tag_repository.slug_exists(slug.root, exclude_id=tag_id):
                    logfire.warn("Tag slug taken", tag_id=str(tag_id), slug=slug.root)
                    raise ConflictError("A tag with this name already exists")

            updated = tag.model_copy(
                update={"name": name, "slug": slug, "updated_at": datetime.now()}
            )
            try:
                saved = await self.tag_repository.save(updated)
            except ConcurrencyConflictError:
                raise ConflictError("A tag with this name already exists")

            logfire.info("Tag updated", tag_id=str(tag_id), slug=saved.slug.root)
            return saved

    async def delete_tag(self, tag_id: TagId) -> None:
        """Delete a tag that no post uses.

        Raises:
            NotFoundError: If the tag does not exist
            ResourceInUseError: If posts are still linked to the tag
        """
        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            await self.get_by_id(tag_id)

            post_count = await self.tag_repository.count_posts(tag_id)
            if post_count > 0:
                logfire.warn(
                    "Tag still in use", tag_id=str(tag_id), post_count=post_count
                )
                raise ResourceInUseError(
                    "tag", post_count, "Please remove tag from posts first."
                )

            await self.tag_repository.delete(tag_id)
            logfire.info("Tag deleted", tag_id=str(tag_id))

    async def remove_from_posts(self, tag_id: TagId) -> int:
        """Unlink a tag from every post, keeping the tag itself.

        Returns:
            Number of removed edges

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span("tag_service.remove_from_posts", tag_id=str(tag_id)):
            await self.get_by_id(tag_id)
            removed = await self.tag_repository.remove_from_posts(tag_id)
            logfire.info("Tag removed from posts", tag_id=str(tag_id), removed=removed)
            return removed

    async def find_or_create(self, name: str) -> Tag:
        """Find a tag by the slug of ``name``, creating it if absent.

        If another writer inserts the same slug first, its row is returned.

        Args:
            name: Trimmed, non-blank tag name

        Returns:
            Existing or newly created tag

        Raises:
            ValidationError: If the name has no slug characters
        """
        slug = self._slug_for(name)

        existing = await self.tag_repository.find_by_slug(slug)
        if existing:
            return existing

        try:
            created = await self.tag_repository.save(
                Tag(id=TagId(uuid4()), name=name, slug=slug)
            )
        except ConcurrencyConflictError:
            winner = await self.tag_repository.find_by_slug(slug)
            if not winner:
                raise
            logfire.info("Tag created concurrently, reusing", slug=slug.root)
            return winner

        logfire.info("Tag created on first use", tag_id=str(created.id), slug=slug.root)
        return created

    async def reconcile_tags(
        self, post_id: PostId, tag_names: list[str]
    ) -> set[TagId]:
        """Make a post's tag edges match ``tag_names`` exactly.

        Blank names are dropped and names that map to the same slug collapse
        into one edge. An empty list removes every tag from the post.

        Args:
            post_id: Post whose edges are replaced
            tag_names: Desired tag names

        Returns:
            IDs of the tags the post is linked to afterwards

        Raises:
            ValidationError: If a name has no slug characters
        """
        names = [n.strip() for n in tag_names if n and n.strip()]
        with logfire.span(
            "tag_service.reconcile_tags", post_id=str(post_id), tags=names
        ):
            tag_ids: set[TagId] = set()
            for name in names:
                tag = await self.find_or_create(name)
                tag_ids.add(tag.id)

            await self.tag_repository.delete_edges(post_id)
            if tag_ids:
                await self.tag_repository.insert_edges(post_id, sorted(tag_ids))

            logfire.info(
                "Post tags reconciled", post_id=str(post_id), tag_count=len(tag_ids)
            )
            return tag_ids

    async def merge_tag(self, source_id: TagId, target_id: TagId) -> tuple[Tag, Tag, int]:
        """Merge one tag into another and delete the source.

        Every post linked to the source ends up linked to the target exactly
        once.

        Args:
            source_id: Tag being merged away
            target_id: Tag that survives

        Returns:
            (source, target, number of posts that carried the source)

        Raises:
            InvalidMergeError: If source and target are the same tag
            NotFoundError: If either tag does not exist
        """
        with logfire.span(
            "tag_service.merge_tag", source_id=str(source_id), target_id=str(target_id)
        ):
            if source_id == target_id:
                logfire.warn("Attempted to merge tag into itself", tag_id=str(source_id))
                raise InvalidMergeError("Cannot merge tag with itself")

            source = await self.get_by_id(source_id)
            target = await self.get_by_id(target_id)

            post_ids = await self.tag_repository.find_post_ids(source_id)
            dropped = 0
            for post_id in post_ids:
                if not await self.tag_repository.rewrite_edge(
                    post_id, source_id, target_id
                ):
                    dropped += 1

            await self.tag_repository.delete(source_id)

            logfire.info(
                "Tags merged",
                source=source.name,
                target=target.name,
                merged_posts=len(post_ids),
                duplicate_edges_dropped=dropped,
            )
            return source, target, len(post_ids)

    def _slug_for(self, name: str) -> Slug:
        """Slugify a tag name, rejecting names without slug characters."""
        slug = self.slug_service.slugify(name)
        if not slug:
            raise ValidationError(f"Tag name '{name}' does not produce a valid slug")
        return Slug(slug)

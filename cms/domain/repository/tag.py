"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cms.domain.model.tag import Tag
from cms.domain.value import PostId, PostStatus, Slug, TagId


class TagRepository(ABC):
    """Repository for Tag entities and post-tag edges."""

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID.

        Args:
            tag_id: Tag identifier

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug.

        Args:
            slug: Tag slug

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, search: Optional[str] = None, limit: int = 50) -> list[Tag]:
        """Find tags ordered by name.

        Args:
            search: Case-insensitive substring filter on the name
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def find_popular(
        self, limit: int = 10, status: Optional[PostStatus] = PostStatus.PUBLISHED
    ) -> list[tuple[Tag, int]]:
        """Find tags ordered by number of linked posts, most used first.

        Tags without any matching post are left out.

        Args:
            limit: Maximum number of tags to return
            status: Only count posts with this status (None for all)

        Returns:
            List of (tag, post_count) pairs
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: Optional[TagId] = None) -> bool:
        """Check whether a tag already uses a slug.

        Args:
            slug: Candidate slug
            exclude_id: Tag whose own row is ignored (for renames)

        Returns:
            True if another tag holds the slug
        """
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Args:
            tag: Tag to save

        Returns:
            Saved tag

        Raises:
            ConcurrencyConflictError: If the slug was taken concurrently
        """
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag.

        Args:
            tag_id: Tag identifier
        """
        pass

    @abstractmethod
    async def count_posts(
        self, tag_id: TagId, status: Optional[PostStatus] = None
    ) -> int:
        """Count posts linked to a tag.

        Args:
            tag_id: Tag identifier
            status: Only count posts with this status (None for all)

        Returns:
            Number of linked posts
        """
        pass

    @abstractmethod
    async def count_posts_by_tag(
        self, tag_ids: list[TagId], status: Optional[PostStatus] = None
    ) -> dict[TagId, int]:
        """Count linked posts for many tags in a single query.

        Args:
            tag_ids: Tags to count for
            status: Only count posts with this status (None for all)

        Returns:
            Mapping of tag ID to post count (missing IDs have no posts)
        """
        pass

    @abstractmethod
    async def find_post_ids(self, tag_id: TagId) -> list[PostId]:
        """Find IDs of every post linked to a tag.

        Args:
            tag_id: Tag identifier

        Returns:
            Post IDs
        """
        pass

    @abstractmethod
    async def delete_edges(self, post_id: PostId) -> None:
        """Remove every tag edge of a post.

        Args:
            post_id: Post identifier
        """
        pass

    @abstractmethod
    async def insert_edges(self, post_id: PostId, tag_ids: list[TagId]) -> None:
        """Link a post to tags. Existing pairs are left untouched.

        Args:
            post_id: Post identifier
            tag_ids: Tags to link
        """
        pass

    @abstractmethod
    async def rewrite_edge(
        self, post_id: PostId, old_tag_id: TagId, new_tag_id: TagId
    ) -> bool:
        """Point a post's edge at another tag in one atomic step.

        If the post is already linked to ``new_tag_id`` the old edge is
        dropped instead, so no duplicate pair is created.

        Args:
            post_id: Post identifier
            old_tag_id: Tag the edge currently references
            new_tag_id: Tag the edge should reference

        Returns:
            True if the edge was rewritten, False if it was dropped
        """
        pass

    @abstractmethod
    async def remove_from_posts(self, tag_id: TagId) -> int:
        """Unlink a tag from every post.

        Args:
            tag_id: Tag identifier

        Returns:
            Number of removed edges
        """
        pass

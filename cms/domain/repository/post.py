"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from cms.domain.model.post import Post
from cms.domain.value import CategoryId, PostId, PostStatus, Slug


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    RECENT = "recent"  # Newest created first
    PUBLISHED = "published"  # Most recently published first


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post (with category and tags) if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug.

        Args:
            slug: The post's slug

        Returns:
            The post (with category and tags) if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: Optional[PostId] = None) -> bool:
        """Check whether a post already uses a slug.

        Args:
            slug: Candidate slug
            exclude_id: Post whose own row is ignored (for retitles)

        Returns:
            True if another post holds the slug
        """
        pass

    @abstractmethod
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
        """Find posts with filtering and pagination.

        Args:
            status: Only posts with this status (None for all)
            category_id: Only posts in this category
            tag_slug: Only posts carrying the tag with this slug
            search: Case-insensitive substring in title, excerpt or content
            sort: Sort order
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[Slug] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters.

        Args:
            status: Only posts with this status (None for all)
            category_id: Only posts in this category
            tag_slug: Only posts carrying the tag with this slug
            search: Case-insensitive substring in title, excerpt or content

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Category and tag edges are not touched.

        Args:
            post: The post to save

        Returns:
            The saved post

        Raises:
            ConcurrencyConflictError: If the slug was taken concurrently
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post and its edges.

        Args:
            post_id: The post ID to delete
        """
        pass

    @abstractmethod
    async def bulk_update_status(
        self,
        post_ids: list[PostId],
        status: PostStatus,
        published_at: Optional[datetime] = None,
    ) -> int:
        """Set the status of many posts at once.

        Args:
            post_ids: Posts to update
            status: New status
            published_at: Publication time for posts that have none yet

        Returns:
            Number of updated posts
        """
        pass

    @abstractmethod
    async def bulk_delete(self, post_ids: list[PostId]) -> int:
        """Delete many posts at once.

        Args:
            post_ids: Posts to delete

        Returns:
            Number of deleted posts
        """
        pass

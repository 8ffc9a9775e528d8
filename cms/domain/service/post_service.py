"""Post domain service."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire

from cms.domain.error import (
    ConcurrencyConflictError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from cms.domain.model.post import Post
from cms.domain.model.user import User
from cms.domain.repository import PostRepository, PostSortOrder
from cms.domain.value import (
    BulkAction,
    CategoryId,
    PostId,
    PostStatus,
    Slug,
    SluggableKind,
)

from .base import Service
from .slug_service import SlugService

# Fields an update may change directly; title and status have extra rules
_PLAIN_FIELDS = (
    "content",
    "excerpt",
    "featured_image",
    "meta_title",
    "meta_description",
    "meta_keywords",
)


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository, slug_service: SlugService) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            slug_service: Slug generation service
        """
        self.post_repository = post_repository
        self.slug_service = slug_service

    async def get_post_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post with its category and tags

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def get_post_by_slug(self, slug: str) -> Post:
        """Get a post by slug.

        Args:
            slug: Post slug

        Returns:
            Post with its category and tags

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post_by_slug", slug=slug):
            post = None
            if slug and slug == self.slug_service.slugify(slug):
                post = await self.post_repository.find_by_slug(Slug(slug))

            if post:
                logfire.info("Post found by slug", slug=slug, post_id=str(post.id))
            else:
                logfire.warn("Post not found by slug", slug=slug)
                raise NotFoundError("Post", slug)

            return post

    async def list_posts(
        self,
        status: Optional[PostStatus] = PostStatus.PUBLISHED,
        category_id: Optional[CategoryId] = None,
        tag_slug: Optional[str] = None,
        search: Optional[str] = None,
        sort: PostSortOrder = PostSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """List posts with filtering and pagination.

        Returns:
            (page of posts, total matching posts)
        """
        with logfire.span(
            "post_service.list_posts",
            status=status.value if status else None,
            category_id=str(category_id) if category_id else None,
            tag=tag_slug,
            search=search,
            limit=limit,
            offset=offset,
        ):
            tag = None
            if tag_slug:
                # A tag filter that can never match yields an empty page
                if tag_slug != self.slug_service.slugify(tag_slug):
                    return [], 0
                tag = Slug(tag_slug)

            filters: dict[str, Any] = {
                "status": status,
                "category_id": category_id,
                "tag_slug": tag,
                "search": search or None,
            }
            posts = await self.post_repository.find_all(
                **filters, sort=sort, limit=limit, offset=offset
            )
            total = await self.post_repository.count(**filters)
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def create_post(
        self,
        author: User,
        title: str,
        content: str,
        status: PostStatus = PostStatus.DRAFT,
        excerpt: Optional[str] = None,
        featured_image: Optional[str] = None,
        meta_title: Optional[str] = None,
        meta_description: Optional[str] = None,
        meta_keywords: Optional[str] = None,
    ) -> Post:
        """Create a post with a unique slug derived from its title.

        Category and tag edges are set separately.

        Returns:
            Created post

        Raises:
            ValidationError: If title or content is blank
            ConcurrencyConflictError: If the slug is taken concurrently twice
        """
        if not title or not title.strip() or not content or not content.strip():
            raise ValidationError("Title and content are required")

        with logfire.span(
            "post_service.create_post", author_id=str(author.id), title=title
        ):
            now = datetime.now()
            post_id = PostId(uuid4())
            fields = {
                "id": post_id,
                "title": title,
                "content": content,
                "status": status,
                "excerpt": excerpt,
                "featured_image": featured_image,
                "meta_title": meta_title,
                "meta_description": meta_description,
                "meta_keywords": meta_keywords,
                "author_id": author.id,
                "author_name": author.name,
                "published_at": now if status == PostStatus.PUBLISHED else None,
                "created_at": now,
                "updated_at": now,
            }

            try:
                saved = await self._insert(fields)
            except ConcurrencyConflictError:
                logfire.warn("Post slug taken concurrently, retrying", post_id=str(post_id))
                saved = await self._insert(fields)

            logfire.info(
                "Post created",
                post_id=str(saved.id),
                slug=saved.slug.root,
                status=saved.status.value,
            )
            return saved

    async def _insert(self, fields: dict[str, Any]) -> Post:
        """Resolve a free slug and insert the post."""
        slug = await self.generate_unique_slug(fields["title"], fields["id"])
        return await self.post_repository.save(Post(**fields, slug=slug))

    async def update_post(
        self,
        post: Post,
        title: Optional[str] = None,
        status: Optional[PostStatus] = None,
        **changes: Any,
    ) -> Post:
        """Apply changes to a post.

        A changed title re-derives the slug, ignoring the post's own row.
        ``published_at`` is stamped the first time the post becomes published.

        Args:
            post: Current post
            title: New title (None keeps the current one)
            status: New status (None keeps the current one)
            **changes: Other fields to set (content, excerpt, SEO meta...)

        Returns:
            Updated post

        Raises:
            ValidationError: If the title or content would become blank
            ConcurrencyConflictError: If the new slug is taken concurrently twice
        """
        with logfire.span("post_service.update_post", post_id=str(post.id)):
            now = datetime.now()
            update: dict[str, Any] = {
                k: v for k, v in changes.items() if k in _PLAIN_FIELDS
            }
            update["updated_at"] = now

            if "content" in update and not (update["content"] or "").strip():
                raise ValidationError("Content cannot be empty")

            if title is not None:
                if not title.strip():
                    raise ValidationError("Title cannot be empty")
                update["title"] = title
                if title != post.title:
                    update["slug"] = await self.generate_unique_slug(
                        title, post.id, exclude_id=post.id
                    )

            if status is not None:
                update["status"] = status
                if status == PostStatus.PUBLISHED and post.status != PostStatus.PUBLISHED:
                    update["published_at"] = post.published_at or now

            try:
                saved = await self.post_repository.save(post.model_copy(update=update))
            except ConcurrencyConflictError:
                if "slug" not in update:
                    raise
                logfire.warn("Post slug taken concurrently, retrying", post_id=str(post.id))
                update["slug"] = await self.generate_unique_slug(
                    update["title"], post.id, exclude_id=post.id
                )
                saved = await self.post_repository.save(post.model_copy(update=update))
            logfire.info(
                "Post updated",
                post_id=str(post.id),
                slug=saved.slug.root,
                changed=sorted(k for k in update if k != "updated_at"),
            )
            return saved

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its edges."""
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))

    async def bulk_action(self, action: BulkAction, post_ids: list[PostId]) -> int:
        """Apply an admin bulk action to many posts.

        Args:
            action: Operation to perform
            post_ids: Target posts (unknown IDs are ignored)

        Returns:
            Number of affected posts

        Raises:
            ValidationError: If no post IDs are given
        """
        if not post_ids:
            raise ValidationError("Action and post_ids are required")

        with logfire.span(
            "post_service.bulk_action", action=action.value, count=len(post_ids)
        ):
            ids = list(dict.fromkeys(post_ids))
            if action == BulkAction.PUBLISH:
                affected = await self.post_repository.bulk_update_status(
                    ids, PostStatus.PUBLISHED, published_at=datetime.now()
                )
            elif action == BulkAction.UNPUBLISH:
                affected = await self.post_repository.bulk_update_status(
                    ids, PostStatus.DRAFT
                )
            elif action == BulkAction.ARCHIVE:
                affected = await self.post_repository.bulk_update_status(
                    ids, PostStatus.ARCHIVED
                )
            else:
                affected = await self.post_repository.bulk_delete(ids)

            logfire.info("Bulk action completed", action=action.value, affected=affected)
            return affected

    def ensure_can_modify(self, post: Post, user: User, verb: str = "edit") -> None:
        """Check that a user may change a post.

        Owners may change their own posts; admins may change any post.

        Raises:
            NotAuthorizedError: If the user is neither owner nor admin
        """
        if post.author_id != user.id and not user.role.is_admin:
            logfire.warn(
                "User not allowed to modify post",
                post_id=str(post.id),
                user_id=str(user.id),
            )
            raise NotAuthorizedError(f"You can only {verb} your own posts")

    def can_view(self, post: Post, user: Optional[User]) -> bool:
        """Whether a post is visible to a (possibly anonymous) user.

        Published posts are public; other statuses are visible to the
        author and to admins.
        """
        if post.status == PostStatus.PUBLISHED:
            return True
        if user is None:
            return False
        return post.author_id == user.id or user.role.is_admin

    async def generate_unique_slug(
        self, title: str, post_id: PostId, exclude_id: Optional[PostId] = None
    ) -> Slug:
        """Generate a unique slug from a title.

        Titles without slug characters fall back to ``post-<id prefix>``.

        Args:
            title: Post title to slugify
            post_id: Post ID (used for fallback if title produces empty slug)
            exclude_id: Post being retitled

        Returns:
            Unique slug for the post
        """
        return await self.slug_service.generate_unique_slug(
            SluggableKind.POST,
            title,
            exclude_id=exclude_id,
            fallback=f"post-{post_id.hex[:8]}",
        )

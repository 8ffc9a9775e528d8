"""Test configuration and fixtures."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from cms.domain.model import Category, Post, Tag, User
from cms.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from cms.domain.service import slugify
from cms.domain.value import CategoryId, PostId, PostStatus, Slug, TagId, UserId, UserRole

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_slug(text: str) -> Slug:
    """Slug for a test fixture name."""
    return Slug(slugify(text))


async def make_user(
    user_repository: UserRepository,
    role: UserRole = UserRole.AUTHOR,
    name: str = "Test User",
    email: Optional[str] = None,
    password_hash: str = "not-a-real-hash",
) -> User:
    """Store a user directly through the repository."""
    user = User(
        id=UserId(uuid4()),
        email=email or f"user-{uuid4().hex[:8]}@example.com",
        name=name,
        password_hash=password_hash,
        role=role,
    )
    return await user_repository.save(user)


async def make_category(
    category_repository: CategoryRepository, name: str = "General"
) -> Category:
    """Store a category directly through the repository."""
    category = Category(id=CategoryId(uuid4()), name=name, slug=make_slug(name))
    return await category_repository.save(category)


async def make_tag(tag_repository: TagRepository, name: str) -> Tag:
    """Store a tag directly through the repository."""
    tag = Tag(id=TagId(uuid4()), name=name, slug=make_slug(name))
    return await tag_repository.save(tag)


async def make_post(
    post_repository: PostRepository,
    author: User,
    title: str = "Test Post",
    status: PostStatus = PostStatus.PUBLISHED,
    published_at: Optional[datetime] = None,
    slug: Optional[str] = None,
) -> Post:
    """Store a post directly through the repository (no category or tags)."""
    if published_at is None and status == PostStatus.PUBLISHED:
        published_at = datetime.now()
    post = Post(
        id=PostId(uuid4()),
        title=title,
        slug=Slug(slug) if slug else make_slug(title),
        content="Test content",
        status=status,
        author_id=author.id,
        author_name=author.name,
        published_at=published_at,
    )
    return await post_repository.save(post)

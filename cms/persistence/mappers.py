"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from cms.domain.model import Category, CategoryRef, Post, Tag, TagRef, User
from cms.domain.value import (
    CategoryId,
    PostId,
    PostStatus,
    Slug,
    TagId,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    """Accept UUIDs as returned by asyncpg or as strings."""
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        role=UserRole(row["role"]),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model."""
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict."""
    return category.model_dump()


def row_to_category_ref(row: Dict[str, Any]) -> CategoryRef:
    """Build a category reference from ``category_id``/``category_name``/``category_slug``."""
    return CategoryRef(
        id=CategoryId(_uuid(row["category_id"])),
        name=row["category_name"],
        slug=Slug(row["category_slug"]),
    )


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return tag.model_dump()


def row_to_tag_ref(row: Dict[str, Any]) -> TagRef:
    """Build a tag reference from ``tag_id``/``tag_name``/``tag_slug``."""
    return TagRef(
        id=TagId(_uuid(row["tag_id"])),
        name=row["tag_name"],
        slug=Slug(row["tag_slug"]),
    )


def row_to_post(
    row: Dict[str, Any],
    category: Optional[CategoryRef] = None,
    tags: Optional[list[TagRef]] = None,
) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        category: The post's category, fetched separately
        tags: The post's tags, fetched separately

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        slug=Slug(row["slug"]),
        content=row["content"],
        excerpt=row.get("excerpt"),
        featured_image=row.get("featured_image"),
        status=PostStatus(row["status"]),
        author_id=UserId(_uuid(row["author_id"])),
        author_name=row["author_name"],
        published_at=row.get("published_at"),
        meta_title=row.get("meta_title"),
        meta_description=row.get("meta_description"),
        meta_keywords=row.get("meta_keywords"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        category=category,
        tags=tags or [],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Category and tags live in join tables and are excluded.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump(exclude={"category", "tags"})
    data["status"] = post.status.value
    return data

"""Category read model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cms.application.usecase.post.view import PostSummary
from cms.domain.model import Category


class CategoryResponse(BaseModel):
    """Category with optional published-post count and recent posts."""

    id: str
    name: str
    slug: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    post_count: Optional[int] = None
    posts: Optional[list[PostSummary]] = None

    @classmethod
    def from_category(
        cls,
        category: Category,
        post_count: Optional[int] = None,
        posts: Optional[list[PostSummary]] = None,
    ) -> "CategoryResponse":
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug.root,
            description=category.description,
            created_at=category.created_at,
            updated_at=category.updated_at,
            post_count=post_count,
            posts=posts,
        )

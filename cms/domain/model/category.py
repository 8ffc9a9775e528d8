"""Category entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cms.domain.model.common import DomainModel
from cms.domain.value import CategoryId, Slug


class Category(DomainModel):
    """Category grouping posts.

    A post belongs to at most one category at a time.
    """

    id: CategoryId
    name: str = Field(min_length=1, max_length=100)
    slug: Slug
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CategoryRef(DomainModel):
    """Lightweight category reference embedded in post read models."""

    id: CategoryId
    name: str
    slug: Slug

"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cms.domain.model.category import CategoryRef
from cms.domain.model.common import DomainModel
from cms.domain.model.tag import TagRef
from cms.domain.value import PostId, PostStatus, Slug, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``category`` and ``tags`` are populated by repositories on read; they are
    persisted separately as join-table edges and ignored by ``save``.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    slug: Slug
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    author_id: UserId
    author_name: str  # Denormalized from users
    published_at: Optional[datetime] = None
    meta_title: Optional[str] = Field(default=None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    category: Optional[CategoryRef] = None
    tags: list[TagRef] = Field(default_factory=list)

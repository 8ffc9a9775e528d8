"""Tag read model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cms.application.usecase.post.view import PostSummary
from cms.domain.model import Tag


class TagResponse(BaseModel):
    """Tag with optional published-post count and recent posts."""

    id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime
    post_count: Optional[int] = None
    posts: Optional[list[PostSummary]] = None

    @classmethod
    def from_tag(
        cls,
        tag: Tag,
        post_count: Optional[int] = None,
        posts: Optional[list[PostSummary]] = None,
    ) -> "TagResponse":
        return cls(
            id=str(tag.id),
            name=tag.name,
            slug=tag.slug.root,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
            post_count=post_count,
            posts=posts,
        )

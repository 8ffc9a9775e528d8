"""Tag entity for labelling posts."""

from datetime import datetime

from pydantic import Field

from cms.domain.model.common import DomainModel
from cms.domain.value import Slug, TagId


class Tag(DomainModel):
    """Tag entity.

    Tags are created the first time a post uses them and are never removed
    automatically. Two names that slugify to the same slug are the same tag.
    """

    id: TagId
    name: str = Field(min_length=1, max_length=100)
    slug: Slug
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class TagRef(DomainModel):
    """Lightweight tag reference embedded in post read models."""

    id: TagId
    name: str
    slug: Slug

"""Domain value objects for the CMS.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from cms.domain.value.common import RootValueObject


class UserRole(str, Enum):
    """Role of a user, ordered from least to most privileged."""

    READER = "reader"
    AUTHOR = "author"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def can_author(self) -> bool:
        """Whether the role may create and edit content."""
        return self in (UserRole.AUTHOR, UserRole.ADMIN, UserRole.SUPER_ADMIN)

    @property
    def is_admin(self) -> bool:
        """Whether the role may moderate other users' content."""
        return self in (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class BulkAction(str, Enum):
    """Admin bulk operations on posts."""

    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    ARCHIVE = "archive"
    DELETE = "delete"


class SluggableKind(str, Enum):
    """Entity collections that own a slug namespace."""

    POST = "post"
    CATEGORY = "category"
    TAG = "tag"


class Slug(RootValueObject[str]):
    """URL-safe slug for posts, categories and tags.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'getting-started', 'python-3-13-release-notes'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v

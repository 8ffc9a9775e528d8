"""Domain value objects for the CMS."""

from cms.domain.value.identifiers import CategoryId, PostId, TagId, UserId
from cms.domain.value.types import (
    BulkAction,
    PostStatus,
    Slug,
    SluggableKind,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CategoryId",
    "TagId",
    # Types
    "BulkAction",
    "PostStatus",
    "Slug",
    "SluggableKind",
    "UserRole",
]

"""Domain model entities for the CMS."""

from cms.domain.model.category import Category, CategoryRef
from cms.domain.model.post import Post
from cms.domain.model.tag import Tag, TagRef
from cms.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Category",
    "CategoryRef",
    "Tag",
    "TagRef",
]

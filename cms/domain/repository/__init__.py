"""Repository interfaces for the CMS domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from cms.domain.repository.category import CategoryRepository
from cms.domain.repository.post import PostRepository, PostSortOrder
from cms.domain.repository.tag import TagRepository
from cms.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "PostSortOrder",
    "CategoryRepository",
    "TagRepository",
]

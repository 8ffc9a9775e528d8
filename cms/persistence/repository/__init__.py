"""PostgreSQL repository implementations."""

from cms.persistence.repository.category import PostgresCategoryRepository
from cms.persistence.repository.post import PostgresPostRepository
from cms.persistence.repository.tag import PostgresTagRepository
from cms.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCategoryRepository",
    "PostgresTagRepository",
]

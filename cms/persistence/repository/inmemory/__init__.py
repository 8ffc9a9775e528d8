"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .database import InMemoryDatabase
from .post import InMemoryPostRepository
from .tag import InMemoryTagRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryDatabase",
    "InMemoryPostRepository",
    "InMemoryTagRepository",
    "InMemoryUserRepository",
]

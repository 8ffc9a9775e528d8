"""In-memory user repository for testing."""

from typing import Optional

from cms.domain.error import ConcurrencyConflictError
from cms.domain.model.user import User
from cms.domain.repository.user import UserRepository
from cms.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._db.users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        for other in self._db.users.values():
            if other.email == user.email and other.id != user.id:
                raise ConcurrencyConflictError("Conflicting user email")
        self._db.users[user.id] = user
        return user

"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cms.domain.model import User
from cms.domain.repository import UserRepository
from cms.domain.value import UserId
from cms.persistence.database import unique_guard
from cms.persistence.mappers import row_to_user, user_to_dict
from cms.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        async with unique_guard(self.session, "user email"):
            if existing:
                stmt = (
                    update(users_table)
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = insert(users_table).values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

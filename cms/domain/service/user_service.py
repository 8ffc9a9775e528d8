"""User domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from cms.domain.error import ConcurrencyConflictError, ConflictError, NotFoundError
from cms.domain.model import User
from cms.domain.repository import UserRepository
from cms.domain.value import UserId, UserRole

from .base import Service


def normalize_email(email: str) -> str:
    """Lowercase and trim an email address."""
    return email.strip().lower()


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), role=user.role.value)
            return user

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: Email address (any case)

        Returns:
            User if found, None otherwise
        """
        return await self.user_repository.find_by_email(normalize_email(email))

    async def create_user(
        self,
        email: str,
        name: str,
        password_hash: str,
        role: UserRole = UserRole.READER,
    ) -> User:
        """Create a user account.

        Args:
            email: Email address (stored lowercase)
            name: Display name
            password_hash: Encoded password hash
            role: Initial role

        Returns:
            Created user

        Raises:
            ConflictError: If the email is already registered
        """
        email = normalize_email(email)
        with logfire.span("user_service.create_user", email=email, role=role.value):
            if await self.user_repository.find_by_email(email):
                logfire.warn("Email already registered", email=email)
                raise ConflictError("User with this email already exists")

            user = User(
                id=UserId(uuid4()),
                email=email,
                name=name.strip(),
                password_hash=password_hash,
                role=role,
            )
            try:
                saved = await self.user_repository.save(user)
            except ConcurrencyConflictError:
                raise ConflictError("User with this email already exists")

            logfire.info("User created", user_id=str(saved.id), role=role.value)
            return saved

    async def update_role(self, user_id: UserId, role: UserRole) -> User:
        """Change a user's role.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "user_service.update_role", user_id=str(user_id), role=role.value
        ):
            user = await self.get_by_id(user_id)
            saved = await self.user_repository.save(
                user.model_copy(update={"role": role, "updated_at": datetime.now()})
            )
            logfire.info(
                "User role updated",
                user_id=str(user_id),
                old_role=user.role.value,
                new_role=role.value,
            )
            return saved

    async def update_password_hash(self, user: User, password_hash: str) -> User:
        """Store a new password hash for a user."""
        return await self.user_repository.save(
            user.model_copy(
                update={"password_hash": password_hash, "updated_at": datetime.now()}
            )
        )

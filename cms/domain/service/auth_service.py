"""Authentication domain service."""

import logfire

from cms.domain.error import AuthenticationError, ValidationError
from cms.domain.model import User
from cms.domain.value import UserRole
from cms.util.password import PasswordHasher

from .base import Service
from .user_service import UserService

MIN_PASSWORD_LENGTH = 6


class AuthService(Service):
    """Domain service for email/password authentication.

    Registration creates accounts with the configured default role; login
    verifies the password and transparently upgrades legacy hashes.
    """

    def __init__(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        default_role: UserRole = UserRole.READER,
    ) -> None:
        """Initialize auth service.

        Args:
            user_service: User domain service
            password_hasher: Password hashing helper
            default_role: Role given to self-registered users
        """
        self.user_service = user_service
        self.password_hasher = password_hasher
        self.default_role = default_role

    async def register(self, email: str, password: str, name: str) -> User:
        """Register a new user.

        Args:
            email: Email address
            password: Plaintext password
            name: Display name

        Returns:
            Created user

        Raises:
            ValidationError: If a field is missing or the password is too short
            ConflictError: If the email is already registered
        """
        if not email or not email.strip() or not name or not name.strip():
            raise ValidationError("Email, password and name are required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        return await self.user_service.create_user(
            email=email,
            name=name,
            password_hash=self.password_hasher.hash(password),
            role=self.default_role,
        )

    async def authenticate(self, email: str, password: str) -> User:
        """Verify credentials and return the user.

        The same error is raised for unknown emails and wrong passwords.

        Raises:
            AuthenticationError: If credentials are wrong or the account is inactive
        """
        with logfire.span("auth_service.authenticate", email=email):
            user = await self.user_service.get_by_email(email)
            if not user or not self.password_hasher.verify(password, user.password_hash):
                logfire.warn("Invalid login attempt", email=email)
                raise AuthenticationError("Invalid email or password")

            if not user.is_active:
                logfire.warn("Inactive user attempted login", user_id=str(user.id))
                raise AuthenticationError("Account is deactivated")

            if self.password_hasher.needs_rehash(user.password_hash):
                user = await self.user_service.update_password_hash(
                    user, self.password_hasher.hash(password)
                )
                logfire.info("Password hash upgraded", user_id=str(user.id))

            logfire.info("User authenticated", user_id=str(user.id))
            return user

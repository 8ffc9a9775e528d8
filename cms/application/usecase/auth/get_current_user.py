"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from cms.domain.error import AuthenticationError, NotFoundError
from cms.domain.model import User
from cms.domain.service import JWTService, UserService
from cms.domain.value import UserId, UserRole

from ..base import BaseUseCase


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
        )


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting current authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> UserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load user from database (the role is read fresh, not from the token)
        3. Reject deactivated accounts

        Args:
            request: Request with JWT token

        Returns:
            User information if token is valid and user exists

        Raises:
            JWTError: If token is invalid or expired
            AuthenticationError: If the user no longer exists or is inactive
        """
        # Verify token (raises JWTError if invalid)
        payload = self.jwt_service.verify_token(request.token)

        try:
            user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))
        except NotFoundError:
            raise AuthenticationError("User no longer exists")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        return UserResponse.from_user(user)

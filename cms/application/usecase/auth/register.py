"""Register use case."""

import logfire
from pydantic import BaseModel

from cms.domain.service import AuthService, JWTService

from ..base import BaseUseCase
from .get_current_user import UserResponse


class RegisterRequest(BaseModel):
    """Register request."""

    email: str
    password: str
    name: str


class AuthResponse(BaseModel):
    """Authenticated user with a fresh token."""

    user: UserResponse
    token: str


class RegisterUseCase(BaseUseCase):
    """Use case for self-registration with email and password."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Register a user and issue a token.

        Raises:
            ValidationError: If a field is missing or the password is too short
            ConflictError: If the email is already registered
        """
        with logfire.span("register.execute", email=request.email):
            user = await self.auth_service.register(
                email=request.email, password=request.password, name=request.name
            )
            token = self.jwt_service.create_token(user)
            logfire.info("User registered", user_id=str(user.id))
            return AuthResponse(user=UserResponse.from_user(user), token=token)

"""Login use case."""

import logfire
from pydantic import BaseModel

from cms.domain.service import AuthService, JWTService

from ..base import BaseUseCase
from .get_current_user import UserResponse
from .register import AuthResponse


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str


class LoginUseCase(BaseUseCase):
    """Use case for email/password login."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Verify credentials and issue a token.

        Raises:
            AuthenticationError: If credentials are wrong or the account is inactive
        """
        with logfire.span("login.execute", email=request.email):
            user = await self.auth_service.authenticate(request.email, request.password)
            token = self.jwt_service.create_token(user)
            return AuthResponse(user=UserResponse.from_user(user), token=token)

"""Bearer token authentication helpers for routes.

Routes resolve the caller with :func:`authenticate` (or
:func:`authenticate_optional` for public endpoints that show more to
signed-in users) and then gate on role with :func:`require_author` /
:func:`require_admin`.
"""

import logfire
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cms.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    UserResponse,
)
from cms.domain.error import AuthenticationError
from cms.util.jwt import JWTError

# auto_error=False so missing tokens produce our own 401 message
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    get_current_user_use_case: GetCurrentUserUseCase,
) -> UserResponse:
    """Resolve the caller from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired, or
            the account is gone or deactivated
    """
    if not credentials or not credentials.credentials:
        raise _unauthorized("Access token required")

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=credentials.credentials)
        )
    except JWTError as e:
        raise _unauthorized(str(e))
    except AuthenticationError as e:
        raise _unauthorized(str(e))


async def authenticate_optional(
    credentials: HTTPAuthorizationCredentials | None,
    get_current_user_use_case: GetCurrentUserUseCase,
) -> UserResponse | None:
    """Resolve the caller if a valid token was sent, otherwise None."""
    if not credentials or not credentials.credentials:
        return None

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=credentials.credentials)
        )
    except (JWTError, AuthenticationError) as e:
        logfire.info("Ignoring invalid optional token", error=str(e))
        return None


def require_author(user: UserResponse) -> None:
    """Allow authors, admins and super admins.

    Raises:
        HTTPException: 403 for readers
    """
    if not user.role.can_author:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Author access required"
        )


def require_admin(user: UserResponse) -> None:
    """Allow admins and super admins.

    Raises:
        HTTPException: 403 for everyone else
    """
    if not user.role.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )

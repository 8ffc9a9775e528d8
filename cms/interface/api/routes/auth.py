"""Authentication routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel

from cms.application.usecase.auth import (
    AuthResponse,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
    UserResponse,
)
from cms.domain.error import DomainError
from cms.interface.api.security import authenticate, bearer_scheme
from cms.interface.error import http_error

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


class RegisterAPIRequest(BaseModel):
    """API request for registration."""

    email: str
    password: str
    name: str


class LoginAPIRequest(BaseModel):
    """API request for login."""

    email: str
    password: str


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterAPIRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> AuthResponse:
    """Register a new account.

    Self-registered accounts get the configured default role (reader).

    Returns:
        The created user and a bearer token
    """
    try:
        return await register_use_case.execute(
            RegisterRequest(
                email=request.email, password=request.password, name=request.name
            )
        )
    except DomainError as e:
        logfire.warn("Registration rejected", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error during registration", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginAPIRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> AuthResponse:
    """Log in with email and password.

    Returns:
        The user and a bearer token
    """
    try:
        return await login_use_case.execute(
            LoginRequest(email=request.email, password=request.password)
        )
    except DomainError as e:
        logfire.warn("Login rejected", error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error during login", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in",
        )


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserResponse:
    """Get the authenticated user."""
    return await authenticate(credentials, get_current_user_use_case)

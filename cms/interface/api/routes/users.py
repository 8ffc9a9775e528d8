"""User administration routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel

from cms.application.usecase.auth import GetCurrentUserUseCase, UserResponse
from cms.application.usecase.user import UpdateUserRoleRequest, UpdateUserRoleUseCase
from cms.domain.error import DomainError
from cms.domain.value import UserRole
from cms.interface.api.security import authenticate, bearer_scheme, require_admin
from cms.interface.error import http_error

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserRoleAPIRequest(BaseModel):
    """API request for changing a user's role."""

    role: UserRole


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: UUID,
    request: UpdateUserRoleAPIRequest,
    update_user_role_use_case: FromDishka[UpdateUserRoleUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserResponse:
    """Change a user's role. Admin only."""
    user = await authenticate(credentials, get_current_user_use_case)
    require_admin(user)

    try:
        return await update_user_role_use_case.execute(
            UpdateUserRoleRequest(
                user_id=user_id, role=request.role, actor_id=UUID(user.id)
            )
        )
    except DomainError as e:
        logfire.warn("Role update rejected", user_id=str(user_id), error=str(e))
        raise http_error(e)
    except Exception as e:
        logfire.error("Unexpected error updating role", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user role",
        )

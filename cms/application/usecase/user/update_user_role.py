"""Update user role use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cms.application.usecase.auth.get_current_user import UserResponse
from cms.domain.error import NotAuthorizedError
from cms.domain.service import UserService
from cms.domain.value import UserId, UserRole

from ..base import BaseUseCase


class UpdateUserRoleRequest(BaseModel):
    """Update user role request."""

    user_id: UUID  # Account being changed
    role: UserRole
    actor_id: UUID  # Admin performing the change


class UpdateUserRoleUseCase(BaseUseCase):
    """Use case for admins promoting or demoting users."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user role use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserRoleRequest) -> UserResponse:
        """Change a user's role.

        Only super admins may grant the super admin role or change the role
        of an existing super admin.

        Raises:
            NotFoundError: If either user does not exist
            NotAuthorizedError: If the actor may not make this change
        """
        with logfire.span(
            "update_user_role.execute",
            user_id=str(request.user_id),
            role=request.role.value,
        ):
            actor = await self.user_service.get_by_id(UserId(request.actor_id))
            target = await self.user_service.get_by_id(UserId(request.user_id))

            touches_super_admin = UserRole.SUPER_ADMIN in (request.role, target.role)
            if not actor.role.is_admin or (
                touches_super_admin and actor.role != UserRole.SUPER_ADMIN
            ):
                raise NotAuthorizedError("Not allowed to assign this role")

            updated = await self.user_service.update_role(target.id, request.role)
            return UserResponse.from_user(updated)

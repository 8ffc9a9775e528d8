"""User use cases."""

from .update_user_role import UpdateUserRoleRequest, UpdateUserRoleUseCase

__all__ = [
    "UpdateUserRoleRequest",
    "UpdateUserRoleUseCase",
]

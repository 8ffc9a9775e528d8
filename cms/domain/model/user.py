"""User aggregate root."""

from datetime import datetime

from pydantic import Field

from cms.domain.model.common import DomainModel
from cms.domain.value import UserId, UserRole


class User(DomainModel):
    """User account.

    Users sign in with email and password. Their role decides which
    mutations they may perform.
    """

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password_hash: str
    role: UserRole = UserRole.READER
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

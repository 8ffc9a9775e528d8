#!/usr/bin/env python3
"""Create the bootstrap admin account from ADMIN__EMAIL / ADMIN__PASSWORD."""

import asyncio
import sys

import logfire

from cms.config import Settings
from cms.domain.service import UserService
from cms.domain.value import UserRole
from cms.util.di.container import create_container
from cms.util.error import ConfigurationError
from cms.util.logging import setup_logging
from cms.util.observability import configure_logfire
from cms.util.password import PasswordHasher


async def create_admin(settings: Settings) -> None:
    """Create the admin user unless the email is already registered."""
    container = create_container()
    try:
        async with container() as request_container:
            user_service = await request_container.get(UserService)
            hasher = await request_container.get(PasswordHasher)

            existing = await user_service.get_by_email(settings.admin.email)
            if existing:
                logfire.info(
                    "Admin user already exists",
                    email=existing.email,
                    role=existing.role.value,
                )
                return

            admin = await user_service.create_user(
                email=settings.admin.email,
                name=settings.admin.name,
                password_hash=hasher.hash(settings.admin.password),
                role=UserRole.ADMIN,
            )
            logfire.info("Admin user created", email=admin.email, user_id=str(admin.id))
    finally:
        await container.close()


def main() -> int:
    """Create the admin account and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        if not settings.admin.email or not settings.admin.password:
            raise ConfigurationError("ADMIN__EMAIL and ADMIN__PASSWORD must be set")
        asyncio.run(create_admin(settings))
        return 0
    except Exception as e:
        logfire.error(
            "Admin creation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

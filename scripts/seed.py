#!/usr/bin/env python3
"""Seed a development database with an admin, a category and a welcome post.

Safe to run repeatedly: existing rows are left untouched.
"""

import asyncio
import sys

import logfire

from cms.config import Settings
from cms.domain.error import NotFoundError
from cms.domain.service import CategoryService, PostService, UserService
from cms.domain.value import PostStatus, UserRole
from cms.util.di.container import create_container
from cms.util.logging import setup_logging
from cms.util.observability import configure_logfire
from cms.util.password import PasswordHasher

SEED_ADMIN_EMAIL = "admin@blogcms.com"
SEED_ADMIN_PASSWORD = "admin123"

WELCOME_CONTENT = """# Welcome to Blog CMS

This is your first blog post! You can edit this content and create new posts \
through the API.

## Features

- SEO metadata
- Categories and tags
- Draft, published and archived posts

Enjoy writing!"""


async def seed(settings: Settings) -> None:
    container = create_container()
    try:
        async with container() as request_container:
            user_service = await request_container.get(UserService)
            category_service = await request_container.get(CategoryService)
            post_service = await request_container.get(PostService)
            hasher = await request_container.get(PasswordHasher)

            email = settings.admin.email or SEED_ADMIN_EMAIL
            admin = await user_service.get_by_email(email)
            if admin is None:
                admin = await user_service.create_user(
                    email=email,
                    name=settings.admin.name,
                    password_hash=hasher.hash(
                        settings.admin.password or SEED_ADMIN_PASSWORD
                    ),
                    role=UserRole.ADMIN,
                )
            logfire.info("Seed admin ready", email=admin.email)

            try:
                category = await category_service.get_by_slug("general")
            except NotFoundError:
                category = await category_service.create_category(
                    "General", "General blog posts"
                )
            logfire.info("Seed category ready", slug=category.slug.root)

            try:
                post = await post_service.get_post_by_slug("welcome-to-blog-cms")
            except NotFoundError:
                post = await post_service.create_post(
                    admin,
                    title="Welcome to Blog CMS",
                    content=WELCOME_CONTENT,
                    status=PostStatus.PUBLISHED,
                    excerpt="This is your first blog post using the new CMS!",
                    meta_title="Welcome to Blog CMS",
                    meta_description="Your first blog post using the new CMS system",
                )
                await category_service.set_post_category(post.id, category.id)
            logfire.info("Seed post ready", slug=post.slug.root)
    finally:
        await container.close()


def main() -> int:
    """Seed the database and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(seed(settings))
        return 0
    except Exception as e:
        logfire.error(
            "Database seeding failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

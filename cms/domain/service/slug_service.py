"""Slug generation and uniqueness resolution.

``slugify`` and ``resolve_unique`` are pure: the only I/O happens inside the
``exists`` probe handed to the resolver. ``SlugService`` binds them to the
post, category and tag repositories.
"""

import re
from typing import Awaitable, Callable, Optional
from uuid import UUID

import logfire

from cms.config import SlugSettings
from cms.domain.error import SlugExhaustedError, ValidationError
from cms.domain.repository import CategoryRepository, PostRepository, TagRepository
from cms.domain.value import Slug, SluggableKind

from .base import Service

MAX_SLUG_LENGTH = 100
MAX_SLUG_ATTEMPTS = 10_000

SlugExistsProbe = Callable[[str, Optional[UUID]], Awaitable[bool]]

_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def require_name(name: Optional[str], message: str) -> str:
    """Trim a display name, rejecting blank input.

    Raises:
        ValidationError: If the name is missing or whitespace only
    """
    if not name or not name.strip():
        raise ValidationError(message)
    return name.strip()


def slugify(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Convert a display name to URL-safe slug format.

    - Converts to lowercase
    - Removes every character except a-z, 0-9, spaces and hyphens
    - Replaces runs of spaces with a single hyphen
    - Removes consecutive hyphens
    - Strips leading/trailing hyphens and truncates

    Args:
        name: Name or title to slugify
        max_length: Maximum slug length

    Returns:
        URL-safe slug string (empty if the name has no valid chars)
    """
    slug = _DISALLOWED.sub("", name.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug).strip("-")
    # A cut can expose a hyphen at the end
    return slug[:max_length].rstrip("-")


async def resolve_unique(
    candidate: str,
    exists: SlugExistsProbe,
    exclude_id: Optional[UUID] = None,
    max_attempts: int = MAX_SLUG_ATTEMPTS,
    max_length: int = MAX_SLUG_LENGTH,
) -> str:
    """Find a free slug, appending ``-1``, ``-2``... on collision.

    The probe is awaited once per attempt, in order.

    Args:
        candidate: Base slug (already slugified, non-empty)
        exists: Async probe ``(slug, exclude_id) -> bool``
        exclude_id: Entity whose own row does not count as a collision
        max_attempts: Number of suffixes tried before giving up
        max_length: Maximum slug length, including the suffix

    Returns:
        The candidate itself, or the first free suffixed variant

    Raises:
        SlugExhaustedError: If every suffix up to ``max_attempts`` is taken
    """
    if not await exists(candidate, exclude_id):
        return candidate

    for counter in range(1, max_attempts + 1):
        suffix = f"-{counter}"
        # Ensure we don't exceed the max length with suffix
        attempt = candidate[: max_length - len(suffix)].rstrip("-") + suffix
        if not await exists(attempt, exclude_id):
            return attempt

    raise SlugExhaustedError(candidate, max_attempts)


class SlugService(Service):
    """Domain service allocating unique slugs for posts, categories and tags."""

    def __init__(
        self,
        post_repository: PostRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
        slug_settings: SlugSettings,
    ) -> None:
        """Initialize slug service.

        Args:
            post_repository: Post repository
            category_repository: Category repository
            tag_repository: Tag repository
            slug_settings: Slug length and attempt limits
        """
        self.post_repository = post_repository
        self.category_repository = category_repository
        self.tag_repository = tag_repository
        self.slug_settings = slug_settings

    def slugify(self, name: str) -> str:
        """Slugify a name using the configured maximum length."""
        return slugify(name, self.slug_settings.max_length)

    async def slug_exists(
        self, kind: SluggableKind, slug: str, exclude_id: Optional[UUID] = None
    ) -> bool:
        """Check whether a slug is taken within one entity collection.

        Args:
            kind: Which collection to probe
            slug: Candidate slug
            exclude_id: Entity whose own row is ignored

        Returns:
            True if another entity of that kind holds the slug
        """
        if kind is SluggableKind.POST:
            return await self.post_repository.slug_exists(slug, exclude_id)
        if kind is SluggableKind.CATEGORY:
            return await self.category_repository.slug_exists(slug, exclude_id)
        return await self.tag_repository.slug_exists(slug, exclude_id)

    async def generate_unique_slug(
        self,
        kind: SluggableKind,
        name: str,
        exclude_id: Optional[UUID] = None,
        fallback: Optional[str] = None,
    ) -> Slug:
        """Generate a unique slug from a name.

        Handles collisions by appending numeric suffixes.

        Args:
            kind: Entity collection the slug must be unique in
            name: Name or title to slugify
            exclude_id: Entity being renamed (its current slug stays available)
            fallback: Base slug used when the name has no slug characters

        Returns:
            Unique slug

        Raises:
            ValidationError: If the name yields an empty slug and no fallback is given
            SlugExhaustedError: If no free suffix was found
        """
        with logfire.span(
            "slug_service.generate_unique_slug", kind=kind.value, name=name
        ):
            base_slug = self.slugify(name)

            if not base_slug:
                if not fallback:
                    logfire.warn("Name produced empty slug", kind=kind.value, name=name)
                    raise ValidationError(f"Name '{name}' does not produce a valid slug")
                logfire.info("Using fallback slug", kind=kind.value, slug=fallback)
                base_slug = fallback

            async def exists(slug: str, exclude: Optional[UUID]) -> bool:
                return await self.slug_exists(kind, slug, exclude)

            try:
                slug = await resolve_unique(
                    base_slug,
                    exists,
                    exclude_id=exclude_id,
                    max_attempts=self.slug_settings.max_attempts,
                    max_length=self.slug_settings.max_length,
                )
            except SlugExhaustedError:
                logfire.error(
                    "Slug suffixes exhausted",
                    kind=kind.value,
                    base_slug=base_slug,
                    attempts=self.slug_settings.max_attempts,
                )
                raise

            logfire.info(
                "Generated unique slug",
                kind=kind.value,
                slug=slug,
                had_collision=slug != base_slug,
            )
            return Slug(slug)

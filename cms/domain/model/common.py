"""Shared configuration for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen base for users, posts, categories and tags.

    Entities are never mutated in place; services derive changed copies with
    ``model_copy(update=...)`` and hand them back to a repository.
    """

    model_config = ConfigDict(frozen=True)

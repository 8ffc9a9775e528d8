"""Domain services."""

from .auth_service import AuthService
from .base import Service
from .category_service import CategoryService
from .jwt_service import JWTService
from .post_service import PostService
from .slug_service import SlugService, resolve_unique, slugify
from .tag_service import TagService
from .user_service import UserService

__all__ = [
    "AuthService",
    "CategoryService",
    "JWTService",
    "PostService",
    "Service",
    "SlugService",
    "TagService",
    "UserService",
    "resolve_unique",
    "slugify",
]

"""Domain layer DI providers."""

from dishka import Scope, provide

from cms.config import AuthSettings, SlugSettings
from cms.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from cms.domain.service import (
    AuthService,
    CategoryService,
    JWTService,
    PostService,
    SlugService,
    TagService,
    UserService,
)
from cms.domain.value import UserRole
from cms.util.di.base import ProviderBase
from cms.util.password import PasswordHasher


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_slug_service(
        self,
        post_repository: PostRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
        slug_settings: SlugSettings,
    ) -> SlugService:
        """Provide slug domain service."""
        return SlugService(
            post_repository=post_repository,
            category_repository=category_repository,
            tag_repository=tag_repository,
            slug_settings=slug_settings,
        )

    @provide
    def get_post_service(
        self, post_repository: PostRepository, slug_service: SlugService
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, slug_service=slug_service)

    @provide
    def get_category_service(
        self, category_repository: CategoryRepository, slug_service: SlugService
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository, slug_service=slug_service
        )

    @provide
    def get_tag_service(
        self, tag_repository: TagRepository, slug_service: SlugService
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository, slug_service=slug_service)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_auth_service(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> AuthService:
        """Provide authentication domain service.

        Self-registered users receive the configured default role.
        """
        return AuthService(
            user_service=user_service,
            password_hasher=password_hasher,
            default_role=UserRole(auth_settings.default_role),
        )

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

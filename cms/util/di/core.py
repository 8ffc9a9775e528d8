"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from cms.config import AuthSettings, Settings, SlugSettings
from cms.util.di.base import ProviderBase
from cms.util.password import PasswordHasher


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_slug_settings(self, settings: Settings) -> SlugSettings:
        """Provide slug settings."""
        return settings.slug

    @provide(scope=Scope.APP)
    def provide_password_hasher(self) -> PasswordHasher:
        """Provide the password hasher (its CryptContext is built once)."""
        return PasswordHasher()

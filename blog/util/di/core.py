"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from blog.config import AuthSettings, PaginationSettings, Settings, StoreSettings
from blog.util.di.base import ProviderBase


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
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        """Provide store retry settings."""
        return settings.store

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        """Provide pagination settings."""
        return settings.pagination

"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from genie.config import AuthSettings, ClientSettings, InvitationSettings, Settings
from genie.util.di.base import ProviderBase


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
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation ledger settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_client_settings(self, settings: Settings) -> ClientSettings:
        return settings.client

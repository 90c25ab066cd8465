"""DI provider for auth infrastructure."""

import httpx
from dishka import Provider, provide

from fbauth.config import Config, FacebookConfig
from fbauth.domain.auth.port.identity_provider import IdentityProvider
from fbauth.infrastructure.auth.facebook import FacebookIdentityProvider
from fbauth.util.di.scope import Scope


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.APP)
    def get_facebook_config(self, config: Config) -> FacebookConfig:
        return config.auth.facebook

    @provide(scope=Scope.APP)
    def get_identity_provider(
        self, config: FacebookConfig, http_client: httpx.AsyncClient
    ) -> IdentityProvider:
        """Facebook adapter; raises ConfigurationError if settings are incomplete."""
        return FacebookIdentityProvider(config=config, http_client=http_client)

"""DI provider for HTTP infrastructure."""

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, from_context, provide

from fbauth.config import Config
from fbauth.util.di.scope import Scope


class HttpProvider(Provider):
    """DI provider for the outbound HTTP client."""

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterator[httpx.AsyncClient]:
        """Shared HTTP client for provider calls (connection pooling).

        Every call is bounded by the configured timeouts; a hung Graph API
        surfaces as ProviderTimeoutError instead of blocking the request.
        """
        async with httpx.AsyncClient(timeout=config.auth.http.to_httpx()) as client:
            yield client

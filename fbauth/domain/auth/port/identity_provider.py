"""Identity provider port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from fbauth.domain.auth.model.value import AuthData
from fbauth.domain.shared.port import Port


class IdentityProvider(Port, Protocol):
    """Port for the external identity provider.

    Implementations are adapters in infrastructure/ (e.g., FacebookIdentityProvider).
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique identifier for this provider (e.g., 'facebook')."""
        ...

    @property
    @abstractmethod
    def authorization_url(self) -> str:
        """Full URL of the login dialog the browser is sent to.

        Built from static configuration, so it is the same for every request.
        """
        ...

    @abstractmethod
    async def exchange_code(self, code: str) -> AuthData:
        """Exchange an authorization code for token and identity data.

        Args:
            code: Decoded authorization code from the callback

        Returns:
            AuthData with the access token and the provider's user id

        Raises:
            TokenExchangeError: If the code could not be exchanged
            IdentityLookupError: If the token could not be resolved to a user
            ProviderTimeoutError: If either call timed out
        """
        ...

"""Flow controller for the authorization code grant."""

import logging
from dataclasses import dataclass

import logfire

from fbauth.domain.auth.model.outcome import Authenticated, Failed, FlowOutcome, Redirect
from fbauth.domain.auth.model.value import AuthData
from fbauth.domain.auth.port.identity_provider import IdentityProvider
from fbauth.domain.auth.util.callback import CallbackParams
from fbauth.domain.shared.error import (
    AuthorizationDeniedError,
    FbAuthError,
    InvalidCallbackError,
)

logger = logging.getLogger(__name__)


@dataclass
class FlowService:
    """Drives one request through the authorization code flow.

    Holds no per-request state: the phase is derived from the query string
    of each inbound request.

    - Start (no query): redirect to the provider's login dialog
    - Callback with ``error``: the user denied access
    - Callback with ``code``: exchange code -> token -> identity
    """

    provider: IdentityProvider

    async def handle(self, query: str | None) -> FlowOutcome:
        """Run the phase selected by ``query``.

        Args:
            query: Raw query string of the inbound request, with or without
                the leading ``?``; None or empty when there is none.

        Returns:
            Redirect, Authenticated or Failed. Flow errors are returned,
            never raised.
        """
        params = CallbackParams.parse(query)
        if params.is_empty:
            logger.info("Starting %s login, redirecting to dialog", self.provider.provider_name)
            return Redirect(url=self.provider.authorization_url)

        try:
            auth_data = await self.complete(params)
        except FbAuthError as e:
            logger.warning(
                "%s login failed: %s (%s)", self.provider.provider_name, e.message, e.code
            )
            return Failed(error=e)

        return Authenticated(auth_data=auth_data)

    async def complete(self, params: CallbackParams) -> AuthData:
        """Exchange a callback for AuthData.

        Raises:
            AuthorizationDeniedError: The callback carries an ``error``
            InvalidCallbackError: The callback carries no ``code``
            ExternalServiceError: A provider call failed
        """
        if params.has_error:
            raise AuthorizationDeniedError(
                f"Received an error from the authorization request: {params.error}",
                error=params.error,
                error_reason=params.error_reason,
                error_description=params.error_description,
            )

        code = params.code
        if not code:
            raise InvalidCallbackError(
                "Callback carries neither an authorization code nor an error",
                code="missing_code",
            )

        with logfire.span("CompleteOAuth", provider=self.provider.provider_name):
            auth_data = await self.provider.exchange_code(code)

        logger.info(
            "OAuth complete: provider=%s, provider_user_id=%s",
            auth_data.user_info.provider,
            auth_data.user_info.provider_user_id,
        )
        return auth_data

"""Facebook identity provider adapter."""

import logging
from typing import Any

import httpx
import logfire
from pydantic import ValidationError

from fbauth.config import FacebookConfig
from fbauth.domain.auth.model.response import DebugTokenResponse, find_oauth_exception
from fbauth.domain.auth.model.value import FACEBOOK_PROVIDER, AuthData, TokenData, UserInfo
from fbauth.domain.auth.port.identity_provider import IdentityProvider
from fbauth.domain.auth.util.query import build_query
from fbauth.domain.shared.error import (
    ConfigurationError,
    ExternalServiceError,
    IdentityLookupError,
    ProviderTimeoutError,
    TokenExchangeError,
)

logger = logging.getLogger(__name__)

TOKEN_EXCHANGE = "token_exchange"
IDENTITY_LOOKUP = "identity_lookup"


class FacebookIdentityProvider(IdentityProvider):
    """IdentityProvider implementation for Facebook Login.

    The authorize query string depends only on configuration, so it is built
    once here and reused for every redirect. Configuration must therefore not
    change for the lifetime of the instance.
    """

    def __init__(self, config: FacebookConfig, http_client: httpx.AsyncClient) -> None:
        missing = config.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Facebook provider is missing required settings: {', '.join(missing)}",
                missing=missing,
            )

        self._config = config
        self._http = http_client
        self._authorize_query = build_query(config.oauth_params(), skip="client_secret")

    @property
    def provider_name(self) -> str:
        return FACEBOOK_PROVIDER

    @property
    def authorize_query(self) -> str:
        return self._authorize_query

    @property
    def authorization_url(self) -> str:
        return f"{self._config.auth_url}?{self._authorize_query}"

    async def exchange_code(self, code: str) -> AuthData:
        """Exchange authorization code for token, then token for user id."""
        token_data = await self._fetch_token(code)
        user_id = await self._lookup_user_id(token_data.access_token)

        return AuthData(
            token_data=token_data,
            user_info=UserInfo(provider=self.provider_name, provider_user_id=user_id),
        )

    async def _fetch_token(self, code: str) -> TokenData:
        params = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.redirect_uri,
            "client_secret": self._config.client_secret,
            "code": code,
        }
        url = f"{self._config.token_url}?{build_query(params)}"

        with logfire.span("facebook.token_exchange"):
            payload = await self._get_json(url, TOKEN_EXCHANGE, TokenExchangeError)

        oauth_exception = find_oauth_exception(payload)
        if oauth_exception is not None:
            logger.warning(
                "Facebook token exchange rejected: type=%s, code=%s, message=%s",
                oauth_exception.get("type"),
                oauth_exception.get("code"),
                oauth_exception.get("message"),
            )
            message = "Token request threw OAuth exception"
            if oauth_exception.get("message"):
                message = f"{message}: {oauth_exception['message']}"
            raise TokenExchangeError(message, code="oauth_exception")

        try:
            return TokenData.model_validate(payload)
        except ValidationError as e:
            logger.error("Facebook token response has unexpected shape: %s", e)
            raise TokenExchangeError(
                "Facebook token response has unexpected shape",
                code="invalid_token_response",
                cause=e,
            ) from e

    async def _lookup_user_id(self, access_token: str) -> str:
        params = {
            "input_token": access_token,
            # App access token: distinct from the user's access token above
            "access_token": f"{self._config.client_id}|{self._config.client_secret}",
        }
        url = f"{self._config.debug_token_url}?{build_query(params)}"

        with logfire.span("facebook.identity_lookup"):
            payload = await self._get_json(url, IDENTITY_LOOKUP, IdentityLookupError)

        try:
            debug_token = DebugTokenResponse.model_validate(payload)
        except ValidationError as e:
            logger.error("Facebook debug_token response has unexpected shape: %s", e)
            raise IdentityLookupError(
                "Facebook debug_token response has no user id",
                code="invalid_identity_response",
                cause=e,
            ) from e

        return debug_token.data.user_id

    async def _get_json(
        self,
        url: str,
        stage: str,
        error_cls: type[ExternalServiceError],
    ) -> Any:
        """GET a Facebook endpoint and decode the JSON body.

        The body is decoded whatever the status code: Facebook reports
        failures as JSON with a 4xx status.
        """
        try:
            response = await self._http.get(url)
        except httpx.TimeoutException as e:
            logger.error("Facebook %s timed out: %s", stage, type(e).__name__)
            raise ProviderTimeoutError(
                f"Facebook did not answer the {stage.replace('_', ' ')} in time",
                stage=stage,
                cause=e,
            ) from e
        except httpx.RequestError as e:
            logger.error("Facebook %s request failed: %s", stage, type(e).__name__)
            raise error_cls(
                f"Failed to connect to Facebook: {e}",
                code="idp_unavailable",
                cause=e,
            ) from e
        except httpx.InvalidURL as e:
            # Control characters in the code, or a URL over httpx's length limit
            logger.error("Facebook %s request URL rejected: %s", stage, e)
            raise error_cls(
                f"Cannot build the {stage.replace('_', ' ')} request: {e}",
                code="invalid_request",
                cause=e,
            ) from e

        if response.status_code != 200:
            logger.warning("Facebook %s returned status=%s", stage, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Facebook %s returned a non-JSON body: status=%s", stage, response.status_code)
            raise error_cls(
                f"Facebook returned an unreadable {stage.replace('_', ' ')} response",
                code="invalid_json",
                cause=e,
            ) from e

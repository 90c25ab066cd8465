"""Error hierarchy for fbauth.

Error layers:
- FbAuthError: Base class for all fbauth errors
- DomainError: The callback itself is unusable (4xx responses)
- InfrastructureError: Misconfiguration or a failing provider call (5xx responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class FbAuthError(Exception):
    """Base class for all fbauth errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (the browser brought back something we cannot use - 4xx)
# =============================================================================


class DomainError(FbAuthError):
    """Base class for domain errors."""


class AuthorizationDeniedError(DomainError):
    """The provider reported an error on the callback, usually a user denial."""

    def __init__(
        self,
        message: str,
        error: str | None = None,
        error_reason: str | None = None,
        error_description: str | None = None,
    ) -> None:
        super().__init__(message, code="authorization_denied")
        self.error = error
        self.error_reason = error_reason
        self.error_description = error_description


class InvalidCallbackError(DomainError):
    """Callback query carries neither a code nor an error."""


# =============================================================================
# Infrastructure Errors (configuration and provider failures - 5xx)
# =============================================================================


class InfrastructureError(FbAuthError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message, code="configuration_error")
        self.missing = missing or []


class ExternalServiceError(InfrastructureError):
    """A call to the identity provider failed.

    ``cause`` is the underlying exception (transport error, JSON decode error,
    schema mismatch) when there is one; it is also chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.cause = cause


class TokenExchangeError(ExternalServiceError):
    """Exchanging the authorization code for an access token failed."""


class IdentityLookupError(ExternalServiceError):
    """Resolving the access token to a provider user id failed."""


class ProviderTimeoutError(ExternalServiceError):
    """The provider did not answer within the configured timeout."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, code="provider_timeout", cause=cause)
        self.stage = stage

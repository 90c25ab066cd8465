"""Centralized error transformation for API routes.

Maps fbauth errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from fbauth.domain.shared.error import (
    AuthorizationDeniedError,
    ConfigurationError,
    DomainError,
    ExternalServiceError,
    FbAuthError,
    InvalidCallbackError,
    ProviderTimeoutError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    AuthorizationDeniedError: 403,
    InvalidCallbackError: 400,
}


def map_fbauth_error(error: FbAuthError) -> HTTPException:
    """Map an fbauth error to an HTTPException.

    Args:
        error: The fbauth error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, DomainError):
        if isinstance(error, AuthorizationDeniedError):
            if error.error_reason:
                detail["error_reason"] = error.error_reason
            if error.error_description:
                detail["error_description"] = error.error_description
        return HTTPException(
            status_code=DOMAIN_ERROR_STATUS_MAP.get(type(error), 400),
            detail=detail,
        )

    if isinstance(error, ProviderTimeoutError):
        detail["stage"] = error.stage
        return HTTPException(status_code=504, detail=detail)

    if isinstance(error, ExternalServiceError):
        # Upstream (Graph API) failure
        return HTTPException(status_code=502, detail=detail)

    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=500, detail=detail)

    # Fallback for unknown FbAuthError subclasses
    return HTTPException(status_code=500, detail=detail)

"""Schemas for the JSON bodies Facebook returns.

The token endpoint answers either with the token fields (validated straight
into ``TokenData``) or with an OAuth exception. Older Graph versions put the
marker at the top level (``{"type": "oAuthException"}``), current ones nest
it under ``error``.
"""

from typing import Any

from pydantic import BaseModel, field_validator

OAUTH_EXCEPTION_TYPE = "oauthexception"


class DebugTokenData(BaseModel):
    user_id: str
    app_id: str | None = None
    is_valid: bool | None = None
    expires_at: int | None = None

    @field_validator("user_id", "app_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Graph ids are strings, but tolerate numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class DebugTokenResponse(BaseModel):
    """Body of ``GET /debug_token``."""

    data: DebugTokenData


def find_oauth_exception(payload: Any) -> dict[str, Any] | None:
    """Return the OAuth exception object in a token response, if any.

    Args:
        payload: Decoded JSON body of the token endpoint.

    Returns:
        The dict carrying the exception ``type`` (the body itself for the flat
        shape, ``body["error"]`` for the nested one), or None.
    """
    if not isinstance(payload, dict):
        return None

    if _is_oauth_exception(payload.get("type")):
        return payload

    error = payload.get("error")
    if isinstance(error, dict) and _is_oauth_exception(error.get("type")):
        return error

    return None


def _is_oauth_exception(value: Any) -> bool:
    return isinstance(value, str) and value.lower() == OAUTH_EXCEPTION_TYPE

"""Value objects for the auth domain."""

from pydantic import BaseModel, ConfigDict, Field

FACEBOOK_PROVIDER = "facebook"


class TokenData(BaseModel):
    """Access token returned by the token exchange."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str | None = None
    expires_in: int | None = None  # Seconds, as reported by the provider


class UserInfo(BaseModel):
    """Who the token belongs to, normalized across providers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str
    provider_user_id: str = Field(alias="providerUserId")


class AuthData(BaseModel):
    """Final record of a completed flow, handed back to the host application.

    Dump with ``by_alias=True`` to get the ``tokenData`` / ``userInfo`` shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token_data: TokenData = Field(alias="tokenData")
    user_info: UserInfo = Field(alias="userInfo")

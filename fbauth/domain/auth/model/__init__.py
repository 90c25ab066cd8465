"""Auth domain models."""

from .outcome import Authenticated, Failed, FlowOutcome, Redirect
from .value import FACEBOOK_PROVIDER, AuthData, TokenData, UserInfo

__all__ = [
    "FACEBOOK_PROVIDER",
    "AuthData",
    "Authenticated",
    "Failed",
    "FlowOutcome",
    "Redirect",
    "TokenData",
    "UserInfo",
]

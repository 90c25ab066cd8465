"""Result values returned by the flow controller.

Every request ends in exactly one of these; failures are values, not
exceptions, so the host handles all three the same way.
"""

from dataclasses import dataclass

from fbauth.domain.auth.model.value import AuthData
from fbauth.domain.shared.error import FbAuthError


@dataclass(frozen=True)
class Redirect:
    """Send the browser to the provider's login dialog."""

    url: str


@dataclass(frozen=True)
class Authenticated:
    """The callback was exchanged for a complete AuthData record."""

    auth_data: AuthData


@dataclass(frozen=True)
class Failed:
    """The flow stopped; ``error`` says why."""

    error: FbAuthError


FlowOutcome = Redirect | Authenticated | Failed

"""Auth domain ports."""

from .identity_provider import IdentityProvider

__all__ = [
    "IdentityProvider",
]

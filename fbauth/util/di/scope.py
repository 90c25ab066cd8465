"""Custom Dishka scopes for fbauth."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, HTTP client, provider adapter)
    - UOW: One inbound HTTP request
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")

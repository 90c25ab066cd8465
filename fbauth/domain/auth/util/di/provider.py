"""DI provider for auth domain."""

from dishka import Provider, from_context, provide
from fastapi import Request

from fbauth.domain.auth.service.flow import FlowService
from fbauth.util.di.scope import Scope


class AuthProvider(Provider):
    """DI provider for auth domain services."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # FlowService keeps no per-request state, one instance serves all requests
    flow_service = provide(FlowService, scope=Scope.APP)

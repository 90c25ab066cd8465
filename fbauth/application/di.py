from dishka import AsyncContainer, make_async_container

from fbauth.config import Config
from fbauth.domain.auth.util.di.provider import AuthProvider
from fbauth.infrastructure.auth.di import AuthInfraProvider
from fbauth.infrastructure.http.di import HttpProvider
from fbauth.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        HttpProvider(),
        AuthInfraProvider(),
        AuthProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )

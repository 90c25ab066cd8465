import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fbauth.application.api.v1.errors import map_fbauth_error
from fbauth.application.api.v1.routes import auth, health
from fbauth.application.di import create_container
from fbauth.config import Config, configure_logging
from fbauth.domain.shared.error import FbAuthError
from fbauth.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    yield
    # Closes the shared httpx client
    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    missing = config.auth.facebook.missing_fields()
    if missing:
        # The first request to /auth/facebook will fail with configuration_error
        logger.warning("Facebook login is not configured, missing: %s", ", ".join(missing))

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    # httpx is instrumented once per process, in `fbauth serve`
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    if container is None:
        container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(auth.router, prefix="/api/v1")

    # Global fbauth error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(FbAuthError)
    async def fbauth_error_handler(request: Request, exc: FbAuthError):
        http_exc = map_fbauth_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: fbauth serve handles this
app = create_app()

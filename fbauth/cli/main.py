"""Main CLI application using Cyclopts.

Runs the same FlowService the HTTP route uses, so a login can be checked
from a terminal: print the dialog URL, open it, then paste the query string
Facebook redirected to into ``fbauth exchange``.
"""

import asyncio
import sys

import cyclopts
import logfire

from fbauth.application.di import create_container
from fbauth.cli.console import get_console
from fbauth.config import Config, configure_logging
from fbauth.domain.auth.model.outcome import Authenticated, Failed, FlowOutcome, Redirect
from fbauth.domain.auth.service.flow import FlowService
from fbauth.domain.shared.error import FbAuthError

app = cyclopts.App(
    name="fbauth",
    help="Facebook OAuth 2.0 authorization code flow",
)


async def _handle(query: str | None, config: Config) -> FlowOutcome:
    container = create_container(config)
    try:
        flow = await container.get(FlowService)
        return await flow.handle(query)
    finally:
        await container.close()


def _run(query: str | None) -> FlowOutcome:
    """Run one flow step, exiting with status 1 on configuration errors."""
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    try:
        return asyncio.run(_handle(query, config))
    except FbAuthError as e:
        console.error(e.message, hint="Set FBAUTH_AUTH__FACEBOOK__* or FBAUTH_CONFIG_FILE")
        sys.exit(1)


@app.command
def serve(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the HTTP server.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    import uvicorn

    config = Config()  # type: ignore[call-arg]
    logfire.configure(send_to_logfire="if-token-present", service_name=config.server.name)
    logfire.instrument_httpx()
    get_console().success(f"Serving on http://{host}:{port}/api/v1/auth/facebook")
    uvicorn.run(
        "fbauth.application.api.rest.app:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command(name="authorize-url")
def authorize_url() -> None:
    """Print the Facebook login dialog URL."""
    outcome = _run(None)
    if isinstance(outcome, Redirect):
        get_console().print(outcome.url, soft_wrap=True, markup=False, highlight=False)


@app.command
def exchange(query: str) -> None:
    """Exchange a callback query string for AuthData.

    Args:
        query: The query string Facebook appended to the redirect URI,
               e.g. "code=AQD...&state=xyz". Quote it in the shell.
    """
    console = get_console()
    if not query.removeprefix("?"):
        console.error("Query string is empty", hint="Pass the part after '?' of the callback URL")
        sys.exit(1)

    outcome = _run(query)
    if isinstance(outcome, Authenticated):
        console.print_json(outcome.auth_data.model_dump(by_alias=True))
    elif isinstance(outcome, Failed):
        console.error(outcome.error.message, hint=outcome.error.code)
        sys.exit(1)

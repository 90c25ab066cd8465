"""Authentication route for the Facebook login flow."""

import logging
from urllib.parse import urlencode

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from fbauth.config import Config
from fbauth.domain.auth.model.outcome import Authenticated, Redirect
from fbauth.domain.auth.model.value import AuthData
from fbauth.domain.auth.service.flow import FlowService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=DishkaRoute)


@router.get("/facebook")
async def facebook_login(
    request: Request,
    config: FromDishka[Config],
    flow: FromDishka[FlowService],
) -> Response:
    """Single entry point for both legs of the flow.

    Without a query string the browser is redirected to Facebook's login
    dialog. Facebook redirects back here with ``code`` (or ``error``) and the
    code is exchanged for AuthData.
    """
    outcome = await flow.handle(request.url.query)

    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.url, status_code=302)

    if isinstance(outcome, Authenticated):
        success_redirect = config.auth.success_redirect
        if success_redirect:
            logger.info("Facebook login complete, redirecting to %s", success_redirect)
            return RedirectResponse(
                url=f"{success_redirect}#auth={_fragment_params(outcome.auth_data)}",
                status_code=302,
            )
        return JSONResponse(content=outcome.auth_data.model_dump(by_alias=True))

    # Rendered by the global FbAuthError handler
    raise outcome.error


def _fragment_params(auth_data: AuthData) -> str:
    # Fragments never reach servers or access logs
    return urlencode(
        {
            "access_token": auth_data.token_data.access_token,
            "token_type": auth_data.token_data.token_type or "",
            "expires_in": auth_data.token_data.expires_in or "",
            "provider": auth_data.user_info.provider,
            "provider_user_id": auth_data.user_info.provider_user_id,
        }
    )

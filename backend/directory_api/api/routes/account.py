"""Account Routes — OAuth login, logout, and permission summary.

Invariants:
    - GET /permissions is 403 for anonymous callers
    - Login is only offered for the registered providers; others are 404
    - Session identity written only after a successful token exchange

Design Decisions:
    - OAuth registry lives on app.state (built once in main.py), fetched per request
"""

import logging

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from httpx import HTTPError

from directory_api.config import Settings, get_settings
from directory_api.core.errors import NotFoundError, UnauthorizedError
from directory_api.infrastructure.oauth import SUPPORTED_PROVIDERS, fetch_profile
from directory_api.services.account_permissions import (
    SessionAccessChecker, get_account_permissions, log_in, log_out,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/account", tags=["account"])


def get_access_checker(
    settings: Settings = Depends(get_settings),
) -> SessionAccessChecker:
    return SessionAccessChecker(
        settings.directory_admins, settings.enterprise_admins,
    )


def _oauth_client(request: Request, provider: str):
    if provider not in SUPPORTED_PROVIDERS:
        raise NotFoundError("Login provider", provider)
    return request.app.state.oauth.create_client(provider)


@router.get("/permissions")
async def account_permissions(
    request: Request,
    checker: SessionAccessChecker = Depends(get_access_checker),
):
    """Directory admin flag, or the enterprises this account may manage."""
    return get_account_permissions(checker, request)


@router.get("/logout")
async def logout(request: Request):
    log_out(request)
    return {}


@router.get("/login/{provider}")
async def login(request: Request, provider: str):
    """Redirect to the provider's authorization page."""
    client = _oauth_client(request, provider)
    redirect_uri = request.url_for("login_callback", provider=provider)
    return await client.authorize_redirect(request, str(redirect_uri))


@router.get("/login/{provider}/callback", name="login_callback")
async def login_callback(
    request: Request,
    provider: str,
    settings: Settings = Depends(get_settings),
):
    """Exchange the authorization response for a session identity."""
    client = _oauth_client(request, provider)
    try:
        token = await client.authorize_access_token(request)
        profile = await fetch_profile(client, provider, token)
    except (OAuthError, HTTPError, KeyError) as e:
        logger.warning(
            f"Login via {provider} failed: {e}", extra={"provider": provider},
        )
        raise UnauthorizedError("Login failed")
    log_in(request, provider, profile)
    return RedirectResponse(settings.login_success_redirect)

"""OAuth Clients — third-party identity providers registered with Authlib.

Invariants:
    - Exactly three providers: twitter (OAuth 1.0a), instagram and facebook (OAuth 2)
    - Credentials come from Settings; nothing hardcoded
    - fetch_profile returns {"id", "name"} regardless of provider field names

Design Decisions:
    - Authlib's Starlette integration: stores OAuth state in request.session,
      which SessionMiddleware already provides for the login identity
"""

import logging

from authlib.integrations.starlette_client import OAuth

from directory_api.config import Settings

logger = logging.getLogger(__name__)

# provider -> (profile endpoint, id field, display name field)
_PROFILE_ENDPOINTS: dict[str, tuple[str, str, str]] = {
    "twitter": ("account/verify_credentials.json", "id_str", "name"),
    "instagram": ("me?fields=id,username", "id", "username"),
    "facebook": ("me?fields=id,name", "id", "name"),
}

SUPPORTED_PROVIDERS: tuple[str, ...] = tuple(_PROFILE_ENDPOINTS)


def build_oauth(settings: Settings) -> OAuth:
    """Create the OAuth registry for all login providers."""
    oauth = OAuth()
    oauth.register(
        name="twitter",
        client_id=settings.twitter_client_id,
        client_secret=settings.twitter_client_secret,
        request_token_url="https://api.twitter.com/oauth/request_token",
        access_token_url="https://api.twitter.com/oauth/access_token",
        authorize_url="https://api.twitter.com/oauth/authenticate",
        api_base_url="https://api.twitter.com/1.1/",
    )
    oauth.register(
        name="instagram",
        client_id=settings.instagram_client_id,
        client_secret=settings.instagram_client_secret,
        authorize_url="https://api.instagram.com/oauth/authorize",
        access_token_url="https://api.instagram.com/oauth/access_token",
        api_base_url="https://graph.instagram.com/",
        client_kwargs={
            "scope": "user_profile",
            "token_endpoint_auth_method": "client_secret_post",
        },
    )
    oauth.register(
        name="facebook",
        client_id=settings.facebook_client_id,
        client_secret=settings.facebook_client_secret,
        authorize_url="https://www.facebook.com/dialog/oauth",
        access_token_url="https://graph.facebook.com/oauth/access_token",
        api_base_url="https://graph.facebook.com/",
        client_kwargs={"scope": "email"},
    )
    return oauth


async def fetch_profile(client, provider: str, token: dict) -> dict:
    """Fetch the logged-in user's id and display name from the provider."""
    endpoint, id_field, name_field = _PROFILE_ENDPOINTS[provider]
    resp = await client.get(endpoint, token=token)
    resp.raise_for_status()
    data = resp.json()
    return {"id": data[id_field], "name": data.get(name_field)}

"""Account Permissions — who is logged in and which enterprises they may manage.

Invariants:
    - Identity lives in the signed session under "user" as {provider, id, name}
    - An identity key is "<provider>:<id>"; admin/enterprise grants are keyed by it
    - get_account_permissions raises UnauthorizedError for anonymous requests

Design Decisions:
    - Grants come from configuration (allow-list), checked per request
    - Checker takes the request, mirroring the OAuth library's session-on-request model
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from directory_api.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


class RequestWithSession(Protocol):
    session: dict


def identity_key(user: Mapping) -> str:
    return f"{user.get('provider')}:{user.get('id')}"


class SessionAccessChecker:
    """Reads the session identity and resolves its configured grants."""

    def __init__(
        self,
        directory_admins: Sequence[str],
        enterprise_admins: Mapping[str, Sequence[str]],
    ):
        self._directory_admins = set(directory_admins)
        self._enterprise_admins = enterprise_admins

    def current_user(self, request: RequestWithSession) -> dict | None:
        user = request.session.get(SESSION_USER_KEY)
        return user if isinstance(user, dict) and user.get("id") else None

    def is_authenticated(self, request: RequestWithSession) -> bool:
        return self.current_user(request) is not None

    def is_directory_admin(self, request: RequestWithSession) -> bool:
        user = self.current_user(request)
        return bool(user) and identity_key(user) in self._directory_admins

    def authenticated_enterprises(self, request: RequestWithSession) -> list[str]:
        user = self.current_user(request)
        if not user:
            return []
        return list(self._enterprise_admins.get(identity_key(user), []))


def get_account_permissions(
    checker: SessionAccessChecker, request: RequestWithSession,
) -> dict:
    """Permission summary for the logged-in caller."""
    if not checker.is_authenticated(request):
        raise UnauthorizedError("Not logged in")

    if checker.is_directory_admin(request):
        return {"directoryAdmin": True}

    return {"authenticatedEnterprises": checker.authenticated_enterprises(request)}


def log_in(request: RequestWithSession, provider: str, profile: Mapping) -> dict:
    """Store the provider identity in the session."""
    user = {
        "provider": provider,
        "id": str(profile["id"]),
        "name": profile.get("name"),
    }
    request.session[SESSION_USER_KEY] = user
    logger.info(
        f"User logged in via {provider}",
        extra={"provider": provider},
    )
    return user


def log_out(request: RequestWithSession) -> None:
    request.session.pop(SESSION_USER_KEY, None)

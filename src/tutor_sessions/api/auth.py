"""Bearer token authentication dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from tutor_sessions.domain.errors import UnauthenticatedError
from tutor_sessions.domain.identity import AuthenticatedUser  # noqa: TC001

if TYPE_CHECKING:
    from tutor_sessions.containers import AppContainer

_BEARER_PREFIX = "Bearer "


def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthenticatedUser:
    """Resolve the caller from the Authorization header."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise UnauthenticatedError("Unauthorized")
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token:
        raise UnauthenticatedError("Unauthorized")
    container: AppContainer = request.app.state.container
    return container.identity_verifier.verify(token)

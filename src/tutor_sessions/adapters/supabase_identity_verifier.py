"""Supabase Auth identity verifier."""

import logging
from dataclasses import dataclass

from supabase import Client

from tutor_sessions.domain.errors import UnauthenticatedError
from tutor_sessions.domain.identity import AuthenticatedUser
from tutor_sessions.services.identity import IdentityVerifier

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityVerifier(IdentityVerifier):
    """Verifies access tokens against Supabase Auth."""

    client: Client

    def verify(self, token: str) -> AuthenticatedUser:
        """Return the user owning the access token."""
        try:
            response = self.client.auth.get_user(token)
        except Exception as exc:
            logger.warning("Token verification failed: %s", type(exc).__name__)
            raise UnauthenticatedError("Invalid token") from exc
        if response is None or response.user is None:
            raise UnauthenticatedError("Invalid token")
        return AuthenticatedUser(uid=response.user.id, email=response.user.email)

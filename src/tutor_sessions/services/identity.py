"""Caller identity verification."""

from typing import Protocol

from tutor_sessions.domain.identity import AuthenticatedUser


class IdentityVerifier(Protocol):
    """Resolves a bearer credential to a caller identity."""

    def verify(self, token: str) -> AuthenticatedUser:
        """Return the caller for a token or raise UnauthenticatedError."""

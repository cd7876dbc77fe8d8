"""Domain models for authenticated callers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity resolved from a bearer token."""

    uid: str
    email: str | None

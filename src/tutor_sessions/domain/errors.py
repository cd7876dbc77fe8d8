"""Typed errors raised by the session and payment services.

Each error carries a stable code and the HTTP status the API maps it to.
Messages are safe to return to callers; internal detail stays in the logs.
"""


class TutoringError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "INTERNAL"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, str]:
        """Return the JSON error body."""
        return {"message": self.message, "code": self.code}


class InvalidInputError(TutoringError):
    """Request input is missing or malformed."""

    code = "INVALID_INPUT"
    http_status = 400


class UnauthenticatedError(TutoringError):
    """Caller credential is missing or rejected."""

    code = "UNAUTHENTICATED"
    http_status = 401


class ForbiddenError(TutoringError):
    """Caller is not allowed to act on the resource."""

    code = "FORBIDDEN"
    http_status = 403


class NotFoundError(TutoringError):
    """Requested resource does not exist."""

    code = "NOT_FOUND"
    http_status = 404


class InvalidStateError(TutoringError):
    """Session is in the wrong phase for the requested action."""

    code = "INVALID_STATE"
    http_status = 400


class CapacityError(InvalidStateError):
    """Session has no room for another ready student."""

    code = "CAPACITY"


class ConflictError(InvalidStateError):
    """Student is already registered as ready."""

    code = "CONFLICT"


class InternalError(TutoringError):
    """Unexpected collaborator failure."""

    code = "INTERNAL"
    http_status = 500

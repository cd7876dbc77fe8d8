"""FastAPI application factory."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, FastAPI, Request, Response

from tutor_sessions.api.admin import router as admin_router
from tutor_sessions.api.auth import require_user
from tutor_sessions.api.error_handlers import register_error_handlers
from tutor_sessions.api.models import (
    EndSessionResponse,
    MeResponse,
    MessageResponse,
    ReadyResponse,
    SessionActionRequest,
)
from tutor_sessions.app_logging import configure_logging
from tutor_sessions.containers import AppContainer
from tutor_sessions.domain.identity import AuthenticatedUser


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    register_error_handlers(app)
    app.include_router(admin_router)

    @app.middleware("http")
    async def log_request(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("Incoming: %s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/me")
    def me(user: AuthenticatedUser = Depends(require_user)) -> MeResponse:
        """Return the authenticated caller."""
        return MeResponse(uid=user.uid, email=user.email)

    @app.post("/sessions/ready")
    def mark_ready(
        body: SessionActionRequest,
        request: Request,
        user: AuthenticatedUser = Depends(require_user),
    ) -> ReadyResponse:
        """Register the calling student as ready for a session."""
        state_container: AppContainer = request.app.state.container
        total = state_container.session_service.ready(body.session_id, user.uid)
        return ReadyResponse(
            message="Student marked as ready", total_ready_students=total
        )

    @app.post("/sessions/start")
    def start_session(
        body: SessionActionRequest,
        request: Request,
        user: AuthenticatedUser = Depends(require_user),
    ) -> MessageResponse:
        """Start a session owned by the calling tutor."""
        state_container: AppContainer = request.app.state.container
        state_container.session_service.start(body.session_id, user.uid)
        return MessageResponse(message="Session started successfully")

    @app.post("/sessions/end", response_model_exclude_none=True)
    def end_session(
        body: SessionActionRequest,
        request: Request,
        user: AuthenticatedUser = Depends(require_user),
    ) -> EndSessionResponse:
        """End a session owned by the calling tutor and settle payment."""
        state_container: AppContainer = request.app.state.container
        result = state_container.session_service.end(body.session_id, user.uid)
        return EndSessionResponse(
            message=_end_message(result.paid, state_container),
            duration_minutes=result.duration_minutes,
            paid=result.paid,
            amount=result.amount,
        )

    return app


def _end_message(paid: bool, state_container: AppContainer) -> str:
    """Build the user-facing message for an ended session."""
    if paid:
        return "Session completed and payment issued"
    required = state_container.settings.required_duration_minutes
    return (
        f"Session ended, but duration is less than {required} minutes. "
        "No payment issued."
    )

"""Exception handlers mapping service errors to JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tutor_sessions.domain.errors import InternalError, TutoringError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain, validation and catch-all handlers."""

    @app.exception_handler(TutoringError)
    async def tutoring_error_handler(
        request: Request, exc: TutoringError
    ) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error(
                "Request failed: %s",
                exc.message,
                extra={"error_code": exc.code, "path": request.url.path},
            )
        else:
            logger.info(
                "Request rejected: %s",
                exc.message,
                extra={"error_code": exc.code, "path": request.url.path},
            )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Invalid request body on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body", "code": "INVALID_INPUT"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error", "code": "INTERNAL"},
        )

"""Exception handlers mapping game errors to JSON responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

if TYPE_CHECKING:
    from litestar import Request
    from litestar.exceptions import HTTPException

    from drawguess.game.exceptions import GameError

logger = structlog.get_logger(__name__)


@dataclass
class ErrorResponse:
    """Structured error response format."""

    message: str = ""
    code: str = "internal_error"
    status: str = "error"
    correlation_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {
            "status": self.status,
            "message": self.message,
            "code": self.code,
        }
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        return result


def get_correlation_id(request: Request) -> str | None:
    """Correlation id bound by the logging middleware, or the client's header."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def _json_error(request: Request, status_code: int, code: str, message: str) -> Response[dict[str, Any]]:
    error_response = ErrorResponse(message=message, code=code, correlation_id=get_correlation_id(request))
    return Response(
        content=error_response.to_dict(),
        status_code=status_code,
        media_type="application/json",
    )


def game_error_handler(request: Request, exc: GameError) -> Response[dict[str, Any]]:
    """Handle GameError exceptions.

    RoomNotFoundError maps to 404, every other game error to 400.
    """
    from drawguess.game.exceptions import RoomNotFoundError

    status_code = HTTP_404_NOT_FOUND if isinstance(exc, RoomNotFoundError) else HTTP_400_BAD_REQUEST
    logger.warning(
        "Game error",
        code=exc.code,
        error=exc.message,
        path=request.url.path,
        status_code=status_code,
    )
    return _json_error(request, status_code, exc.code, exc.message)


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Handle Litestar HTTP exceptions with the same error body."""
    code = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        422: "validation_error",
    }.get(exc.status_code, "error" if exc.status_code < 500 else "internal_error")
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    log_method = logger.warning if exc.status_code < 500 else logger.error
    log_method("HTTP exception", path=request.url.path, status_code=exc.status_code, error_code=code)
    return _json_error(request, exc.status_code, code, message)


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle unexpected exceptions with a generic error response.

    Logs the full exception but returns a safe message to the client.
    """
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return _json_error(
        request,
        HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred. Please try again later.",
    )


def get_exception_handlers() -> dict:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions.
    """
    from litestar.exceptions import HTTPException

    from drawguess.game.exceptions import GameError

    return {
        HTTPException: http_exception_handler,
        GameError: game_error_handler,
        Exception: generic_exception_handler,
    }

"""Map exceptions to JSON error responses at the route boundary."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from checkout_bridge.models import BridgeError

logger = structlog.get_logger(__name__)


async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    """Categorized failures: their own status, ``{"error", "details"?}``."""
    logger.warning(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=exc.message,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Uncategorized failures: 500 with the message only."""
    logger.error(
        "request_error_unhandled",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": str(exc)})


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Answer uncategorized failures from inside the middleware stack.

    Installed innermost so CORS and security headers still wrap the 500.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BridgeError, bridge_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

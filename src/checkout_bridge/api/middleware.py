"""Boundary middleware: origin allow-list, body size limit, security headers."""

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from checkout_bridge.api.errors import UnhandledErrorMiddleware
from checkout_bridge.config import Settings

logger = structlog.get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def origin_allowed(origin: str | None, allow_list: list[str]) -> bool:
    """Requests without an Origin (server-to-server) are always allowed."""
    if not origin:
        return True
    return "*" in allow_list or origin in allow_list


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject browser requests from origins outside the allow-list."""

    def __init__(self, app, allow_list: list[str]):
        super().__init__(app)
        self.allow_list = allow_list

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not origin_allowed(origin, self.allow_list):
            logger.warning("cors_origin_blocked", origin=origin)
            return JSONResponse(
                status_code=403,
                content={"error": "CORS not allowed for this origin."},
            )
        return await call_next(request)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds the limit."""

    def __init__(self, app, max_body_bytes: int):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                logger.warning(
                    "request_body_too_large",
                    path=request.url.path,
                    content_length=int(content_length),
                )
                return JSONResponse(
                    status_code=413,
                    content={"error": "Request body too large"},
                )
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add conservative security headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Register boundary middleware; the last added runs first."""
    allow_list = settings.origin_allow_list

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(OriginGuardMiddleware, allow_list=allow_list)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_list,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

"""
HTTP middleware stack: CORS, security headers and request correlation.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shared.config.settings import settings
from shared.infrastructure.correlation import REQUEST_ID_HEADER, CorrelationIdMiddleware

# The POS client dev server
DEV_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def cors_origins() -> list[str]:
    """``ALLOWED_ORIGINS`` (comma separated), or the dev client origins."""
    configured = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
    return configured or list(DEV_ORIGINS)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """API responses are never framed, sniffed or cached."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def register_middlewares(app: FastAPI) -> None:
    # Starlette runs the last added middleware first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(CorrelationIdMiddleware)

"""
HTTP middlewares: security headers, content-type checks and correlation ids.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Content-Security-Policy": "; ".join([
        "default-src 'self'",
        "script-src 'self'",
        "style-src 'self' 'unsafe-inline'",
        # QR codes and restaurant logos
        "img-src 'self' data: https:",
        "connect-src 'self'",
        "frame-ancestors 'none'",
        "base-uri 'self'",
        "form-action 'self'",
    ]),
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if "server" in response.headers:
            del response.headers["server"]
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Reject bodies that are neither JSON nor form-encoded with 415.

    Requests without a Content-Type (bodiless PATCH toggles) pass through.
    """

    METHODS_WITH_BODY = frozenset({"POST", "PUT", "PATCH"})
    ACCEPTED = ("application/json", "application/x-www-form-urlencoded")
    EXEMPT_PREFIXES = ("/api/health",)

    async def dispatch(self, request: Request, call_next):
        content_type = request.headers.get("content-type", "")
        if (
            request.method in self.METHODS_WITH_BODY
            and content_type
            and not content_type.startswith(self.ACCEPTED)
            and not request.url.path.startswith(self.EXEMPT_PREFIXES)
        ):
            return JSONResponse(
                status_code=415,
                content={"detail": "Unsupported Media Type. Use application/json"},
            )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    """Last registered runs first: the correlation id is set before anything logs."""
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

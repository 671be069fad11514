"""
CORS for the back-office front end.

Credentials are allowed because the browser identity travels in the client
cookie; origins therefore have to be listed explicitly (no "*").
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings


# Local front-end dev servers, used when ALLOWED_ORIGINS is empty
DEV_ORIGINS = [
    f"http://{host}:{port}"
    for host in ("localhost", "127.0.0.1")
    for port in (3000, 5173)
]

ALLOWED_HEADERS = ["Content-Type", "X-Request-ID", "X-Requested-With", "Accept", "Accept-Language"]


def get_cors_origins() -> list[str]:
    configured = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    return configured or DEV_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
        # No preflight caching while developing
        max_age=0 if settings.environment == "development" else 600,
    )

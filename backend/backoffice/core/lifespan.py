"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backoffice.gateway.client import create_http_client
from shared.config.settings import settings
from shared.config.logging import setup_logging, backoffice_logger as logger
from shared.infrastructure.kv_store import create_kv_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.

    The key-value store and the pooled HTTP client live on app.state.
    Anything already set there (tests) is kept and not closed.
    """
    # Initialize logging
    setup_logging()

    # Validate configuration before startup
    config_errors = settings.validate_production_settings()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error", error=error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(config_errors)}. "
                "Server will not start with an unsafe configuration."
            )
        else:
            logger.warning("Running with development defaults")

    logger.info(
        "Starting back-office",
        port=settings.port,
        env=settings.environment,
        backend=settings.api_base_url,
    )

    owned = []
    if getattr(app.state, "kv_store", None) is None:
        app.state.kv_store = create_kv_store(settings.kv_backend)
        owned.append("kv_store")
    if getattr(app.state, "http_client", None) is None:
        app.state.http_client = create_http_client()
        owned.append("http_client")

    yield

    # Shutdown
    logger.info("Shutting down back-office")

    if "http_client" in owned:
        await app.state.http_client.aclose()
        app.state.http_client = None
    if "kv_store" in owned:
        await app.state.kv_store.close()
        app.state.kv_store = None
        logger.info("Key-value store closed")

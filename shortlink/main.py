"""URL Shortener Service - Main FastAPI Application.

A small URL shortening service:
- Shorten a URL (POST /shorten)
- Redirect a slug to its original URL (GET /{slug})
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.database import engine_from_settings
from .core.exceptions import StartupError, StoreError
from .api.routes import health_router, urls_router
from .services.shortener import URLShortenerService
from .stores import MemoryURLStore, SQLURLStore, URLStore
from .utils.shortener import SlugAssigner, build_assigner

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_store(settings: Settings) -> URLStore:
    """Create and bootstrap the store selected by settings.

    Raises:
        StartupError: If the database never became reachable.
    """
    if settings.store_backend == "memory":
        logger.info("Using in-memory URL store")
        return MemoryURLStore()
    engine = engine_from_settings(settings)
    store = SQLURLStore(engine, slug_length=settings.slug_length)
    store.init_schema()
    return store


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[URLStore] = None,
    assigner: Optional[SlugAssigner] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. Defaults to the environment.
        store: URL store to use. Built from settings at startup if omitted.
        assigner: Slug assigner to use. Built from settings if omitted.

    Returns:
        FastAPI application.
    """
    settings = settings or get_settings()
    if assigner is None:
        assigner = build_assigner(settings.slug_strategy, settings.slug_length)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown events."""
        # Startup
        logger.info(f"Starting {settings.app_title}...")
        try:
            app_store = store if store is not None else build_store(settings)
        except StartupError as e:
            logger.critical(f"Error opening database: {e}")
            raise
        app.state.shortener = URLShortenerService(
            store=app_store,
            assigner=assigner,
            base_url=settings.base_url,
            idempotent=settings.idempotent,
            max_attempts=settings.max_slug_attempts,
        )
        logger.info(
            f"Serving short URLs under {settings.base_url} "
            f"(strategy={settings.slug_strategy}, idempotent={settings.idempotent})"
        )
        yield
        # Shutdown
        logger.info("Shutting down URL Shortener Service...")
        app_store.close()

    app = FastAPI(
        title=settings.app_title,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as bad requests."""
        logger.warning(f"Invalid request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        """Store failures not handled by a route."""
        logger.error(f"Store error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_code": "500"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """General exception handler."""
        logger.error(f"Unhandled Exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_code": "500"},
        )

    # Include routers, health first so /health is not taken for a slug
    app.include_router(health_router)
    app.include_router(urls_router)

    return app


configure_logging(get_settings().log_level)

# Create FastAPI application
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "shortlink.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

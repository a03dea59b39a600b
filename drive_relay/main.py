"""
FastAPI application entry point.

This module creates and configures the FastAPI application. Settings are
read once and passed into create_app(); tests call create_app() with
their own Settings instead of patching the environment.

For local development:
    uvicorn drive_relay.main:app --reload

For production:
    python -m drive_relay.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_exception_handlers
from .api.middleware import UploadSizeLimitMiddleware
from .api.routes import frontend, health, upload
from .config.settings import Settings, get_settings

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=get_settings().log_level.upper(),
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective configuration on startup."""
    settings: Settings = app.state.settings

    logger.info(
        "Drive relay starting",
        extra={
            "version": settings.api_version,
            "port": settings.port,
            "max_file_mb": settings.max_file_mb,
            "mock_mode": {"drive": settings.drive_mock_mode},
        }
    )

    # Missing configuration is not fatal: uploads fail with a 500 until fixed.
    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )

    yield

    logger.info("Drive relay shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Configuration for this app instance. Defaults to the
            process-wide settings loaded from the environment.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Relay browser uploads to a Google Drive folder.

        1. **Upload**: `POST /api/upload` with a multipart form
           - `file`: the file to store (required)
           - `meta`: JSON metadata, saved as the Drive file description (optional)
        2. **Result**: `{"fileId": "...", "webViewLink": "..."}`
        """,
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Must stay inside CORSMiddleware: 413 responses carry CORS headers
    app.add_middleware(
        UploadSizeLimitMiddleware,
        max_file_bytes=settings.max_file_bytes,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        upload.router,
        prefix="/api",
        tags=["Upload"],
    )

    # Catch-all, must come last
    app.include_router(frontend.router)

    return app


# Create the application instance
# This is what uvicorn imports
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "drive_relay.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

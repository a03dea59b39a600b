"""
FastAPI dependency injection.

Dependencies provide configuration, the Drive credential provider and the
upload service to route handlers. Settings come from app.state, where
create_app() put them, so tests can run an app with their own Settings
and override any dependency through app.dependency_overrides.

The Drive client itself is NOT a dependency: FastAPI resolves dependencies
before the handler body runs, and a credentials failure must not mask the
400 for a request without a file. Routes receive a provider instead and
call it once the request has been validated.
"""

import logging
from functools import partial
from typing import Annotated, Optional

from fastapi import Depends, Request

from ..config.settings import Settings
from ..core.upload import DriveClient, DriveClientProvider, UploadService
from ..infrastructure.drive.client import create_drive_client

logger = logging.getLogger(__name__)

# Global mock instance (shared across requests so uploads stay visible)
_mock_drive_client: Optional[DriveClient] = None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_drive_client_provider(settings: SettingsDep) -> DriveClientProvider:
    """
    Provide a callable that builds an authenticated Drive client.

    In mock mode every request gets the same in-memory client so that
    uploaded files persist for the lifetime of the process.
    """
    global _mock_drive_client

    if settings.drive_mock_mode:
        if _mock_drive_client is None:
            _mock_drive_client = create_drive_client(mock_mode=True)
            logger.info("Created shared mock Drive client")
        client = _mock_drive_client
        return lambda: client

    return partial(
        create_drive_client,
        credentials_json=settings.google_service_account_json,
    )


DriveClientProviderDep = Annotated[DriveClientProvider, Depends(get_drive_client_provider)]


def get_upload_service(
    settings: SettingsDep,
    client_provider: DriveClientProviderDep,
) -> UploadService:
    """
    Provide the UploadService for this request.

    Construction never fails; configuration problems surface when the
    service runs, after the request itself has been validated.
    """
    return UploadService(
        client_provider=client_provider,
        folder_id=settings.drive_folder_id,
    )


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]

"""
Google Drive integration for uploaded files.

Includes mock mode for local development without a service account.
"""

from .client import (
    GoogleDriveClient,
    MockDriveClient,
    create_drive_client,
)

__all__ = ["GoogleDriveClient", "MockDriveClient", "create_drive_client"]

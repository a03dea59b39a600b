"""
Upload flow: credentials, destination folder, one Drive write.

UploadService is the heart of the relay. It receives an already-validated
UploadRequest from the HTTP layer, asks the credential provider for a
Drive client, and creates exactly one file. There are no retries and no
idempotency key, so the same request sent twice creates two files.
"""

import logging
from typing import Any, Callable, Optional, Protocol

from .errors import ConfigurationError, RelayError, RemoteServiceError
from .models import UploadRequest, UploadResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class DriveClient(Protocol):
    """
    Interface for anything that can create a file in a Drive folder.

    The Google implementation and the in-memory mock both live in
    infrastructure.drive; tests provide their own fakes.
    """

    async def create_file(
        self,
        name: str,
        parent_id: str,
        mime_type: str,
        content: bytes,
        description: str,
    ) -> dict[str, Any]:
        """Create the file and return at least 'id' and 'webViewLink'."""
        ...


# Builds an authenticated client. Raises ConfigurationError when the
# credentials are missing or malformed.
DriveClientProvider = Callable[[], DriveClient]


# ---------------------------------------------------------------------------
# Upload Service
# ---------------------------------------------------------------------------

class UploadService:
    """
    Forwards one uploaded file to the configured Drive folder.

    Stateless apart from its configuration, so a single instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        client_provider: DriveClientProvider,
        folder_id: Optional[str],
    ) -> None:
        self._client_provider = client_provider
        self._folder_id = folder_id

    async def upload(self, request: UploadRequest) -> UploadResult:
        """
        Create the file in Drive and return its id and link.

        Raises:
            ConfigurationError: credentials or folder id are not configured.
                No remote call is made.
            RemoteServiceError: the Drive API rejected or failed the call.
        """
        client = self._client_provider()

        if not self._folder_id:
            raise ConfigurationError("DRIVE_FOLDER_ID is not set")

        try:
            data = await client.create_file(
                name=request.filename,
                parent_id=self._folder_id,
                mime_type=request.mime_type,
                content=request.content,
                description=request.description,
            )
        except RelayError:
            raise
        except Exception as e:
            raise RemoteServiceError(str(e)) from e

        result = UploadResult.from_drive_response(data)

        logger.info(
            "Uploaded file to Drive",
            extra={
                "file_id": result.file_id,
                "file_name": request.filename,
                "size_bytes": request.size_bytes,
            }
        )

        return result

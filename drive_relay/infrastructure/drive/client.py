"""
Google Drive client for uploaded files.

Wraps the Drive v3 API behind the DriveClient protocol, with mock mode
for local development. Authentication uses a service account supplied as
a JSON blob in configuration. Only client_email and private_key are
required from it; token_uri falls back to Google's default.

Mock mode stores files in memory, enabling API testing without a Google
project or service account.
"""

import asyncio
import io
import json
import logging
from typing import Any, Optional
from uuid import uuid4

from google.auth import crypt
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from ...core.errors import ConfigurationError, RemoteServiceError
from ...core.upload import DriveClient

logger = logging.getLogger(__name__)

DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive.file"]
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Only these fields come back from files.create.
RESPONSE_FIELDS = "id, webViewLink"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

def load_service_account_info(credentials_json: Optional[str]) -> dict[str, Any]:
    """
    Parse the service account blob.

    Raises ConfigurationError with a message naming the problem; the
    message never echoes the blob itself.
    """
    if not credentials_json:
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_JSON is not set")

    try:
        info = json.loads(credentials_json)
    except ValueError:
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON")

    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_JSON must be a JSON object")

    missing = [key for key in ("client_email", "private_key") if not info.get(key)]
    if missing:
        raise ConfigurationError(
            f"GOOGLE_SERVICE_ACCOUNT_JSON is missing {', '.join(missing)}"
        )

    return info


def build_credentials(info: dict[str, Any]) -> service_account.Credentials:
    """
    Build scoped service account credentials from parsed info.

    Built from the signer directly (not from_service_account_info) so a
    blob with only client_email and private_key is enough.
    """
    try:
        signer = crypt.RSASigner.from_service_account_info(info)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Service account private key is invalid: {e}")

    return service_account.Credentials(
        signer=signer,
        service_account_email=info["client_email"],
        token_uri=info.get("token_uri") or DEFAULT_TOKEN_URI,
        scopes=DRIVE_SCOPES,
        project_id=info.get("project_id"),
    )


# ---------------------------------------------------------------------------
# Google Drive Client
# ---------------------------------------------------------------------------

class GoogleDriveClient:
    """
    Drive v3 client for creating files in a folder.

    googleapiclient is synchronous, so each call runs in a worker thread
    to keep the event loop free for concurrent uploads. The service
    object is built per client; clients are built per request, so no
    httplib2 connection is shared between threads.
    """

    def __init__(
        self,
        credentials: Optional[service_account.Credentials] = None,
        service: Any = None,
    ) -> None:
        if service is None:
            if credentials is None:
                raise ValueError("credentials are required when no service is given")
            service = build(
                "drive",
                "v3",
                credentials=credentials,
                cache_discovery=False,
            )

        self._service = service

        logger.debug("Initialized Google Drive client")

    async def create_file(
        self,
        name: str,
        parent_id: str,
        mime_type: str,
        content: bytes,
        description: str,
    ) -> dict[str, Any]:
        """
        Create a file with the given bytes in the parent folder.

        A simple (non-resumable) media upload: the whole body is already
        in memory and bounded by the configured size limit.
        """
        media = MediaIoBaseUpload(
            io.BytesIO(content),
            mimetype=mime_type,
            resumable=False,
        )
        request = self._service.files().create(
            body={
                "name": name,
                "parents": [parent_id],
                "description": description,
            },
            media_body=media,
            fields=RESPONSE_FIELDS,
        )

        try:
            return await asyncio.to_thread(request.execute)
        except HttpError as e:
            status_code = getattr(e, "status_code", None) or e.resp.status
            reason = getattr(e, "reason", None)
            logger.debug(
                "Drive API rejected upload",
                extra={"status": status_code, "reason": reason}
            )
            raise RemoteServiceError(reason or str(e), status_code=status_code)
        except Exception as e:
            raise RemoteServiceError(str(e))


# ---------------------------------------------------------------------------
# Mock Drive for Local Development
# ---------------------------------------------------------------------------

class MockDriveClient:
    """
    In-memory Drive for local development.

    Files are kept in a dictionary keyed by a generated id and links are
    mock URIs. Not suitable for production, but enough to drive the
    front-end and the API tests end to end.
    """

    def __init__(self) -> None:
        self._files: dict[str, dict[str, Any]] = {}
        logger.info("Initialized mock Drive client (in-memory)")

    async def create_file(
        self,
        name: str,
        parent_id: str,
        mime_type: str,
        content: bytes,
        description: str,
    ) -> dict[str, Any]:
        """Store file in memory."""
        file_id = uuid4().hex
        self._files[file_id] = {
            "name": name,
            "parents": [parent_id],
            "mimeType": mime_type,
            "description": description,
            "content": content,
        }

        logger.debug(
            "Stored file in mock Drive",
            extra={"file_id": file_id, "size_bytes": len(content)}
        )

        return {"id": file_id, "webViewLink": f"mock://drive/{file_id}"}

    def get_file(self, file_id: str) -> dict[str, Any]:
        """Return a stored file record. Raises KeyError if unknown."""
        return self._files[file_id]

    @property
    def file_count(self) -> int:
        return len(self._files)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_drive_client(
    credentials_json: Optional[str] = None,
    mock_mode: bool = False,
) -> DriveClient:
    """
    Create a Drive client based on configuration.

    This is the credential provider: it turns the configured service
    account blob into an authenticated client.

    Args:
        credentials_json: Service account JSON (required if not mock_mode)
        mock_mode: If True, return an in-memory client

    Raises:
        ConfigurationError: the credentials are missing or malformed
    """
    if mock_mode:
        return MockDriveClient()

    info = load_service_account_info(credentials_json)
    credentials = build_credentials(info)

    return GoogleDriveClient(credentials)

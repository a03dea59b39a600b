"""In-memory stand-ins for the Drive API and test configuration."""

from typing import Any, Optional

from drive_relay.config.settings import Settings


class FakeDriveClient:
    """Records every create_file call and answers with a canned response."""

    def __init__(
        self,
        response: Optional[dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create_file(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        # Unique per call, derived from the name so results can be matched to requests
        file_id = f"{kwargs['name']}-{len(self.calls)}"
        return {
            "id": file_id,
            "webViewLink": f"https://drive.google.com/file/d/{file_id}/view",
        }


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the developer's .env file."""
    values: dict[str, Any] = {
        "google_service_account_json": None,
        "drive_folder_id": "folder-123",
        "drive_mock_mode": False,
        "max_file_mb": 1,
        "static_dir": "public",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)

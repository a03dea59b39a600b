"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (or a .env file) once at
startup. The resulting Settings object is handed to create_app() and read by
route dependencies from app.state, so nothing reads the environment per
request.

Credentials are deliberately NOT validated here: a missing service account
blob only fails when an upload asks for a Drive client.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Field names map to environment variables case-insensitively,
    e.g. drive_folder_id <- DRIVE_FOLDER_ID.
    """

    # API Configuration
    api_title: str = "Drive Upload Relay"
    api_version: str = "0.1.0"
    port: int = Field(
        default=8080,
        description="Port uvicorn listens on when started via python -m"
    )

    # Google Drive Configuration
    google_service_account_json: Optional[str] = Field(
        default=None,
        description="Service account credentials as a JSON document. Needs client_email and private_key."
    )
    drive_folder_id: Optional[str] = Field(
        default=None,
        description="Drive folder that receives every uploaded file."
    )
    drive_mock_mode: bool = Field(
        default=False,
        description="Use an in-memory Drive instead of Google. Enables local dev without credentials."
    )

    # Upload Behavior
    max_file_mb: int = Field(
        default=25,
        ge=1,
        description="Maximum size of the uploaded file in MiB."
    )

    # Front-end
    static_dir: str = Field(
        default="public",
        description="Directory holding the prebuilt front-end (index.html and assets)."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def max_file_bytes(self) -> int:
        """Upload limit in bytes. MAX_FILE_MB counts MiB."""
        return self.max_file_mb * 1024 * 1024

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def validate_required_fields(self) -> list[str]:
        """
        Return the names of required settings that are missing.

        Used for startup logging and the readiness check only; uploads
        perform their own checks and fail with a configuration error.
        """
        missing = []

        if not self.drive_mock_mode and not self.google_service_account_json:
            missing.append("GOOGLE_SERVICE_ACCOUNT_JSON")

        if not self.drive_folder_id:
            missing.append("DRIVE_FOLDER_ID")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process. For tests, build a Settings
    directly and pass it to create_app(), or call get_settings.cache_clear().
    """
    return Settings()

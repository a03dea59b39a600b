"""Unit tests for environment-derived settings."""

import pytest
from pydantic import ValidationError

from drive_relay.config.settings import Settings

ENV_VARS = [
    "GOOGLE_SERVICE_ACCOUNT_JSON",
    "DRIVE_FOLDER_ID",
    "DRIVE_MOCK_MODE",
    "MAX_FILE_MB",
    "PORT",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.max_file_mb == 25
        assert settings.max_file_bytes == 25 * 1024 * 1024
        assert settings.drive_folder_id is None
        assert settings.google_service_account_json is None
        assert settings.cors_origins_list == ["*"]

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DRIVE_FOLDER_ID", "folder-abc")
        monkeypatch.setenv("MAX_FILE_MB", "10")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT_JSON", '{"client_email": "a@b"}')

        settings = Settings(_env_file=None)

        assert settings.drive_folder_id == "folder-abc"
        assert settings.max_file_bytes == 10 * 1024 * 1024
        assert settings.port == 9000
        assert settings.google_service_account_json == '{"client_email": "a@b"}'

    def test_rejects_non_integer_limit(self, monkeypatch):
        monkeypatch.setenv("MAX_FILE_MB", "lots")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="https://a.example, https://b.example,")
        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_validate_required_fields(self):
        assert Settings(_env_file=None).validate_required_fields() == [
            "GOOGLE_SERVICE_ACCOUNT_JSON",
            "DRIVE_FOLDER_ID",
        ]

    def test_mock_mode_does_not_need_credentials(self):
        settings = Settings(_env_file=None, drive_mock_mode=True, drive_folder_id="f")
        assert settings.validate_required_fields() == []

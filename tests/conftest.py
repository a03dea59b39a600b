"""
Shared fixtures.

The Drive API is replaced by FakeDriveClient, injected through the
provider dependency, so no test talks to Google.
"""

import pytest
from fastapi.testclient import TestClient

from drive_relay.api.dependencies import get_drive_client_provider
from drive_relay.config.settings import Settings
from drive_relay.main import create_app

from tests.fakes import FakeDriveClient, make_settings


@pytest.fixture
def fake_drive() -> FakeDriveClient:
    return FakeDriveClient()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings, fake_drive):
    app = create_app(settings)
    app.dependency_overrides[get_drive_client_provider] = lambda: (lambda: fake_drive)
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)

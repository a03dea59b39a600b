"""API tests for the health endpoints."""

from fastapi.testclient import TestClient

from drive_relay import __version__
from drive_relay.main import create_app

from tests.fakes import make_settings


class TestHealth:

    def test_liveness(self):
        client = TestClient(create_app(make_settings()))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "details": {"mock_mode": {"drive": False}},
        }

    def test_ready_when_configured(self):
        client = TestClient(create_app(make_settings(
            google_service_account_json='{"client_email": "a@b", "private_key": "k"}',
        )))

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_without_configuration(self):
        client = TestClient(create_app(make_settings(drive_folder_id=None)))

        response = client.get("/health/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "not_ready"
        errors = {check["name"]: check["error"] for check in body["checks"]}
        assert errors["credentials"] == "GOOGLE_SERVICE_ACCOUNT_JSON is not set"
        assert errors["folder"] == "DRIVE_FOLDER_ID is not set"

    def test_mock_mode_is_ready_without_credentials(self):
        client = TestClient(create_app(make_settings(drive_mock_mode=True)))

        assert client.get("/health/ready").status_code == 200

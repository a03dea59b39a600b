"""API tests for front-end serving and unmatched /api paths."""

import pytest
from fastapi.testclient import TestClient

from drive_relay.api.routes.frontend import resolve_static_file
from drive_relay.main import create_app

from tests.fakes import make_settings


@pytest.fixture
def static_dir(tmp_path):
    public = tmp_path / "public"
    (public / "assets").mkdir(parents=True)
    (public / "index.html").write_text("<html>relay</html>")
    (public / "assets" / "app.js").write_text("console.log('relay');")
    (tmp_path / "secret.txt").write_text("do not serve")
    return public


@pytest.fixture
def frontend_client(static_dir) -> TestClient:
    return TestClient(create_app(make_settings(static_dir=str(static_dir))))


class TestFrontend:

    def test_root_serves_index(self, frontend_client):
        response = frontend_client.get("/")

        assert response.status_code == 200
        assert response.text == "<html>relay</html>"

    def test_existing_asset_is_served(self, frontend_client):
        response = frontend_client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.text == "console.log('relay');"

    def test_unknown_path_falls_back_to_index(self, frontend_client):
        response = frontend_client.get("/uploads/recent")

        assert response.status_code == 200
        assert response.text == "<html>relay</html>"

    @pytest.mark.parametrize("path", ["/api", "/api/unknown", "/api/upload"])
    def test_api_paths_never_fall_back(self, frontend_client, path):
        response = frontend_client.get(path)

        assert response.status_code == 404
        assert response.content == b""

    def test_missing_frontend_is_404(self, tmp_path):
        client = TestClient(create_app(make_settings(static_dir=str(tmp_path / "missing"))))

        assert client.get("/").status_code == 404


class TestResolveStaticFile:

    def test_traversal_is_rejected(self, static_dir):
        assert resolve_static_file(static_dir, "../secret.txt") is None

    def test_directory_is_not_a_file(self, static_dir):
        assert resolve_static_file(static_dir, "assets") is None

    def test_nested_file(self, static_dir):
        assert resolve_static_file(static_dir, "assets/app.js") == (static_dir / "assets" / "app.js").resolve()

"""
Tests for the JSON API — app factory and command routes.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from flask.testing import FlaskClient

from distrocmd.ui.web.server import create_app


@pytest.fixture()
def client(catalog) -> FlaskClient:
    """Test client over the in-memory catalog."""
    app = create_app(reader=catalog)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture()
def file_client(catalog_file: Path) -> FlaskClient:
    """Test client over a catalog.yml on disk."""
    app = create_app(catalog_path=catalog_file)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppFactory:
    def test_needs_a_catalog(self):
        with pytest.raises(ValueError):
            create_app()

    def test_config(self, catalog_file: Path):
        app = create_app(catalog_path=catalog_file)
        assert app.config["CATALOG_PATH"] == str(catalog_file)

    def test_unknown_route_is_json(self, client: FlaskClient):
        resp = client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}


class TestGenerate:
    def test_ok(self, client: FlaskClient):
        resp = client.post("/api/generate", json={
            "distroSlug": "ubuntu", "appIds": ["firefox", "steam", "obscure-tool"],
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["commands"] == [
            "sudo apt install -y firefox",
            "flatpak install -y flathub com.valvesoftware.Steam",
        ]
        assert data["warnings"] == ["Obscure Tool: No package available for Ubuntu"]
        assert data["manualSteps"][0]["appId"] == "obscure-tool"

    def test_unknown_distro_404(self, client: FlaskClient):
        resp = client.post("/api/generate", json={"distroSlug": "atari", "appIds": ["firefox"]})
        assert resp.status_code == 404
        assert "atari" in resp.get_json()["error"]

    @pytest.mark.parametrize("body", [
        {"distroSlug": "ubuntu", "appIds": []},
        {"distroSlug": "ubuntu"},
        {"distroSlug": "ubuntu", "appIds": ["firefox"], "sourcePreference": "homebrew"},
        {"distroSlug": "ubuntu", "appIds": [f"app-{i}" for i in range(101)]},
    ])
    def test_invalid_input_400(self, client: FlaskClient, body):
        resp = client.post("/api/generate", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error"]

    def test_non_json_body_400(self, client: FlaskClient):
        resp = client.post("/api/generate", data="not json", content_type="text/plain")
        assert resp.status_code == 400

    def test_get_not_allowed(self, client: FlaskClient):
        resp = client.get("/api/generate")
        assert resp.status_code == 405


class TestUninstall:
    def test_ok(self, client: FlaskClient):
        resp = client.post("/api/uninstall", json={
            "distroSlug": "ubuntu", "appIds": ["firefox", "obs"],
            "includeSetupCleanup": True, "includeDependencyCleanup": True,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["commands"] == ["sudo apt remove -y firefox obs-studio"]
        assert data["cleanupCommands"] == [
            "sudo add-apt-repository -y --remove ppa:obsproject/obs-studio",
        ]
        assert data["dependencyCleanupCommands"] == ["sudo apt autoremove -y"]

    def test_nixos_ephemeral(self, client: FlaskClient):
        resp = client.post("/api/uninstall", json={
            "distroSlug": "nixos", "appIds": ["firefox"], "installMethod": "nix-shell",
        })
        data = resp.get_json()
        assert resp.status_code == 200
        assert data["commands"] == []
        assert data["breakdown"][0]["source"] == "nix"


class TestDistros:
    def test_list(self, client: FlaskClient):
        resp = client.get("/api/distros")
        assert resp.status_code == 200
        slugs = [d["slug"] for d in resp.get_json()["distros"]]
        assert slugs == ["ubuntu", "fedora", "brokenos", "lonely", "nixos", "windows"]


class TestCatalogFileBackend:
    def test_generate_from_file(self, file_client: FlaskClient):
        resp = file_client.post("/api/generate", json={"distroSlug": "fedora", "appIds": ["firefox"]})
        assert resp.status_code == 200
        assert resp.get_json()["commands"] == ["flatpak install -y flathub org.mozilla.firefox"]

    def test_cached_reader_does_not_grow(self, catalog_file: Path):
        app = create_app(catalog_path=catalog_file)
        client = app.test_client()
        client.post("/api/generate", json={"distroSlug": "fedora", "appIds": ["firefox"]})
        reader = app.extensions["distrocmd"]["catalog_file"].current()
        sizes = {k: len(v) for k, v in vars(reader).items() if isinstance(v, list)}

        for _ in range(3):
            resp = client.post("/api/generate", json={"distroSlug": "ubuntu", "appIds": ["firefox"]})
            assert resp.status_code == 200

        assert app.extensions["distrocmd"]["catalog_file"].current() is reader
        assert {k: len(v) for k, v in vars(reader).items() if isinstance(v, list)} == sizes

    def test_missing_file_500(self, tmp_path: Path):
        path = tmp_path / "catalog.yml"
        path.write_text("sources: []\n")
        app = create_app(catalog_path=path)
        path.unlink()
        resp = app.test_client().get("/api/distros")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Catalog unavailable"}

from __future__ import annotations

from fastapi.testclient import TestClient

from fasten_stitch.app import create_app
from fasten_stitch.config import StitchConfig


def test_health_with_default_key_is_configured(monkeypatch) -> None:
    monkeypatch.delenv("FASTEN_PUBLIC_KEY", raising=False)

    with TestClient(create_app()) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")

        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "fasten-stitch-page"
        assert body["publicKey"] == "configured"
        assert body["timestamp"].endswith("Z")


def test_health_reports_missing_key() -> None:
    with TestClient(create_app(StitchConfig(public_key=""))) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["publicKey"] == "not configured"


def test_root_lists_endpoints() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/")
        assert response.status_code == 200

        body = response.json()
        assert body["service"] == "Fasten Stitch Page"
        assert body["endpoints"] == {"connect": "/fasten/connect", "health": "/health"}
        assert body["publicKey"] == "configured"
        assert "timestamp" in body

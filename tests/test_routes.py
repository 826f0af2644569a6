from __future__ import annotations

from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from fasten_stitch.app import create_app
from fasten_stitch.config import StitchConfig


def test_connect_redirects_to_connect_page() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/connect", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/fasten/connect"


def test_unknown_path_returns_structured_404() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/nonexistent")
        assert response.status_code == 404

        body = response.json()
        assert body["error"] == "Not found"
        assert body["path"] == "/nonexistent"
        assert body["availableEndpoints"] == ["/fasten/connect", "/health", "/"]
        assert body["timestamp"].endswith("Z")


def test_nested_unknown_path_is_echoed_exactly() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/fasten/connect/extra")
        assert response.status_code == 404
        assert response.json()["path"] == "/fasten/connect/extra"


def test_wrong_method_is_treated_as_unmatched() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.post("/health")
        assert response.status_code == 404
        assert response.json()["path"] == "/health"

        response = client.delete("/nonexistent")
        assert response.status_code == 404


def _app_with_failing_route() -> FastAPI:
    app = create_app(StitchConfig())

    async def _explode() -> dict[str, str]:
        raise RuntimeError("db password is hunter2")

    # Ahead of the static mount, which claims every other path.
    app.router.routes.insert(0, APIRoute("/explode", _explode, methods=["GET"]))
    return app


def test_handler_fault_returns_generic_500() -> None:
    with TestClient(_app_with_failing_route()) as client:
        response = client.get("/explode")
        assert response.status_code == 500

        body = response.json()
        assert body["error"] == "Internal server error"
        assert set(body) == {"error", "timestamp"}
        assert "hunter2" not in response.text
        assert "Content-Security-Policy" in response.headers


def test_handler_fault_is_logged(caplog) -> None:
    with TestClient(_app_with_failing_route()) as client:
        client.get("/explode")

    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert errors
    assert errors[0].exc_info is not None
    assert "hunter2" in str(errors[0].exc_info[1])


def test_static_files_are_served_with_inferred_type() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        css = client.get("/css/connect.css")
        assert css.status_code == 200
        assert css.headers["content-type"].startswith("text/css")
        assert "fasten-stitch-element" in css.text

        robots = client.get("/robots.txt")
        assert robots.status_code == 200
        assert robots.headers["content-type"].startswith("text/plain")


def test_static_lookup_cannot_escape_public_dir() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/..%2Fapp.py")
        assert response.status_code == 404
        assert response.json()["error"] == "Not found"


def test_not_found_path_is_echoed_as_sent() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        response = client.get("/foo%20bar?x=1")
        assert response.status_code == 404
        assert response.json()["path"] == "/foo%20bar"

        response = client.get("/..%2Fapp.py")
        assert response.json()["path"] == "/..%2Fapp.py"


def test_get_routes_answer_head() -> None:
    with TestClient(create_app(StitchConfig())) as client:
        for path in ("/health", "/", "/fasten/connect"):
            response = client.head(path)
            assert response.status_code == 200

        response = client.head("/connect", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/fasten/connect"

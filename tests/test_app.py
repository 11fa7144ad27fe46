"""Tests for the web app compile endpoint."""

import pytest
from fastapi.testclient import TestClient

import main
from dom_keyframes.engine import FrameTweenEngine

client = TestClient(main.app)

DOCUMENT = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">'
    '<g><rect width="10" height="10"/></g></svg>'
)
PATH = "/*[local-name()='svg'][1]/*[local-name()='g'][1]/*[local-name()='rect'][1]"


def _request(path: str = PATH, document: str = DOCUMENT) -> dict:
    return {
        "timeline": {
            "targetKind": "dom",
            "path": path,
            "frames": [
                {"frame": 0, "params": {"x": 0, "opacity": 1}},
                {"frame": 50, "params": {"x": 80, "opacity": 0.5}},
            ],
        },
        "document": document,
    }


def test_compile_returns_segments_by_default():
    response = client.post("/api/compile", json=_request())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    payload = response.json()
    assert payload["container"]["duration"] == 50
    assert len(payload["segments"]) == 4


def test_compile_exports_svg():
    response = client.post("/api/compile?format=svg&fps=10", json=_request())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert b"animateTransform" in response.content
    assert b'dur="5000ms"' in response.content


def test_compile_defaults_to_engine_fps():
    """50 frames at the default 40 fps last 1.25 seconds."""
    response = client.post("/api/compile?format=svg", json=_request())

    assert response.status_code == 200
    assert b'dur="1250ms"' in response.content


def test_compile_exports_svg_once():
    response = client.post("/api/compile?format=svg&loop=false", json=_request())

    assert response.status_code == 200
    assert b'fill="freeze"' in response.content


def test_compile_exports_gif():
    response = client.post("/api/compile?format=gif", json=_request())

    assert response.status_code == 200
    assert response.content.startswith(b"GIF89")


@pytest.mark.parametrize(
    "query, body, detail",
    [
        ("format=png", _request(), "Invalid format"),
        ("", _request(document="<svg"), "Invalid document"),
        ("", _request(path="/*[local-name()='svg'][2]"), "not found in document"),
    ],
)
def test_compile_rejects_bad_requests(query, body, detail):
    response = client.post(f"/api/compile?{query}", json=body)

    assert response.status_code == 400
    assert detail in response.json()["detail"]


def test_compile_rejects_invalid_timeline():
    body = _request()
    body["timeline"]["frames"] = [{"frame": -1, "params": {"x": 1}}]

    response = client.post("/api/compile", json=body)

    assert response.status_code == 400


def test_unprovisioned_engine_is_service_unavailable(monkeypatch):
    monkeypatch.setenv("DOM_KEYFRAMES_AUTO_PROVISION", "false")
    monkeypatch.setattr(
        "dom_keyframes.export_pipeline.create_engine",
        lambda config: FrameTweenEngine(config, available=False),
    )

    response = client.post("/api/compile", json=_request())

    assert response.status_code == 503
    assert "auto provisioning is disabled" in response.json()["detail"]

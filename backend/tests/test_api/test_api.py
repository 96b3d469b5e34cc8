"""Tests for API endpoints."""

from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from qrstudio.dependencies import get_generator
from qrstudio.engine.generator import QrGenerator
from qrstudio.main import app
from tests.conftest import fake_encoder, fake_fetcher


client = TestClient(app)


def _fake_generator() -> QrGenerator:
    return QrGenerator(matrix_encoder=fake_encoder, fetcher=fake_fetcher)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 6


def test_generate():
    response = client.post("/api/qr/generate", json={
        "type": "url",
        "data": {"url": "example.com"},
        "design": {"fg_color": "#336699", "modules_shape": "dot"},
        "size": 300,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["svg"].startswith("<?xml")
    assert 'fill="#336699"' in data["svg"]
    assert data["dataUri"].startswith("data:image/svg+xml;base64,")
    assert data["meta"]["size"] == 300
    assert data["meta"]["type"] == "url"
    assert data["meta"]["errorCorrection"] == "M"


def test_generate_with_string_data():
    response = client.post("/api/qr/generate", json={"type": "text", "data": "plain text"})
    assert response.status_code == 200
    assert response.json()["meta"]["size"] == 512


def test_generate_missing_data_is_422():
    response = client.post("/api/qr/generate", json={"type": "url", "data": ""})
    assert response.status_code == 422
    assert "required" in response.json()["detail"]


def test_generate_bad_size_is_422():
    response = client.post("/api/qr/generate", json={"type": "text", "data": "x", "size": 9999})
    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "size"


def test_preview_returns_svg():
    response = client.post("/api/qr/preview", json={"type": "text", "data": "hello"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert 'width="256"' in response.text


def test_batch_continues_past_failures():
    response = client.post("/api/qr/batch", json={
        "items": [
            {"type": "text", "data": "one"},
            {"type": "url", "data": ""},
            {"type": "text", "data": "three"},
        ],
    })
    assert response.status_code == 200
    data = response.json()
    assert (data["succeeded"], data["failed"]) == (2, 1)
    assert [r["success"] for r in data["results"]] == [True, False, True]


def test_batch_stop_on_error():
    response = client.post("/api/qr/batch", json={
        "items": [
            {"type": "url", "data": ""},
            {"type": "text", "data": "two"},
        ],
        "stopOnError": True,
    })
    data = response.json()
    assert len(data["results"]) == 1
    assert data["failed"] == 1


def test_batch_limit():
    items = [{"type": "text", "data": str(i)} for i in range(51)]
    response = client.post("/api/qr/batch", json={"items": items})
    assert response.status_code == 422


def test_validate():
    response = client.post("/api/qr/validate", json={
        "type": "url",
        "data": {"url": "example.com"},
        "design": {"foregroundColor": "#zzz", "module": "blob"},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert data["errors"][0]["field"] == "design.foregroundColor"
    assert data["warnings"][0]["field"] == "design.module"


def test_capabilities():
    response = client.get("/api/qr/capabilities")
    assert response.status_code == 200
    data = response.json()
    assert "vcard" in data["types"]
    assert "heart" in data["moduleShapes"]
    assert data["output"]["maxSize"] == 2048


def test_generator_dependency_override():
    app.dependency_overrides[get_generator] = _fake_generator
    try:
        response = client.post("/api/qr/generate", json={"type": "text", "data": "anything", "size": 290})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 200
    assert response.json()["meta"]["moduleCount"] == 21


def _loop_running_here() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_rendering_runs_off_the_event_loop():
    seen = []

    def recording_fetcher(source: str):
        seen.append(_loop_running_here())
        return fake_fetcher(source)

    app.dependency_overrides[get_generator] = lambda: QrGenerator(
        matrix_encoder=fake_encoder, fetcher=recording_fetcher,
    )
    try:
        for path in ("/api/qr/generate", "/api/qr/preview"):
            response = client.post(path, json={
                "type": "text",
                "data": "hello",
                "design": {"logoUrl": "https://example.com/logo.png"},
            })
            assert response.status_code == 200
        response = client.post("/api/qr/batch", json={"items": [
            {"type": "text", "data": "one", "design": {"logoUrl": "https://example.com/a.png"}},
        ]})
        assert response.json()["succeeded"] == 1
    finally:
        app.dependency_overrides.clear()
    assert seen == [False, False, False]

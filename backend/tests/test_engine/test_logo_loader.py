"""Tests for logo loading."""

import base64

import pytest
import requests

from qrstudio.engine import logo_loader
from qrstudio.engine.logo_loader import LogoAsset, LogoCache, fetch_bytes, sniff_mime
from qrstudio.errors import LogoFetchError
from tests.conftest import PNG_BYTES, PNG_DATA_URI, SVG_LOGO


class _Response:
    def __init__(self, status_code, content=b"", content_type=""):
        self.status_code = status_code
        self.content = content
        self.headers = {"content-type": content_type} if content_type else {}


def test_data_uri():
    asset = fetch_bytes(PNG_DATA_URI)
    assert asset == LogoAsset(PNG_BYTES, "image/png")


def test_bare_base64_is_sniffed():
    asset = fetch_bytes(base64.b64encode(PNG_BYTES).decode("ascii"))
    assert asset.mime_type == "image/png"
    svg = fetch_bytes(base64.b64encode(SVG_LOGO).decode("ascii"))
    assert svg.mime_type == "image/svg+xml"


def test_invalid_base64_raises():
    with pytest.raises(LogoFetchError):
        fetch_bytes("not base64 at all!")
    with pytest.raises(LogoFetchError):
        fetch_bytes("data:image/png;base64")


def test_local_file(tmp_path):
    path = tmp_path / "logo.svg"
    path.write_bytes(SVG_LOGO)
    asset = fetch_bytes(str(path))
    assert asset.mime_type == "image/svg+xml"
    with pytest.raises(LogoFetchError):
        fetch_bytes(str(tmp_path / "missing.png"))


def test_http_fetch(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _Response(200, PNG_BYTES, "image/png; charset=binary")

    monkeypatch.setattr(logo_loader.requests, "get", fake_get)
    asset = fetch_bytes("https://cdn.example.com/logo.png", timeout_ms=2500)
    assert asset.mime_type == "image/png"
    assert calls == [("https://cdn.example.com/logo.png", 2.5)]


def test_http_errors(monkeypatch):
    monkeypatch.setattr(logo_loader.requests, "get", lambda url, timeout: _Response(404))
    with pytest.raises(LogoFetchError, match="404"):
        fetch_bytes("https://cdn.example.com/missing.png")

    def boom(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(logo_loader.requests, "get", boom)
    with pytest.raises(LogoFetchError):
        fetch_bytes("https://cdn.example.com/logo.png")


def test_sniff_unknown_bytes():
    assert sniff_mime(b"\x00\x01\x02", fallback="application/octet-stream") == "application/octet-stream"


def test_cache_evicts_oldest():
    cache = LogoCache(max_entries=2)
    for key in ("a", "b", "c"):
        cache.put(key, LogoAsset(key.encode(), "image/png"))
    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("c").data == b"c"


def test_cache_hit_refreshes_recency():
    cache = LogoCache(max_entries=2)
    cache.put("a", LogoAsset(b"a", "image/png"))
    cache.put("b", LogoAsset(b"b", "image/png"))
    assert cache.get("a").data == b"a"
    cache.put("c", LogoAsset(b"c", "image/png"))
    assert cache.get("b") is None
    assert cache.get("a").data == b"a"


def test_load_logo_caches(monkeypatch):
    logo_loader.get_cache().clear()
    calls = []

    def fake_fetch(source, timeout_ms=None):
        calls.append(source)
        return LogoAsset(PNG_BYTES, "image/png")

    monkeypatch.setattr(logo_loader, "fetch_bytes", fake_fetch)
    logo_loader.load_logo("https://cdn.example.com/a.png")
    logo_loader.load_logo("https://cdn.example.com/a.png")
    assert calls == ["https://cdn.example.com/a.png"]
    logo_loader.get_cache().clear()

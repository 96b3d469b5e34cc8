"""Shared test fixtures."""

from __future__ import annotations

import base64

import pytest

from qrstudio.encoding.matrix import FINDER_SPAN, QrMatrix
from qrstudio.engine.logo_loader import LogoAsset


# Minimal valid payload for every supported type

SAMPLE_PAYLOADS = {
    "url": {"url": "example.com"},
    "text": {"text": "Hello, world"},
    "email": {"email": "jane@example.com", "subject": "Hi there"},
    "phone": {"phone": "+1 (555) 010-0000"},
    "sms": {"phone": "+15550100000", "message": "Call me"},
    "whatsapp": {"phone": "+15550100000", "message": "Hello"},
    "wifi": {"ssid": "Home", "password": "secret", "encryption": "WPA"},
    "location": {"latitude": 40.7128, "longitude": -74.006},
    "vcard": {"firstName": "Jane", "lastName": "Doe", "phone": "+15550100000"},
    "event": {"summary": "Launch", "start": "2024-05-01T10:00:00Z", "end": "2024-05-01T11:00:00Z"},
    "social": {"platform": "github", "username": "octocat"},
    "crypto": {"currency": "btc", "address": "1BoatSLRHtKNngkdXEeobR76b53LETtpyT", "amount": 0.5},
    "upi": {"vpa": "merchant@upi", "payeeName": "Shop", "amount": 100},
    "pix": {"key": "pix@example.com", "name": "Loja", "city": "Sao Paulo"},
}

WIFI_SPECIAL = {"ssid": "My;Net", "password": "p@ss:1", "encryption": "WPA"}
WIFI_SPECIAL_CONTENT = r"WIFI:T:WPA;S:My\;Net;P:p@ss\:1;H:false;;"

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")

SVG_LOGO = b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><rect width="10" height="10"/></svg>'


def _finder_cell(row: int, col: int) -> bool:
    """Dark cells of a 7x7 finder: outer ring plus the 3x3 center."""
    if row in (0, 6) or col in (0, 6):
        return True
    return 2 <= row <= 4 and 2 <= col <= 4


def build_rows(size: int = 21) -> list[list[bool]]:
    """Version-1-sized grid: three finders and a diagonal checker of data cells."""
    rows = [[False] * size for _ in range(size)]
    far = size - FINDER_SPAN
    for top, left in ((0, 0), (0, far), (far, 0)):
        for r in range(FINDER_SPAN):
            for c in range(FINDER_SPAN):
                rows[top + r][left + c] = _finder_cell(r, c)
    for r in range(size):
        for c in range(size):
            in_finder = (
                (r < FINDER_SPAN and c < FINDER_SPAN)
                or (r < FINDER_SPAN and c >= far)
                or (r >= far and c < FINDER_SPAN)
            )
            if not in_finder and (r + c) % 3 == 0:
                rows[r][c] = True
    return rows


FAKE_ROWS = build_rows()


def fake_encoder(content: str, ec_level: str = "M") -> QrMatrix:
    return QrMatrix.from_rows(FAKE_ROWS, version=1)


def fake_fetcher(source: str) -> LogoAsset:
    return LogoAsset(PNG_BYTES, "image/png")


def failing_fetcher(source: str) -> LogoAsset:
    from qrstudio.errors import LogoFetchError

    raise LogoFetchError(f"unreachable: {source}")


@pytest.fixture
def fake_matrix() -> QrMatrix:
    return fake_encoder("")


@pytest.fixture
def generator():
    from qrstudio.engine.generator import QrGenerator

    return QrGenerator(matrix_encoder=fake_encoder, fetcher=fake_fetcher)


def make_context(design: dict | None = None, size: int = 290, margin: int = 4, fetcher=fake_fetcher):
    """GenerationContext over the fake matrix. 290 / (21 + 8) gives 10px modules."""
    from qrstudio.engine.context import GenerationContext
    from qrstudio.engine.normalizer import normalize
    from qrstudio.svg.builder import SvgDocument

    return GenerationContext(
        payload_type="text",
        content="hello",
        design=normalize(design or {}),
        matrix=fake_encoder("hello"),
        size=size,
        margin=margin,
        document=SvgDocument(size),
        fetcher=fetcher,
    )

"""Logo loading from data URIs, http(s) URLs, local paths or bare base64."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
import threading
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path

import requests
from PIL import Image, UnidentifiedImageError

from qrstudio.config import settings
from qrstudio.errors import LogoFetchError

logger = logging.getLogger(__name__)

LOGO_SOURCE_KEYS = ("logoUrl", "logo", "logoData", "logoBase64")

_DATA_URI = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)

MIME_BY_EXTENSION = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
}


@dataclass(frozen=True)
class LogoAsset:
    data: bytes
    mime_type: str


def sniff_mime(data: bytes, fallback: str = "image/png") -> str:
    """Guess the image type from its bytes; SVG text is recognized without Pillow."""
    head = data[:256].lstrip()
    if head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in data[:1024]):
        return "image/svg+xml"
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", fallback)
    except (UnidentifiedImageError, OSError):
        return fallback


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise LogoFetchError(f"Invalid base64 logo data: {e}") from e


def _fetch_url(url: str, timeout_ms: int) -> LogoAsset:
    try:
        resp = requests.get(url, timeout=timeout_ms / 1000)
    except requests.RequestException as e:
        raise LogoFetchError(f"Logo request failed: {e}") from e
    if resp.status_code != 200:
        raise LogoFetchError(f"Logo request failed: HTTP {resp.status_code}")
    content_type = resp.headers.get("content-type", "").split(";")[0].strip()
    return LogoAsset(resp.content, content_type or sniff_mime(resp.content))


def _read_file(path: str) -> LogoAsset:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise LogoFetchError(f"Cannot read logo file {path}: {e}") from e
    mime_type = MIME_BY_EXTENSION.get(Path(path).suffix.lower()) or sniff_mime(data)
    return LogoAsset(data, mime_type)


def fetch_bytes(source: str, timeout_ms: int | None = None) -> LogoAsset:
    """Load ``source`` without caching. Raises ``LogoFetchError``."""
    if not source:
        raise LogoFetchError("Empty logo source")
    timeout = settings.logo_fetch_timeout_ms if timeout_ms is None else timeout_ms

    if source.startswith("data:"):
        m = _DATA_URI.match(source)
        if not m:
            raise LogoFetchError("Malformed data URI")
        return LogoAsset(_b64decode(m.group(2)), m.group(1))
    if source.startswith(("http://", "https://")):
        return _fetch_url(source, timeout)
    if source.startswith("/") or "\\" in source:
        return _read_file(source)
    data = _b64decode(source)
    return LogoAsset(data, sniff_mime(data))


class LogoCache:
    """Bounded, process-wide cache of loaded logos keyed by source."""

    def __init__(self, max_entries: int = 100) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, LogoAsset] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, source: str) -> LogoAsset | None:
        with self._lock:
            asset = self._entries.get(source)
            if asset is not None:
                self._entries.move_to_end(source)
            return asset

    def put(self, source: str, asset: LogoAsset) -> None:
        with self._lock:
            self._entries[source] = asset
            self._entries.move_to_end(source)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


_cache = LogoCache(settings.logo_cache_size)


def get_cache() -> LogoCache:
    return _cache


def load_logo(source: str) -> LogoAsset:
    """Cached ``fetch_bytes``: the default fetcher used by the logo stage."""
    cached = _cache.get(source)
    if cached is not None:
        return cached
    asset = fetch_bytes(source)
    _cache.put(source, asset)
    logger.debug("Loaded logo (%s, %d bytes)", asset.mime_type, len(asset.data))
    return asset

"""FastAPI dependency injection."""

from __future__ import annotations

from qrstudio.config import settings
from qrstudio.engine.generator import QrGenerator
from qrstudio.engine.generator import get_generator as _default_generator


def get_settings():
    return settings


def get_generator() -> QrGenerator:
    return _default_generator()

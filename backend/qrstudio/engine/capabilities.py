"""Capability listing derived from the shape and payload tables."""

from __future__ import annotations

from typing import Any

from qrstudio.config import settings
from qrstudio.encoding.matrix import EC_LEVELS
from qrstudio.encoding.payloads import PAYLOAD_TYPES
from qrstudio.shapes.finders import FinderDotShape, FinderShape
from qrstudio.shapes.frames import FrameType
from qrstudio.shapes.logo import LogoBackgroundShape
from qrstudio.shapes.modules import ModuleShape
from qrstudio.shapes.stickers import StickerType
from qrstudio.svg.colors import GRADIENT_TYPES

ENGINE_VERSION = "1.0.0"


def capabilities() -> dict[str, Any]:
    return {
        "version": ENGINE_VERSION,
        "types": list(PAYLOAD_TYPES),
        "moduleShapes": [s.value for s in ModuleShape],
        "finderShapes": [s.value for s in FinderShape],
        "finderDotShapes": [s.value for s in FinderDotShape],
        "stickerTypes": [s.value for s in StickerType],
        "frameTypes": [s.value for s in FrameType],
        "logoBackgroundShapes": [s.value for s in LogoBackgroundShape],
        "errorCorrection": list(EC_LEVELS),
        "gradientTypes": list(GRADIENT_TYPES),
        "output": {
            "formats": ["svg"],
            "minSize": settings.min_size,
            "maxSize": settings.max_size,
        },
    }

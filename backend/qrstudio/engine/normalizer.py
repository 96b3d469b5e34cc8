"""Raw design dict -> canonical ``DesignConfig``.

Clients send the same field under many names (``fg_color``, ``modules_shape``,
``eye_shape``). One alias table maps them onto the canonical wire keys; keys
nobody recognizes pass through untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from qrstudio.errors import ValidationError
from qrstudio.models.design import DEFAULT_DESIGN, DesignConfig
from qrstudio.shapes.frames import find_frame
from qrstudio.shapes.stickers import StickerType, find_sticker

logger = logging.getLogger(__name__)

KEY_ALIASES: dict[str, str] = {
    # Module shape
    "modules_shape": "module",
    "module_shape": "module",
    "body_shape": "module",
    "modulesShape": "module",
    # Finder
    "finders_shape": "finder",
    "finder_shape": "finder",
    "eye_shape": "finder",
    "img_eye": "finder",
    "findersShape": "finder",
    # Finder dot
    "finders_dots_shape": "finderDot",
    "finder_dots_shape": "finderDot",
    "finder_dot_shape": "finderDot",
    "eye_dot_shape": "finderDot",
    "findersDotsShape": "finderDot",
    # Colors
    "fg_color": "foregroundColor",
    "bg_color": "backgroundColor",
    "eye_color": "eyeColor",
    # Stickers and themed shapes
    "sticker": "advancedShape",
    "sticker_shape": "advancedShape",
    "themed_shape": "shape",
    "outlined_shape": "shape",
    # Frames
    "frame_text": "frameText",
    "frame_color": "frameColor",
    "frame_text_color": "textColor",
    # Logo
    "logo_size": "logoScale",
    "logo_file": "logoUrl",
    "logo_background_color": "logoBackgroundFill",
    # Flat gradient
    "gradient_type": "gradientType",
    "gradient_start_color": "gradientStartColor",
    "gradient_end_color": "gradientEndColor",
    "gradient_angle": "gradientAngle",
}

_SNAKE_PART = re.compile(r"_([a-z0-9])")


def canonical_key(key: str) -> str:
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    if "_" in key:
        return _SNAKE_PART.sub(lambda m: m.group(1).upper(), key)
    return key


def canonicalize(raw: dict[str, Any]) -> dict[str, Any]:
    """Rename keys to their canonical wire names.

    A key already spelled canonically wins over any alias that maps onto it.
    """
    out: dict[str, Any] = {}
    explicit: set[str] = set()
    for key, value in raw.items():
        target = canonical_key(key)
        is_explicit = target == key
        if target in out and target in explicit and not is_explicit:
            continue
        out[target] = value
        if is_explicit:
            explicit.add(target)
    return out


def expand_shorthands(design: dict[str, Any]) -> dict[str, Any]:
    eye = design.get("eyeColor")
    if eye and "eyeInternalColor" not in design and "eyeExternalColor" not in design:
        design["eyeInternalColor"] = eye
        design["eyeExternalColor"] = eye

    start = design.get("gradientStartColor")
    end = design.get("gradientEndColor")
    if not design.get("gradientFill") and start and end:
        fill: dict[str, Any] = {
            "type": str(design.get("gradientType") or "LINEAR").upper(),
            "colors": [start, end],
        }
        if design.get("gradientAngle") is not None:
            fill["angle"] = design["gradientAngle"]
        design["gradientFill"] = fill
    return design


def normalize(raw: dict[str, Any] | DesignConfig | None) -> DesignConfig:
    """Canonical design for ``raw``. Idempotent: ``normalize(normalize(x).to_wire())`` is stable."""
    if isinstance(raw, DesignConfig):
        return raw
    if raw is None:
        return DEFAULT_DESIGN
    if not isinstance(raw, dict):
        raise ValidationError([{"field": "design", "message": "Design must be an object"}])

    overrides = expand_shorthands(canonicalize(raw))
    # Explicit nulls fall back to defaults.
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        return DesignConfig.merge(DEFAULT_DESIGN, overrides)
    except PydanticValidationError as e:
        issues = [
            {"field": ".".join(str(p) for p in err["loc"]) or "design", "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError(issues) from e


def classify_advanced_shape(name: object) -> tuple[str | None, str | None]:
    """('sticker' | 'frame' | None, warning) for a shared ``advancedShape`` value."""
    if not isinstance(name, str) or not name.strip() or name.strip().lower() == "none":
        return None, None
    sticker = find_sticker(name)
    if sticker is not None and sticker is not StickerType.NONE:
        return "sticker", None
    if find_frame(name) is not None:
        return "frame", None
    message = f"Unknown advanced shape '{name}', ignoring"
    logger.warning(message)
    return None, message

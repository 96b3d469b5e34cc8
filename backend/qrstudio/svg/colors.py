"""Color canonicalization and gradient definitions.

Every color leaving this module is an uppercase ``#RRGGBB`` string.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

from PIL import ImageColor

from qrstudio.errors import ColorError, ValidationError

logger = logging.getLogger(__name__)

GRADIENT_ID = "qrGradient"
GRADIENT_TYPES = ("LINEAR", "RADIAL")

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGBA_RE = re.compile(r"^rgba\(\s*([^,]+),([^,]+),([^,]+),[^)]*\)$", re.IGNORECASE)

NAMED_DIRECTIONS = {
    "to top": 0.0,
    "to right": 90.0,
    "to bottom": 180.0,
    "to left": 270.0,
    "to top right": 45.0,
    "to bottom right": 135.0,
    "to bottom left": 225.0,
    "to top left": 315.0,
}


def parse_color(value: Any) -> str:
    """Canonicalize ``value`` to ``#RRGGBB`` or raise ``ColorError``.

    Accepts ``#RGB``, ``#RGBA``, ``#RRGGBB``, ``#RRGGBBAA`` (alpha dropped),
    ``rgb()``/``rgba()``/``hsl()`` and CSS color names.
    """
    if not isinstance(value, str) or not value.strip():
        raise ColorError(f"Not a color: {value!r}")
    text = value.strip()

    m = _HEX_RE.match(text)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits[:3])
        return "#" + digits[:6].upper()

    # Alpha is dropped, so fractional rgba() alpha never reaches Pillow.
    m = _RGBA_RE.match(text)
    if m:
        text = "rgb({},{},{})".format(*(g.strip() for g in m.groups()))

    try:
        rgb = ImageColor.getrgb(text)
    except ValueError as e:
        raise ColorError(f"Not a color: {value!r}") from e
    r, g, b = rgb[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


def is_valid_color(value: Any) -> bool:
    try:
        parse_color(value)
    except ColorError:
        return False
    return True


def canonical_color(value: Any, fallback: str = "#000000") -> str:
    """Like ``parse_color`` but never raises: unparseable input becomes ``fallback``."""
    if value is None or value == "":
        return fallback
    try:
        return parse_color(value)
    except ColorError:
        logger.warning("Failed to parse color %r, using %s", value, fallback)
        return fallback


# ---------------------------------------------------------------------------
# Gradients
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GradientStop:
    color: str
    offset: float  # percent, 0..100
    opacity: float = 1.0


@dataclass(frozen=True)
class Gradient:
    """Resolved gradient, ready for serialization into ``<defs>``."""

    type: str
    stops: list[GradientStop]
    id: str = GRADIENT_ID
    angle: float = 45.0
    cx: float = 50.0
    cy: float = 50.0
    r: float = 50.0
    fx: float | None = None
    fy: float | None = None
    coords: tuple[float, float, float, float] = field(default=(0.0, 0.0, 0.0, 0.0))

    @property
    def url(self) -> str:
        return f"url(#{self.id})"


DEFAULT_STOPS = [
    GradientStop("#000000", 0),
    GradientStop("#808080", 50),
    GradientStop("#000000", 100),
]


def normalize_angle(value: Any) -> float:
    """Degrees in [0, 360). Accepts numbers, ``"45deg"`` and ``"to top right"`` style names."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in NAMED_DIRECTIONS:
            return NAMED_DIRECTIONS[text]
        try:
            value = float(text.replace("deg", "").strip())
        except ValueError:
            logger.warning("Unparseable gradient angle %r, using 45", value)
            return 45.0
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return 45.0
    return ((float(value) % 360) + 360) % 360


def linear_coordinates(angle: float) -> tuple[float, float, float, float]:
    """(x1, y1, x2, y2) in percent for a CSS-style angle (0 = to top, 90 = to right)."""
    theta = math.radians(angle - 90)
    x1 = 50 - math.cos(theta) * 50
    y1 = 50 - math.sin(theta) * 50
    x2 = 50 + math.cos(theta) * 50
    y2 = 50 + math.sin(theta) * 50
    return tuple(round(v, 2) + 0.0 for v in (x1, y1, x2, y2))  # type: ignore[return-value]


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().rstrip("%"))
        except ValueError:
            return None
    return None


def parse_stops(raw: Any) -> list[GradientStop]:
    """Turn a list of color strings or stop dicts into stops.

    Stops without an explicit offset are spread evenly over 0..100 by index.
    Fewer than two stops raises ``ValidationError``.
    """
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        count = len(raw) if isinstance(raw, (list, tuple)) else 0
        raise ValidationError([{
            "field": "gradientFill.colors",
            "message": f"Gradient needs at least 2 color stops, got {count}",
        }])

    last = len(raw) - 1
    stops: list[GradientStop] = []
    for index, item in enumerate(raw):
        even = index / last * 100
        if isinstance(item, str):
            stops.append(GradientStop(canonical_color(item), even))
        elif isinstance(item, dict):
            color = canonical_color(item.get("color") or item.get("value") or "#000000")
            offset = None
            for key in ("stop", "offset", "position"):
                if item.get(key) is not None:
                    offset = _number(item[key])
                    break
            opacity = _number(item.get("opacity"))
            stops.append(GradientStop(
                color,
                even if offset is None else offset,
                1.0 if opacity is None else opacity,
            ))
        else:
            stops.append(GradientStop("#000000", even))
    return stops


def parse_gradient(fill: dict[str, Any] | None) -> Gradient:
    """Resolve a gradient descriptor (``type``, ``colors``/``stops``, ``angle`` or ``cx``..)."""
    fill = fill or {}
    kind = str(fill.get("type") or "LINEAR").upper()
    raw_stops = fill.get("colors") or fill.get("stops")
    stops = DEFAULT_STOPS if raw_stops is None else parse_stops(raw_stops)

    if kind == "RADIAL":
        cx = _number(fill.get("cx")) or 50.0
        cy = _number(fill.get("cy")) or 50.0
        r = _number(fill.get("r")) or 50.0
        fx = _number(fill.get("fx"))
        fy = _number(fill.get("fy"))
        return Gradient(
            type="RADIAL",
            stops=stops,
            cx=cx,
            cy=cy,
            r=r,
            fx=cx if fx is None else fx,
            fy=cy if fy is None else fy,
        )

    if kind != "LINEAR":
        logger.warning("Unknown gradient type %r, using LINEAR", kind)
    raw_angle = fill.get("angle")
    if raw_angle is None:
        raw_angle = fill.get("direction", 45)
    angle = normalize_angle(raw_angle)
    return Gradient(type="LINEAR", stops=stops, angle=angle, coords=linear_coordinates(angle))

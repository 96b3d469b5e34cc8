"""Logo placement math and background plates."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from qrstudio.shapes import catalog
from qrstudio.shapes.paths import ShapePath, circle, fmt, rect, rounded_rect
from qrstudio.svg.builder import element


class LogoBackgroundShape(str, enum.Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    ROUNDED = "rounded"
    NONE = "none"


_INDEX = catalog.build_index(LogoBackgroundShape, {"rounded-square": LogoBackgroundShape.ROUNDED})


def find_background_shape(name: object) -> LogoBackgroundShape | None:
    return catalog.find(name, _INDEX)


def resolve_background_shape(name: object) -> tuple[LogoBackgroundShape, str | None]:
    return catalog.resolve(name, _INDEX, LogoBackgroundShape.CIRCLE, "logo background shape")


@dataclass(frozen=True)
class LogoPlacement:
    x: float
    y: float
    size: float
    rotate: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2

    @property
    def transform(self) -> str | None:
        if not self.rotate:
            return None
        cx, cy = self.center
        return f"rotate({fmt(self.rotate)} {fmt(cx)} {fmt(cy)})"


def place_logo(output_size: float, scale: float, pos_x: float = 0.5, pos_y: float = 0.5, rotate: float = 0.0) -> LogoPlacement:
    """Square logo box of side ``scale * output_size`` centered on (pos_x, pos_y) fractions."""
    size = output_size * scale
    return LogoPlacement(
        x=output_size * pos_x - size / 2,
        y=output_size * pos_y - size / 2,
        size=size,
        rotate=rotate,
    )


def background_path(shape: LogoBackgroundShape, placement: LogoPlacement, scale: float) -> ShapePath:
    """Plate beneath the logo, ``scale`` times the logo side, sharing its center.

    The plate stays axis-aligned when the logo is rotated.
    """
    side = placement.size * scale
    cx, cy = placement.center
    x = cx - side / 2
    y = cy - side / 2
    if shape is LogoBackgroundShape.CIRCLE:
        return ShapePath(circle(cx, cy, side / 2))
    if shape is LogoBackgroundShape.SQUARE:
        return ShapePath(rect(x, y, side, side))
    if shape is LogoBackgroundShape.ROUNDED:
        return ShapePath(rounded_rect(x, y, side, side, side * 0.15))
    return ShapePath("")


def image_element(placement: LogoPlacement, mime_type: str, b64: str) -> str:
    return element("image", {
        "x": placement.x,
        "y": placement.y,
        "width": placement.size,
        "height": placement.size,
        "href": f"data:{mime_type};base64,{b64}",
        "preserveAspectRatio": "xMidYMid meet",
        "transform": placement.transform,
    })

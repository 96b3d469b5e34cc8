"""Finder pattern shapes: the three 7x7 corner markers.

A pattern at origin (x, y) is three rings: outer at 7 modules, middle at 5
modules offset by one, dot at 3 modules offset by two. Compound finder shapes
encode the outer ring as a single even-odd path, so their middle ring is empty.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass

from qrstudio.shapes import catalog
from qrstudio.shapes.paths import (
    Corners,
    ShapePath,
    circle,
    diamond,
    eye,
    fmt,
    heart,
    octagon,
    rect,
    rounded_rect,
    selective_rounded_rect,
    star,
    whirlpool,
)

ShapeGenerator = Callable[[float, float, float], str]


class FinderShape(str, enum.Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    ROUNDED = "rounded"
    EXTRA_ROUNDED = "extra-rounded"
    LEAF = "leaf"
    DIAMOND = "diamond"
    EYE_SHAPED = "eye-shaped"
    OCTAGON = "octagon"
    WHIRLPOOL = "whirlpool"
    WATER_DROP = "water-drop"
    ZIGZAG = "zigzag"
    CIRCLE_DOTS = "circle-dots"

    @property
    def compound(self) -> bool:
        return self in _COMPOUND


_COMPOUND = frozenset({
    FinderShape.EYE_SHAPED,
    FinderShape.OCTAGON,
    FinderShape.WHIRLPOOL,
    FinderShape.WATER_DROP,
    FinderShape.ZIGZAG,
    FinderShape.CIRCLE_DOTS,
})


class FinderDotShape(str, enum.Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    ROUNDED = "rounded"
    DIAMOND = "diamond"
    STAR = "star"
    HEART = "heart"
    EYE_SHAPED = "eye-shaped"
    OCTAGON = "octagon"
    WHIRLPOOL = "whirlpool"
    WATER_DROP = "water-drop"
    ZIGZAG = "zigzag"


# ---------------------------------------------------------------------------
# Finder ring generators
# ---------------------------------------------------------------------------


def _square(x: float, y: float, size: float) -> str:
    return rect(x, y, size, size)


def _circle_ring(x: float, y: float, size: float) -> str:
    return circle(x + size / 2, y + size / 2, size / 2)


def _rounded_ring(x: float, y: float, size: float) -> str:
    return rounded_rect(x, y, size, size, size * 0.2)


def _extra_rounded_ring(x: float, y: float, size: float) -> str:
    return rounded_rect(x, y, size, size, size * 0.35)


def _leaf_ring(x: float, y: float, size: float) -> str:
    corners = Corners(top_left=True, top_right=False, bottom_right=True, bottom_left=False)
    return selective_rounded_rect(x, y, size, size, size * 0.4, corners)


def _whirlpool_ring(x: float, y: float, size: float) -> str:
    return whirlpool(x, y, size, r_ratio=1.0, offset_ratio=0.15, arc_ratio=0.9)


def _teardrop(x: float, y: float, size: float, inset: float) -> str:
    """Point at the top, round bottom, bounded by the square shrunk by ``inset`` per side."""
    left = x + inset
    right = x + size - inset
    top = y + inset
    bottom = y + size - inset
    r = (right - left) / 2
    cx = left + r
    cy = bottom - r
    shoulder = top + (cy - top) / 2
    ar = fmt(r)
    return (
        f"M {fmt(cx)} {fmt(top)} "
        f"Q {fmt(right)} {fmt(shoulder)} {fmt(right)} {fmt(cy)} "
        f"A {ar} {ar} 0 0 1 {fmt(cx)} {fmt(bottom)} "
        f"A {ar} {ar} 0 0 1 {fmt(left)} {fmt(cy)} "
        f"Q {fmt(left)} {fmt(shoulder)} {fmt(cx)} {fmt(top)} Z"
    )


def _water_drop_ring(x: float, y: float, size: float) -> str:
    return _teardrop(x, y, size, 0)


def _zigzag_ring(x: float, y: float, size: float) -> str:
    """Three zigs per edge, clockwise from the top-left corner."""
    zig = size / 6
    parts = [f"M {fmt(x)} {fmt(y)}"]
    for i in range(3):
        base = x + i * 2 * zig
        parts.append(f"L {fmt(base + zig)} {fmt(y + zig)} L {fmt(base + 2 * zig)} {fmt(y)}")
    for i in range(3):
        base = y + i * 2 * zig
        parts.append(f"L {fmt(x + size - zig)} {fmt(base + zig)} L {fmt(x + size)} {fmt(base + 2 * zig)}")
    for i in (2, 1, 0):
        base = x + i * 2 * zig
        parts.append(f"L {fmt(base + zig)} {fmt(y + size - zig)} L {fmt(base)} {fmt(y + size)}")
    for i in (2, 1, 0):
        base = y + i * 2 * zig
        parts.append(f"L {fmt(x + zig)} {fmt(base + zig)} L {fmt(x)} {fmt(base)}")
    return " ".join(parts) + " Z"


def _circle_dots_ring(x: float, y: float, size: float) -> str:
    """Twelve small dots on a circle, starting at twelve o'clock."""
    cx = x + size / 2
    cy = y + size / 2
    dot_r = size * 0.08
    main_r = size / 2 - dot_r
    dots = []
    for i in range(12):
        angle = i * 2 * math.pi / 12 - math.pi / 2
        dots.append(circle(cx + main_r * math.cos(angle), cy + main_r * math.sin(angle), dot_r))
    return " ".join(dots)


FINDER_GENERATORS: dict[FinderShape, ShapeGenerator] = {
    FinderShape.SQUARE: _square,
    FinderShape.CIRCLE: _circle_ring,
    FinderShape.ROUNDED: _rounded_ring,
    FinderShape.EXTRA_ROUNDED: _extra_rounded_ring,
    FinderShape.LEAF: _leaf_ring,
    FinderShape.DIAMOND: diamond,
    FinderShape.EYE_SHAPED: eye,
    FinderShape.OCTAGON: octagon,
    FinderShape.WHIRLPOOL: _whirlpool_ring,
    FinderShape.WATER_DROP: _water_drop_ring,
    FinderShape.ZIGZAG: _zigzag_ring,
    FinderShape.CIRCLE_DOTS: _circle_dots_ring,
}
catalog.check_exhaustive(FinderShape, FINDER_GENERATORS)


# ---------------------------------------------------------------------------
# Finder dot generators
# ---------------------------------------------------------------------------


def _circle_dot(x: float, y: float, size: float) -> str:
    return circle(x + size / 2, y + size / 2, size / 2 * 0.9)


def _rounded_dot(x: float, y: float, size: float) -> str:
    return rounded_rect(x, y, size, size, size * 0.25)


def _star_dot(x: float, y: float, size: float) -> str:
    outer_r = size / 2 * 0.9
    return star(x + size / 2, y + size / 2, outer_r, outer_r * 0.4, 5)


def _whirlpool_dot(x: float, y: float, size: float) -> str:
    return whirlpool(x, y, size, r_ratio=0.9, offset_ratio=0.1, arc_ratio=0.85)


def _water_drop_dot(x: float, y: float, size: float) -> str:
    return _teardrop(x, y, size, size * 0.1)


def _zigzag_dot(x: float, y: float, size: float) -> str:
    z = size / 4
    return (
        f"M {fmt(x)} {fmt(y)} "
        f"L {fmt(x + z)} {fmt(y + z)} L {fmt(x + 2 * z)} {fmt(y)} "
        f"L {fmt(x + 3 * z)} {fmt(y + z)} L {fmt(x + size)} {fmt(y)} "
        f"L {fmt(x + size - z)} {fmt(y + z)} L {fmt(x + size)} {fmt(y + 2 * z)} "
        f"L {fmt(x + size - z)} {fmt(y + 3 * z)} L {fmt(x + size)} {fmt(y + size)} "
        f"L {fmt(x + 3 * z)} {fmt(y + size - z)} L {fmt(x + 2 * z)} {fmt(y + size)} "
        f"L {fmt(x + z)} {fmt(y + size - z)} L {fmt(x)} {fmt(y + size)} "
        f"L {fmt(x + z)} {fmt(y + 3 * z)} L {fmt(x)} {fmt(y + 2 * z)} "
        f"L {fmt(x + z)} {fmt(y + z)} Z"
    )


DOT_GENERATORS: dict[FinderDotShape, ShapeGenerator] = {
    FinderDotShape.SQUARE: _square,
    FinderDotShape.CIRCLE: _circle_dot,
    FinderDotShape.ROUNDED: _rounded_dot,
    FinderDotShape.DIAMOND: diamond,
    FinderDotShape.STAR: _star_dot,
    FinderDotShape.HEART: heart,
    FinderDotShape.EYE_SHAPED: eye,
    FinderDotShape.OCTAGON: octagon,
    FinderDotShape.WHIRLPOOL: _whirlpool_dot,
    FinderDotShape.WATER_DROP: _water_drop_dot,
    FinderDotShape.ZIGZAG: _zigzag_dot,
}
catalog.check_exhaustive(FinderDotShape, DOT_GENERATORS)


FINDER_ALIASES: dict[str, FinderShape] = {
    "default": FinderShape.SQUARE,
    "dot": FinderShape.CIRCLE,
    "rounded-corners": FinderShape.ROUNDED,
    "rhombus": FinderShape.DIAMOND,
}

DOT_ALIASES: dict[str, FinderDotShape] = {
    "default": FinderDotShape.SQUARE,
    "dot": FinderDotShape.CIRCLE,
    "rounded-corners": FinderDotShape.ROUNDED,
    "rhombus": FinderDotShape.DIAMOND,
}

_FINDER_INDEX = catalog.build_index(FinderShape, FINDER_ALIASES)
_DOT_INDEX = catalog.build_index(FinderDotShape, DOT_ALIASES)


def find_finder_shape(name: object) -> FinderShape | None:
    return catalog.find(name, _FINDER_INDEX)


def find_finder_dot_shape(name: object) -> FinderDotShape | None:
    return catalog.find(name, _DOT_INDEX)


def resolve_finder_shape(name: object) -> tuple[FinderShape, str | None]:
    return catalog.resolve(name, _FINDER_INDEX, FinderShape.SQUARE, "finder shape")


def resolve_finder_dot_shape(name: object) -> tuple[FinderDotShape, str | None]:
    return catalog.resolve(name, _DOT_INDEX, FinderDotShape.SQUARE, "finder dot shape")


@dataclass(frozen=True)
class FinderPattern:
    """Paths for one finder marker plus the footprint it occupies."""

    outer: ShapePath
    middle: ShapePath
    dot: ShapePath
    box: tuple[float, float, float]  # x, y, side


def finder_pattern(
    shape: FinderShape, dot_shape: FinderDotShape, x: float, y: float, module_size: float
) -> FinderPattern:
    outer_size = module_size * 7
    middle_size = module_size * 5
    dot_size = module_size * 3
    ring = FINDER_GENERATORS[shape]

    outer_d = ring(x, y, outer_size)
    middle_d = ring(x + module_size, y + module_size, middle_size)
    dot = ShapePath(DOT_GENERATORS[dot_shape](x + module_size * 2, y + module_size * 2, dot_size))

    if shape.compound:
        if shape is not FinderShape.CIRCLE_DOTS:
            outer_d = f"{outer_d} {middle_d}"
        return FinderPattern(
            outer=ShapePath(outer_d, is_compound=True),
            middle=ShapePath(""),
            dot=dot,
            box=(x, y, outer_size),
        )

    return FinderPattern(
        outer=ShapePath(outer_d),
        middle=ShapePath(middle_d),
        dot=dot,
        box=(x, y, outer_size),
    )

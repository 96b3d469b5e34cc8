"""Module (data cell) shapes.

Every generator has the signature ``(x, y, size, neighbors) -> path`` where
(x, y) is the cell's top-left corner in output pixels. Only the classy shapes
look at ``neighbors``.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

from qrstudio.encoding.matrix import Neighbors
from qrstudio.shapes import catalog
from qrstudio.shapes.paths import (
    Corners,
    circle,
    diamond,
    fmt,
    heart,
    rect,
    rounded_rect,
    selective_rounded_rect,
    star,
)


class ModuleShape(str, enum.Enum):
    SQUARE = "square"
    DOT = "dot"
    ROUNDED = "rounded"
    EXTRA_ROUNDED = "extra-rounded"
    RHOMBUS = "rhombus"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    CLASSY = "classy"
    CLASSY_ROUNDED = "classy-rounded"
    STAR_5 = "star-5"
    STAR_7 = "star-7"
    HEART = "heart"
    TRIANGLE = "triangle"
    TRIANGLE_END = "triangle-end"
    FISH = "fish"
    TREE = "tree"
    ROUNDNESS = "roundness"
    TWO_TRIANGLES_WITH_CIRCLE = "two-triangles-with-circle"
    FOUR_TRIANGLES = "four-triangles"

    @property
    def uses_neighbors(self) -> bool:
        return self in (ModuleShape.CLASSY, ModuleShape.CLASSY_ROUNDED)


ModuleGenerator = Callable[[float, float, float, Neighbors], str]

NO_NEIGHBORS = Neighbors()


def square(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return rect(x, y, size, size)


def dot(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return circle(x + size / 2, y + size / 2, size / 2 * 0.85)


def rounded(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return rounded_rect(x, y, size, size, size * 0.25)


def extra_rounded(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return rounded_rect(x, y, size, size, size * 0.4)


def rhombus(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return diamond(x, y, size)


def vertical(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    width = size * 0.35
    offset = (size - width) / 2
    return rect(x + offset, y, width, size)


def horizontal(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    height = size * 0.35
    offset = (size - height) / 2
    return rect(x, y + offset, size, height)


def classy(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    """Half-size center square with a bridge toward each populated neighbor."""
    half = size / 2
    quarter = size / 4
    parts = [rect(x + quarter, y + quarter, half, half)]
    if neighbors.top:
        parts.append(rect(x + quarter, y, half, quarter))
    if neighbors.right:
        parts.append(
            f"M {fmt(x + quarter + half)} {fmt(y + quarter)} L {fmt(x + size)} {fmt(y + quarter)} "
            f"L {fmt(x + size)} {fmt(y + quarter + half)} L {fmt(x + quarter + half)} {fmt(y + quarter + half)} Z"
        )
    if neighbors.bottom:
        parts.append(
            f"M {fmt(x + quarter)} {fmt(y + quarter + half)} L {fmt(x + quarter + half)} {fmt(y + quarter + half)} "
            f"L {fmt(x + quarter + half)} {fmt(y + size)} L {fmt(x + quarter)} {fmt(y + size)} Z"
        )
    if neighbors.left:
        parts.append(rect(x, y + quarter, quarter, half))
    return " ".join(parts)


def classy_rounded(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    corners = Corners(
        top_left=not neighbors.top and not neighbors.left,
        top_right=not neighbors.top and not neighbors.right,
        bottom_right=not neighbors.bottom and not neighbors.right,
        bottom_left=not neighbors.bottom and not neighbors.left,
    )
    return selective_rounded_rect(x, y, size, size, size * 0.15, corners)


def star_shape(points: int, inner_ratio: float) -> ModuleGenerator:
    def generate(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
        outer_r = size / 2 * 0.9
        return star(x + size / 2, y + size / 2, outer_r, outer_r * inner_ratio, points)

    generate.__name__ = f"star_{points}"
    return generate


def heart_shape(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    return heart(x, y, size)


def triangle(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    cx = x + size / 2
    pad = size * 0.1
    return (
        f"M {fmt(cx)} {fmt(y + pad)} "
        f"L {fmt(x + size - pad)} {fmt(y + size - pad)} "
        f"L {fmt(x + pad)} {fmt(y + size - pad)} Z"
    )


def triangle_end(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    """Chevron pointing right."""
    pad = size * 0.05
    cy = y + size / 2
    return (
        f"M {fmt(x + pad)} {fmt(y + pad)} "
        f"L {fmt(x + size - pad)} {fmt(cy)} "
        f"L {fmt(x + pad)} {fmt(y + size - pad)} Z"
    )


def fish(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    s = size
    cx = x + s / 2
    cy = y + s / 2
    return (
        f"M {fmt(x + s * 0.15)} {fmt(cy)} "
        f"Q {fmt(x + s * 0.15)} {fmt(y + s * 0.25)} {fmt(cx)} {fmt(y + s * 0.25)} "
        f"Q {fmt(x + s * 0.75)} {fmt(y + s * 0.25)} {fmt(x + s * 0.75)} {fmt(cy)} "
        f"L {fmt(x + s * 0.95)} {fmt(y + s * 0.3)} "
        f"L {fmt(x + s * 0.95)} {fmt(y + s * 0.7)} "
        f"L {fmt(x + s * 0.75)} {fmt(cy)} "
        f"Q {fmt(x + s * 0.75)} {fmt(y + s * 0.75)} {fmt(cx)} {fmt(y + s * 0.75)} "
        f"Q {fmt(x + s * 0.15)} {fmt(y + s * 0.75)} {fmt(x + s * 0.15)} {fmt(cy)} Z"
    )


def tree(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    s = size
    return (
        f"M {fmt(x + s / 2)} {fmt(y + s * 0.05)} "
        f"L {fmt(x + s * 0.85)} {fmt(y + s * 0.65)} "
        f"L {fmt(x + s * 0.6)} {fmt(y + s * 0.65)} "
        f"L {fmt(x + s * 0.6)} {fmt(y + s * 0.95)} "
        f"L {fmt(x + s * 0.4)} {fmt(y + s * 0.95)} "
        f"L {fmt(x + s * 0.4)} {fmt(y + s * 0.65)} "
        f"L {fmt(x + s * 0.15)} {fmt(y + s * 0.65)} Z"
    )


def roundness(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    pad = size * 0.05
    inner = size - pad * 2
    return rounded_rect(x + pad, y + pad, inner, inner, inner * 0.48)


def two_triangles_with_circle(
    x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS
) -> str:
    """Center circle with a triangle above and below, each pointing at it."""
    cx = x + size / 2
    cy = y + size / 2
    pad = size * 0.05
    r = size * 0.18
    top = (
        f"M {fmt(x + pad)} {fmt(y + pad)} L {fmt(x + size - pad)} {fmt(y + pad)} "
        f"L {fmt(cx)} {fmt(cy - r - pad * 2)} Z"
    )
    bottom = (
        f"M {fmt(x + pad)} {fmt(y + size - pad)} L {fmt(x + size - pad)} {fmt(y + size - pad)} "
        f"L {fmt(cx)} {fmt(cy + r + pad * 2)} Z"
    )
    return f"{circle(cx, cy, r)} {top} {bottom}"


def four_triangles(x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS) -> str:
    """One right triangle in each corner, separated by a 12% gap."""
    cx = x + size / 2
    cy = y + size / 2
    gap = size * 0.12
    tl = f"M {fmt(x)} {fmt(y)} L {fmt(cx - gap)} {fmt(y)} L {fmt(x)} {fmt(cy - gap)} Z"
    tr = f"M {fmt(x + size)} {fmt(y)} L {fmt(x + size)} {fmt(cy - gap)} L {fmt(cx + gap)} {fmt(y)} Z"
    br = (
        f"M {fmt(x + size)} {fmt(y + size)} L {fmt(cx + gap)} {fmt(y + size)} "
        f"L {fmt(x + size)} {fmt(cy + gap)} Z"
    )
    bl = f"M {fmt(x)} {fmt(y + size)} L {fmt(x)} {fmt(cy + gap)} L {fmt(cx - gap)} {fmt(y + size)} Z"
    return f"{tl} {tr} {br} {bl}"


GENERATORS: dict[ModuleShape, ModuleGenerator] = {
    ModuleShape.SQUARE: square,
    ModuleShape.DOT: dot,
    ModuleShape.ROUNDED: rounded,
    ModuleShape.EXTRA_ROUNDED: extra_rounded,
    ModuleShape.RHOMBUS: rhombus,
    ModuleShape.VERTICAL: vertical,
    ModuleShape.HORIZONTAL: horizontal,
    ModuleShape.CLASSY: classy,
    ModuleShape.CLASSY_ROUNDED: classy_rounded,
    ModuleShape.STAR_5: star_shape(5, 0.4),
    ModuleShape.STAR_7: star_shape(7, 0.45),
    ModuleShape.HEART: heart_shape,
    ModuleShape.TRIANGLE: triangle,
    ModuleShape.TRIANGLE_END: triangle_end,
    ModuleShape.FISH: fish,
    ModuleShape.TREE: tree,
    ModuleShape.ROUNDNESS: roundness,
    ModuleShape.TWO_TRIANGLES_WITH_CIRCLE: two_triangles_with_circle,
    ModuleShape.FOUR_TRIANGLES: four_triangles,
}
catalog.check_exhaustive(ModuleShape, GENERATORS)

ALIASES: dict[str, ModuleShape] = {
    "dots": ModuleShape.DOT,
    "circle": ModuleShape.DOT,
    "diamond": ModuleShape.RHOMBUS,
    "vertical-line": ModuleShape.VERTICAL,
    "vertical-lines": ModuleShape.VERTICAL,
    "horizontal-line": ModuleShape.HORIZONTAL,
    "horizontal-lines": ModuleShape.HORIZONTAL,
    "star": ModuleShape.STAR_5,
    "4-triangles": ModuleShape.FOUR_TRIANGLES,
}

_INDEX = catalog.build_index(ModuleShape, ALIASES)


def find_module_shape(name: object) -> ModuleShape | None:
    return catalog.find(name, _INDEX)


def resolve_module_shape(name: object) -> tuple[ModuleShape, str | None]:
    return catalog.resolve(name, _INDEX, ModuleShape.SQUARE, "module shape")


def module_path(
    shape: ModuleShape, x: float, y: float, size: float, neighbors: Neighbors = NO_NEIGHBORS
) -> str:
    return GENERATORS[shape](x, y, size, neighbors)

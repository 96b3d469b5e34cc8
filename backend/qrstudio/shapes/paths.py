"""Leaf-node path-data helpers. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal


def fmt(value: float) -> str:
    """Shortest round-trip text for a coordinate.

    Integral values print without a fraction; everything between 1e-7 and 1e21
    prints in fixed-point, beyond that as ``<mantissa>e<sign><exp>``.
    """
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exp = text.split("e")
    exponent = int(exp)
    if -7 <= exponent < 21:
        return format(Decimal(text), "f")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


@dataclass(frozen=True)
class Corners:
    """Which corners of a rectangle get rounded."""

    top_left: bool = True
    top_right: bool = True
    bottom_right: bool = True
    bottom_left: bool = True


@dataclass(frozen=True)
class ShapePath:
    """Path data for one shape.

    ``is_compound`` marks paths whose even-odd fill already encodes an inner
    cutout (finder rings drawn as one path).
    """

    d: str
    is_compound: bool = False

    @property
    def empty(self) -> bool:
        return not self.d


def rect(x: float, y: float, w: float, h: float) -> str:
    return (
        f"M {fmt(x)} {fmt(y)} L {fmt(x + w)} {fmt(y)} "
        f"L {fmt(x + w)} {fmt(y + h)} L {fmt(x)} {fmt(y + h)} Z"
    )


def rounded_rect(x: float, y: float, w: float, h: float, r: float) -> str:
    """Rectangle with quadratic corners; ``r`` is clamped to half the shorter side."""
    r = min(r, w / 2, h / 2)
    return (
        f"M {fmt(x + r)} {fmt(y)} "
        f"L {fmt(x + w - r)} {fmt(y)} "
        f"Q {fmt(x + w)} {fmt(y)} {fmt(x + w)} {fmt(y + r)} "
        f"L {fmt(x + w)} {fmt(y + h - r)} "
        f"Q {fmt(x + w)} {fmt(y + h)} {fmt(x + w - r)} {fmt(y + h)} "
        f"L {fmt(x + r)} {fmt(y + h)} "
        f"Q {fmt(x)} {fmt(y + h)} {fmt(x)} {fmt(y + h - r)} "
        f"L {fmt(x)} {fmt(y + r)} "
        f"Q {fmt(x)} {fmt(y)} {fmt(x + r)} {fmt(y)} Z"
    )


def selective_rounded_rect(
    x: float, y: float, w: float, h: float, r: float, corners: Corners
) -> str:
    """Rounded rectangle where only the corners flagged in ``corners`` are curved."""
    r = min(r, w / 2, h / 2)
    parts: list[str] = []

    if corners.top_left:
        parts.append(f"M {fmt(x + r)} {fmt(y)}")
    else:
        parts.append(f"M {fmt(x)} {fmt(y)}")

    if corners.top_right:
        parts.append(
            f"L {fmt(x + w - r)} {fmt(y)} Q {fmt(x + w)} {fmt(y)} {fmt(x + w)} {fmt(y + r)}"
        )
    else:
        parts.append(f"L {fmt(x + w)} {fmt(y)}")

    if corners.bottom_right:
        parts.append(
            f"L {fmt(x + w)} {fmt(y + h - r)} "
            f"Q {fmt(x + w)} {fmt(y + h)} {fmt(x + w - r)} {fmt(y + h)}"
        )
    else:
        parts.append(f"L {fmt(x + w)} {fmt(y + h)}")

    if corners.bottom_left:
        parts.append(
            f"L {fmt(x + r)} {fmt(y + h)} Q {fmt(x)} {fmt(y + h)} {fmt(x)} {fmt(y + h - r)}"
        )
    else:
        parts.append(f"L {fmt(x)} {fmt(y + h)}")

    if corners.top_left:
        parts.append(f"L {fmt(x)} {fmt(y + r)} Q {fmt(x)} {fmt(y)} {fmt(x + r)} {fmt(y)}")
    else:
        parts.append(f"L {fmt(x)} {fmt(y)}")

    return " ".join(parts) + " Z"


def circle(cx: float, cy: float, r: float) -> str:
    """Full circle as two 180-degree arcs, left point to right point and back."""
    return (
        f"M {fmt(cx - r)} {fmt(cy)} "
        f"A {fmt(r)} {fmt(r)} 0 1 1 {fmt(cx + r)} {fmt(cy)} "
        f"A {fmt(r)} {fmt(r)} 0 1 1 {fmt(cx - r)} {fmt(cy)}"
    )


def polygon(points: list[tuple[float, float]]) -> str:
    head, *rest = points
    parts = [f"M {fmt(head[0])} {fmt(head[1])}"]
    parts.extend(f"L {fmt(px)} {fmt(py)}" for px, py in rest)
    return " ".join(parts) + " Z"


def diamond(x: float, y: float, size: float) -> str:
    """Four-point polygon through the edge midpoints of the square."""
    cx = x + size / 2
    cy = y + size / 2
    return f"M {fmt(cx)} {fmt(y)} L {fmt(x + size)} {fmt(cy)} L {fmt(cx)} {fmt(y + size)} L {fmt(x)} {fmt(cy)} Z"


def star_points(
    cx: float, cy: float, outer_r: float, inner_r: float, points: int
) -> list[tuple[float, float]]:
    """Alternating outer/inner vertices, first vertex straight up."""
    vertices = []
    for i in range(points * 2):
        r = outer_r if i % 2 == 0 else inner_r
        angle = i * math.pi / points - math.pi / 2
        vertices.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return vertices


def star(cx: float, cy: float, outer_r: float, inner_r: float, points: int = 5) -> str:
    return polygon(star_points(cx, cy, outer_r, inner_r, points))


def octagon(x: float, y: float, size: float, cut_ratio: float = 0.3) -> str:
    cut = size * cut_ratio
    return polygon([
        (x + cut, y),
        (x + size - cut, y),
        (x + size, y + cut),
        (x + size, y + size - cut),
        (x + size - cut, y + size),
        (x + cut, y + size),
        (x, y + size - cut),
        (x, y + cut),
    ])


def eye(x: float, y: float, size: float) -> str:
    """Lens shape pointing left and right."""
    cx = x + size / 2
    cy = y + size / 2
    return (
        f"M {fmt(x)} {fmt(cy)} "
        f"Q {fmt(cx)} {fmt(y)} {fmt(x + size)} {fmt(cy)} "
        f"Q {fmt(cx)} {fmt(y + size)} {fmt(x)} {fmt(cy)} Z"
    )


def heart(x: float, y: float, size: float) -> str:
    cx = x + size / 2
    s = size
    return (
        f"M {fmt(cx)} {fmt(y + s * 0.25)} "
        f"C {fmt(cx)} {fmt(y + s * 0.15)} {fmt(cx - s * 0.25)} {fmt(y + s * 0.05)} "
        f"{fmt(cx - s * 0.35)} {fmt(y + s * 0.2)} "
        f"C {fmt(cx - s * 0.5)} {fmt(y + s * 0.4)} {fmt(cx)} {fmt(y + s * 0.65)} "
        f"{fmt(cx)} {fmt(y + s * 0.85)} "
        f"C {fmt(cx)} {fmt(y + s * 0.65)} {fmt(cx + s * 0.5)} {fmt(y + s * 0.4)} "
        f"{fmt(cx + s * 0.35)} {fmt(y + s * 0.2)} "
        f"C {fmt(cx + s * 0.25)} {fmt(y + s * 0.05)} {fmt(cx)} {fmt(y + s * 0.15)} "
        f"{fmt(cx)} {fmt(y + s * 0.25)} Z"
    )


def whirlpool(x: float, y: float, size: float, r_ratio: float, offset_ratio: float, arc_ratio: float) -> str:
    """Four offset arcs forming a swirl.

    ``r_ratio`` scales the half-size, ``offset_ratio`` is the swirl offset as a
    fraction of ``size`` and ``arc_ratio`` scales the arc radius.
    """
    cx = x + size / 2
    cy = y + size / 2
    r = size / 2 * r_ratio
    off = size * offset_ratio
    ar = fmt(r * arc_ratio)
    return (
        f"M {fmt(cx - r + off)} {fmt(cy - off)} "
        f"A {ar} {ar} 0 0 1 {fmt(cx + off)} {fmt(cy - r + off)} "
        f"A {ar} {ar} 0 0 1 {fmt(cx + r - off)} {fmt(cy + off)} "
        f"A {ar} {ar} 0 0 1 {fmt(cx - off)} {fmt(cy + r - off)} "
        f"A {ar} {ar} 0 0 1 {fmt(cx - r + off)} {fmt(cy - off)} Z"
    )


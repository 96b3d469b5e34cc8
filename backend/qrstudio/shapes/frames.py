"""Frames: border and caption decorations around the QR body.

A frame draws into two slots. ``before_qr`` goes under the modules (corner
brackets, icons), ``after_qr`` goes on top (captions, banners). Coordinates
are fractions of the full output size; the QR itself is not shrunk.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from qrstudio.shapes import catalog
from qrstudio.shapes.paths import fmt, star_points
from qrstudio.svg.builder import drop_shadow_filter, element

SHADOW_ID = "frameShadow"


class FrameType(str, enum.Enum):
    NONE = "none"
    SCAN_ME = "scan-me"
    FOUR_CORNERS_TEXT_BOTTOM = "four-corners-text-bottom"
    ROUNDED_FRAME = "rounded-frame"
    BANNER_BOTTOM = "banner-bottom"
    HEALTHCARE = "healthcare"
    WIFI_CONNECT = "wifi-connect"
    REVIEW_COLLECTOR = "review-collector"
    SOCIAL_FOLLOW = "social-follow"
    TICKET = "ticket"


DEFAULT_CAPTION: dict[FrameType, str] = {
    FrameType.SCAN_ME: "SCAN ME",
    FrameType.FOUR_CORNERS_TEXT_BOTTOM: "SCAN HERE",
    FrameType.ROUNDED_FRAME: "SCAN TO VIEW",
    FrameType.BANNER_BOTTOM: "SCAN QR CODE",
    FrameType.HEALTHCARE: "HEALTH INFO",
    FrameType.WIFI_CONNECT: "CONNECT TO WIFI",
    FrameType.REVIEW_COLLECTOR: "LEAVE A REVIEW",
    FrameType.SOCIAL_FOLLOW: "FOLLOW US",
    FrameType.TICKET: "SCAN TICKET",
}
FALLBACK_CAPTION = "SCAN ME"


@dataclass(frozen=True)
class FrameFragment:
    before_qr: str = ""
    after_qr: str = ""
    defs: str = ""


# (size, color, text_color, text, shadow) -> (before_qr, after_qr)
FrameTemplate = Callable[[float, str, str, str, "str | None"], tuple[str, str]]


def _caption(size: float, y: float, font_size: float, fill: str, text: str, weight: str = "bold", shadow: str | None = None) -> str:
    return element("text", {
        "x": size / 2,
        "y": y,
        "font_family": "Arial, sans-serif",
        "font_size": font_size,
        "font_weight": weight,
        "fill": fill,
        "text_anchor": "middle",
        "filter": shadow,
    }, text=text)


def _bottom_caption(size: float, fill: str, text: str) -> str:
    """Small caption near the bottom edge shared by the icon frames."""
    return _caption(size, size - size * 0.04, size * 0.04, fill, text)


def scan_me(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    return "", _caption(size, size - size * 0.05, size * 0.06, text_color, text, shadow=shadow)


def four_corners_text_bottom(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    corner = size * 0.08
    pad = size * 0.05
    font = size * 0.05
    low = size - pad - font * 1.5
    stroke = {"stroke": color, "stroke_width": 3, "fill": "none", "stroke_linecap": "round"}
    brackets = [
        f"M {fmt(pad)} {fmt(pad + corner)} L {fmt(pad)} {fmt(pad)} L {fmt(pad + corner)} {fmt(pad)}",
        f"M {fmt(size - pad - corner)} {fmt(pad)} L {fmt(size - pad)} {fmt(pad)} L {fmt(size - pad)} {fmt(pad + corner)}",
        f"M {fmt(pad)} {fmt(size - pad - corner - font)} L {fmt(pad)} {fmt(low)} L {fmt(pad + corner)} {fmt(low)}",
        f"M {fmt(size - pad - corner)} {fmt(low)} L {fmt(size - pad)} {fmt(low)} "
        f"L {fmt(size - pad)} {fmt(size - pad - corner - font)}",
    ]
    before = "".join(element("path", {"d": d, **stroke}) for d in brackets)
    return before, _caption(size, size - pad, font, text_color, text)


def rounded_frame(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    pad = size * 0.03
    radius = size * 0.05
    font = size * 0.045
    border = element("rect", {
        "x": pad,
        "y": pad,
        "width": size - pad * 2,
        "height": size - pad * 2 - font * 1.5,
        "rx": radius,
        "ry": radius,
        "stroke": color,
        "stroke_width": 2,
        "fill": "none",
        "filter": shadow,
    })
    return border, _caption(size, size - pad * 2, font, text_color, text, weight="600")


def banner_bottom(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    height = size * 0.12
    top = size - height
    banner = element("rect", {"x": 0, "y": top, "width": size, "height": height, "fill": color, "filter": shadow})
    return "", banner + _caption(size, top + height * 0.65, size * 0.05, text_color, text)


def healthcare(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    """Medical cross centered above the QR."""
    cross = size * 0.08
    cx = size / 2
    cy = size * 0.06
    bars = [
        element("rect", {
            "x": cx - cross * 0.15, "y": cy - cross * 0.4,
            "width": cross * 0.3, "height": cross * 0.8, "fill": color, "rx": 2,
        }),
        element("rect", {
            "x": cx - cross * 0.4, "y": cy - cross * 0.15,
            "width": cross * 0.8, "height": cross * 0.3, "fill": color, "rx": 2,
        }),
    ]
    return element("g", {"filter": shadow}, bars), _bottom_caption(size, text_color, text)


def wifi_connect(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    icon = size * 0.1
    stroke = {"stroke": color, "stroke_width": 2.5, "fill": "none", "stroke_linecap": "round"}
    outer = fmt(icon * 0.5)
    inner = fmt(icon * 0.3)
    parts = [
        element("path", {"d": f"M 0 {fmt(icon * 0.3)} A {outer} {outer} 0 0 1 0 {fmt(-icon * 0.2)}", **stroke}),
        element("path", {"d": f"M 0 {fmt(icon * 0.15)} A {inner} {inner} 0 0 1 0 {fmt(-icon * 0.05)}", **stroke}),
        element("circle", {"cx": 0, "cy": icon * 0.35, "r": icon * 0.08, "fill": color}),
    ]
    group = element("g", {"transform": f"translate({fmt(size / 2)}, {fmt(size * 0.08)})", "filter": shadow}, parts)
    return group, _bottom_caption(size, text_color, text)


def review_collector(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    """Row of five stars above the QR."""
    star_size = size * 0.04
    star_y = size * 0.06
    stars = []
    for i in range(5):
        star_x = size / 2 + (i - 2) * star_size * 1.5
        points = star_points(star_x, star_y, star_size, star_size * 0.4, 5)
        d = " ".join(f"{'M' if j == 0 else 'L'} {fmt(px)} {fmt(py)}" for j, (px, py) in enumerate(points)) + " Z"
        stars.append(element("path", {"d": d, "fill": color}))
    return element("g", {"filter": shadow}, stars), _bottom_caption(size, text_color, text)


def social_follow(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    icon = _caption(size, size * 0.08, size * 0.06, color, "@", shadow=shadow)
    return icon, _bottom_caption(size, text_color, text)


def ticket(size: float, color: str, text_color: str, text: str, shadow: str | None) -> tuple[str, str]:
    """Dashed ticket outline with notches on the top corners."""
    pad = size * 0.02
    notch = size * 0.03
    font = size * 0.04
    n = fmt(notch)
    d = (
        f"M {fmt(pad + notch)} {fmt(pad)} "
        f"L {fmt(size - pad - notch)} {fmt(pad)} "
        f"A {n} {n} 0 0 0 {fmt(size - pad - notch)} {fmt(pad + notch * 2)} "
        f"L {fmt(size - pad - notch)} {fmt(size - pad - font * 2)} "
        f"L {fmt(pad + notch)} {fmt(size - pad - font * 2)} "
        f"L {fmt(pad + notch)} {fmt(pad + notch * 2)} "
        f"A {n} {n} 0 0 0 {fmt(pad + notch)} {fmt(pad)} Z"
    )
    border = element("path", {
        "d": d,
        "stroke": color,
        "stroke_width": 2,
        "fill": "none",
        "stroke_dasharray": "5,3",
        "filter": shadow,
    })
    return border, _bottom_caption(size, text_color, text)


TEMPLATES: dict[FrameType, FrameTemplate | None] = {
    FrameType.NONE: None,
    FrameType.SCAN_ME: scan_me,
    FrameType.FOUR_CORNERS_TEXT_BOTTOM: four_corners_text_bottom,
    FrameType.ROUNDED_FRAME: rounded_frame,
    FrameType.BANNER_BOTTOM: banner_bottom,
    FrameType.HEALTHCARE: healthcare,
    FrameType.WIFI_CONNECT: wifi_connect,
    FrameType.REVIEW_COLLECTOR: review_collector,
    FrameType.SOCIAL_FOLLOW: social_follow,
    FrameType.TICKET: ticket,
}
catalog.check_exhaustive(FrameType, TEMPLATES)

_INDEX = catalog.build_index(FrameType, {})


def find_frame(name: object) -> FrameType | None:
    return catalog.find(name, _INDEX)


def resolve_frame(name: object) -> tuple[FrameType, str | None]:
    return catalog.resolve(name, _INDEX, FrameType.NONE, "frame")


def render_frame(
    frame: FrameType,
    size: float,
    color: str,
    text_color: str,
    text: str | None,
    drop_shadow: bool = False,
) -> FrameFragment:
    template = TEMPLATES[frame]
    if template is None:
        return FrameFragment()
    caption = text or DEFAULT_CAPTION.get(frame, FALLBACK_CAPTION)
    shadow = f"url(#{SHADOW_ID})" if drop_shadow else None
    before, after = template(size, color, text_color, caption, shadow)
    defs = drop_shadow_filter(SHADOW_ID, region=20, dx=2, dy=2, blur=3, color="rgba(0,0,0,0.3)") if drop_shadow else ""
    return FrameFragment(before_qr=before, after_qr=after, defs=defs)

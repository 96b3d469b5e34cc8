"""Center stickers: badges drawn on top of the QR body.

Each template takes ``(cx, cy, size, color, text_color, text)`` and returns
the sticker's SVG group content. ``render_sticker`` wraps it in a ``<g>``
and attaches the optional drop-shadow filter.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from qrstudio.shapes import catalog
from qrstudio.shapes.paths import fmt, star_points
from qrstudio.svg.builder import drop_shadow_filter, element

SHADOW_ID = "stickerShadow"


class StickerType(str, enum.Enum):
    NONE = "none"
    COUPON = "coupon"
    SALE = "sale"
    DISCOUNT = "discount"
    NEW = "new"
    HOT = "hot"
    STAR_BADGE = "star-badge"
    HEART_BADGE = "heart-badge"
    CHECK_BADGE = "check-badge"
    INFO_BADGE = "info-badge"
    GIFT_BADGE = "gift-badge"
    LOCATION_PIN = "location-pin"
    QR_DETAILS = "qr-details"
    PINCODE_PROTECTED = "pincode-protected"
    WIFI_BADGE = "wifi-badge"
    SCAN_BADGE = "scan-badge"


DEFAULT_TEXT: dict[StickerType, str] = {
    StickerType.COUPON: "COUPON",
    StickerType.SALE: "SALE",
    StickerType.DISCOUNT: "-20%",
    StickerType.NEW: "NEW",
    StickerType.HOT: "HOT",
    StickerType.INFO_BADGE: "i",
    StickerType.QR_DETAILS: "QR",
    StickerType.SCAN_BADGE: "SCAN",
}

# Used only when the caller passes no color at all.
DEFAULT_COLOR: dict[StickerType, str] = {
    StickerType.NEW: "#00C853",
    StickerType.HOT: "#FF5722",
    StickerType.STAR_BADGE: "#FFD700",
    StickerType.HEART_BADGE: "#E91E63",
    StickerType.CHECK_BADGE: "#4CAF50",
    StickerType.INFO_BADGE: "#2196F3",
    StickerType.GIFT_BADGE: "#E91E63",
    StickerType.LOCATION_PIN: "#F44336",
    StickerType.QR_DETAILS: "#333333",
    StickerType.PINCODE_PROTECTED: "#FFB300",
    StickerType.WIFI_BADGE: "#2196F3",
    StickerType.SCAN_BADGE: "#FFFFFF",
}
FALLBACK_COLOR = "#FF4444"

StickerTemplate = Callable[[float, float, float, str, str, str], str]


@dataclass(frozen=True)
class StickerFragment:
    element: str = ""
    defs: str = ""


def _label(cx: float, cy: float, font_size: float, fill: str, text: str, family: str = "Arial, sans-serif", **extra) -> str:
    """Bold centered text; the baseline sits 0.35 em below the center."""
    attrs = {
        "x": cx,
        "y": cy + font_size * 0.35,
        "font_family": family,
        "font_size": font_size,
        "font_weight": "bold",
        **extra,
        "fill": fill,
        "text_anchor": "middle",
    }
    return element("text", attrs, text=text)


def _polygon_d(points: list[tuple[float, float]]) -> str:
    return " ".join(f"{'M' if i == 0 else 'L'} {fmt(px)} {fmt(py)}" for i, (px, py) in enumerate(points)) + " Z"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def coupon(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    """Ticket with a semicircular notch at each corner of the long edges."""
    x = cx - size / 2
    y = cy - size / 2
    notch = size * 0.08
    n = fmt(notch)
    d = (
        f"M {fmt(x + notch)} {fmt(y)} "
        f"L {fmt(x + size - notch)} {fmt(y)} "
        f"A {n} {n} 0 0 0 {fmt(x + size - notch)} {fmt(y + notch * 2)} "
        f"L {fmt(x + size - notch)} {fmt(y + size - notch * 2)} "
        f"A {n} {n} 0 0 0 {fmt(x + size - notch)} {fmt(y + size)} "
        f"L {fmt(x + notch)} {fmt(y + size)} "
        f"A {n} {n} 0 0 0 {fmt(x + notch)} {fmt(y + size - notch * 2)} "
        f"L {fmt(x + notch)} {fmt(y + notch * 2)} "
        f"A {n} {n} 0 0 0 {fmt(x + notch)} {fmt(y)} Z"
    )
    return element("path", {"d": d, "fill": color}) + _label(cx, cy, size * 0.25, text_color, text)


def _circle_badge(radius_ratio: float, font_ratio: float) -> StickerTemplate:
    def template(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
        disc = element("circle", {"cx": cx, "cy": cy, "r": size / 2 * radius_ratio, "fill": color})
        return disc + _label(cx, cy, size * font_ratio, text_color, text)

    return template


def discount(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    """Twelve-point starburst."""
    outer_r = size / 2 * 0.95
    d = _polygon_d(star_points(cx, cy, outer_r, outer_r * 0.75, 12))
    return element("path", {"d": d, "fill": color}) + _label(cx, cy, size * 0.25, text_color, text)


def star_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    outer_r = size / 2 * 0.9
    d = _polygon_d(star_points(cx, cy, outer_r, outer_r * 0.4, 5))
    return element("path", {"d": d, "fill": color})


def heart_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    y = cy - size / 2
    w = size * 0.8
    d = (
        f"M {fmt(cx)} {fmt(y + size * 0.3)} "
        f"C {fmt(cx)} {fmt(y + size * 0.15)} {fmt(cx - w * 0.3)} {fmt(y + size * 0.1)} "
        f"{fmt(cx - w * 0.4)} {fmt(y + size * 0.25)} "
        f"C {fmt(cx - w * 0.55)} {fmt(y + size * 0.45)} {fmt(cx)} {fmt(y + size * 0.7)} "
        f"{fmt(cx)} {fmt(y + size * 0.85)} "
        f"C {fmt(cx)} {fmt(y + size * 0.7)} {fmt(cx + w * 0.55)} {fmt(y + size * 0.45)} "
        f"{fmt(cx + w * 0.4)} {fmt(y + size * 0.25)} "
        f"C {fmt(cx + w * 0.3)} {fmt(y + size * 0.1)} {fmt(cx)} {fmt(y + size * 0.15)} "
        f"{fmt(cx)} {fmt(y + size * 0.3)} Z"
    )
    return element("path", {"d": d, "fill": color})


def check_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    check = size * 0.4
    x0 = cx - check * 0.5
    y0 = cy - check * 0.2
    d = (
        f"M {fmt(x0)} {fmt(y0 + check * 0.5)} "
        f"L {fmt(x0 + check * 0.35)} {fmt(y0 + check * 0.85)} "
        f"L {fmt(x0 + check)} {fmt(y0 + check * 0.15)}"
    )
    return element("circle", {"cx": cx, "cy": cy, "r": size / 2 * 0.85, "fill": color}) + element(
        "path",
        {
            "d": d,
            "stroke": text_color,
            "stroke_width": size * 0.08,
            "stroke_linecap": "round",
            "stroke_linejoin": "round",
            "fill": "none",
        },
    )


def info_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    disc = element("circle", {"cx": cx, "cy": cy, "r": size / 2 * 0.85, "fill": color})
    return disc + _label(cx, cy, size * 0.5, text_color, "i", family="Georgia, serif", font_style="italic")


def gift_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    box = size * 0.6
    ribbon = size * 0.12
    box_x = cx - box / 2
    box_y = cy - box / 2 + size * 0.1
    bows = [
        element("ellipse", {
            "cx": bow_x,
            "cy": box_y - size * 0.05,
            "rx": size * 0.12,
            "ry": size * 0.08,
            "fill": text_color,
        })
        for bow_x in (cx - box * 0.2, cx + box * 0.2)
    ]
    return "".join(bows) + "".join([
        element("rect", {"x": box_x, "y": box_y, "width": box, "height": box * 0.85, "rx": size * 0.05, "fill": color}),
        element("rect", {"x": cx - ribbon / 2, "y": box_y, "width": ribbon, "height": box * 0.85, "fill": text_color}),
        element("rect", {"x": box_x, "y": cy - ribbon / 2 + size * 0.05, "width": box, "height": ribbon, "fill": text_color}),
    ])


def location_pin(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    y = cy - size / 2
    half_w = size * 0.6 * 0.5
    d = (
        f"M {fmt(cx)} {fmt(y + size * 0.1)} "
        f"C {fmt(cx - half_w)} {fmt(y + size * 0.1)} {fmt(cx - half_w)} {fmt(y + size * 0.5)} "
        f"{fmt(cx)} {fmt(y + size * 0.9)} "
        f"C {fmt(cx + half_w)} {fmt(y + size * 0.5)} {fmt(cx + half_w)} {fmt(y + size * 0.1)} "
        f"{fmt(cx)} {fmt(y + size * 0.1)} Z"
    )
    return element("path", {"d": d, "fill": color}) + element(
        "circle", {"cx": cx, "cy": y + size * 0.35, "r": size * 0.12, "fill": text_color}
    )


def pincode_protected(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    """Padlock: arched shackle, body and keyhole."""
    lock_w = size * 0.5
    lock_h = size * 0.4
    lock_x = cx - lock_w / 2
    lock_y = cy - lock_h * 0.3
    arc = fmt(lock_w * 0.3)
    shackle = (
        f"M {fmt(cx - lock_w * 0.3)} {fmt(lock_y)} "
        f"L {fmt(cx - lock_w * 0.3)} {fmt(lock_y - lock_h * 0.4)} "
        f"A {arc} {arc} 0 0 1 {fmt(cx + lock_w * 0.3)} {fmt(lock_y - lock_h * 0.4)} "
        f"L {fmt(cx + lock_w * 0.3)} {fmt(lock_y)}"
    )
    return "".join([
        element("path", {
            "d": shackle,
            "stroke": color,
            "stroke_width": size * 0.08,
            "stroke_linecap": "round",
            "fill": "none",
        }),
        element("rect", {"x": lock_x, "y": lock_y, "width": lock_w, "height": lock_h, "rx": size * 0.05, "fill": color}),
        element("circle", {"cx": cx, "cy": lock_y + lock_h * 0.4, "r": size * 0.06, "fill": text_color}),
        element("rect", {
            "x": cx - size * 0.03,
            "y": lock_y + lock_h * 0.4,
            "width": size * 0.06,
            "height": lock_h * 0.35,
            "fill": text_color,
        }),
    ])


def wifi_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    stroke = {"stroke": text_color, "stroke_width": size * 0.06, "fill": "none", "stroke_linecap": "round"}
    big = fmt(size * 0.35)
    small = fmt(size * 0.2)
    arcs = [
        element("path", {"d": f"M 0 {fmt(-size * 0.25)} A {big} {big} 0 0 1 0 {fmt(size * 0.05)}", **stroke}),
        element("path", {"d": f"M 0 {fmt(-size * 0.15)} A {small} {small} 0 0 1 0 {fmt(size * 0.05)}", **stroke}),
        element("circle", {"cx": 0, "cy": size * 0.12, "r": size * 0.06, "fill": text_color}),
    ]
    return element("circle", {"cx": cx, "cy": cy, "r": size / 2 * 0.85, "fill": color}) + element(
        "g", {"transform": f"translate({fmt(cx)}, {fmt(cy + size * 0.1)})"}, arcs
    )


def scan_badge(cx: float, cy: float, size: float, color: str, text_color: str, text: str) -> str:
    """Light card with viewfinder corner brackets and a caption."""
    box = size * 0.75
    corner = size * 0.2
    inset = size * 0.05
    bx = cx - box / 2
    by = cy - box / 2
    stroke = {"stroke": text_color, "stroke_width": size * 0.04, "fill": "none", "stroke_linecap": "round"}
    brackets = [
        f"M {fmt(bx + inset)} {fmt(by + corner)} L {fmt(bx + inset)} {fmt(by + inset)} L {fmt(bx + corner)} {fmt(by + inset)}",
        f"M {fmt(bx + box - corner)} {fmt(by + inset)} L {fmt(bx + box - inset)} {fmt(by + inset)} "
        f"L {fmt(bx + box - inset)} {fmt(by + corner)}",
        f"M {fmt(bx + box - inset)} {fmt(by + box - corner)} L {fmt(bx + box - inset)} {fmt(by + box - inset)} "
        f"L {fmt(bx + box - corner)} {fmt(by + box - inset)}",
        f"M {fmt(bx + corner)} {fmt(by + box - inset)} L {fmt(bx + inset)} {fmt(by + box - inset)} "
        f"L {fmt(bx + inset)} {fmt(by + box - corner)}",
    ]
    card = element("rect", {
        "x": bx, "y": by, "width": box, "height": box, "rx": size * 0.05, "fill": color, "fill_opacity": 0.9,
    })
    return card + "".join(element("path", {"d": d, **stroke}) for d in brackets) + _label(
        cx, cy, size * 0.2, text_color, text
    )


TEMPLATES: dict[StickerType, StickerTemplate | None] = {
    StickerType.NONE: None,
    StickerType.COUPON: coupon,
    StickerType.SALE: _circle_badge(0.9, 0.3),
    StickerType.DISCOUNT: discount,
    StickerType.NEW: _circle_badge(0.85, 0.35),
    StickerType.HOT: _circle_badge(0.85, 0.3),
    StickerType.STAR_BADGE: star_badge,
    StickerType.HEART_BADGE: heart_badge,
    StickerType.CHECK_BADGE: check_badge,
    StickerType.INFO_BADGE: info_badge,
    StickerType.GIFT_BADGE: gift_badge,
    StickerType.LOCATION_PIN: location_pin,
    StickerType.QR_DETAILS: _circle_badge(0.85, 0.35),
    StickerType.PINCODE_PROTECTED: pincode_protected,
    StickerType.WIFI_BADGE: wifi_badge,
    StickerType.SCAN_BADGE: scan_badge,
}
catalog.check_exhaustive(StickerType, TEMPLATES)

ALIASES: dict[str, StickerType] = {
    "qrcode-details": StickerType.QR_DETAILS,
}

_INDEX = catalog.build_index(StickerType, ALIASES)


def find_sticker(name: object) -> StickerType | None:
    return catalog.find(name, _INDEX)


def resolve_sticker(name: object) -> tuple[StickerType, str | None]:
    return catalog.resolve(name, _INDEX, StickerType.NONE, "sticker")


def shadow_def() -> str:
    return drop_shadow_filter(SHADOW_ID, region=30, dx=2, dy=2, blur=4, color="rgba(0,0,0,0.4)")


def render_sticker(
    sticker: StickerType,
    cx: float,
    cy: float,
    size: float,
    color: str | None,
    text_color: str,
    text: str | None,
    drop_shadow: bool = False,
) -> StickerFragment:
    template = TEMPLATES[sticker]
    if template is None:
        return StickerFragment()
    fill = color or DEFAULT_COLOR.get(sticker, FALLBACK_COLOR)
    label = text if text else DEFAULT_TEXT.get(sticker, "")
    body = template(cx, cy, size, fill, text_color, label)
    group = element("g", {"filter": f"url(#{SHADOW_ID})" if drop_shadow else None}, [body])
    return StickerFragment(element=group, defs=shadow_def() if drop_shadow else "")


def sticker_box(output_size: float, scale: float) -> tuple[float, float, float]:
    """(cx, cy, side) of a centered sticker covering ``scale`` of the output."""
    side = output_size * scale
    origin = (output_size - side) / 2
    return origin + side / 2, origin + side / 2, side


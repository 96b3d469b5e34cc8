"""Tests for stickers, frames and logo placement."""

import pytest

from qrstudio.shapes.frames import FrameType, render_frame, resolve_frame
from qrstudio.shapes.logo import (
    LogoBackgroundShape,
    background_path,
    find_background_shape,
    image_element,
    place_logo,
)
from qrstudio.shapes.stickers import (
    SHADOW_ID,
    StickerType,
    render_sticker,
    resolve_sticker,
    sticker_box,
)
from tests.svg_geometry import path_bounds


@pytest.mark.parametrize("sticker", [s for s in StickerType if s is not StickerType.NONE])
def test_every_sticker_renders(sticker):
    fragment = render_sticker(sticker, 100, 100, 50, "#112233", "#FFFFFF", None)
    assert fragment.element.startswith("<g")
    assert fragment.defs == ""


def test_sticker_none_is_empty():
    fragment = render_sticker(StickerType.NONE, 100, 100, 50, "#112233", "#FFFFFF", "x")
    assert fragment.element == ""


def test_sticker_text_and_default_text():
    assert ">SALE<" in render_sticker(StickerType.SALE, 50, 50, 40, None, "#FFFFFF", None).element
    assert ">50% OFF<" in render_sticker(StickerType.SALE, 50, 50, 40, None, "#FFFFFF", "50% OFF").element


def test_sticker_text_is_escaped():
    element = render_sticker(StickerType.COUPON, 50, 50, 40, "#000000", "#FFFFFF", "<b>&").element
    assert "&lt;b&gt;&amp;" in element


def test_sticker_default_color_only_without_color():
    assert "#00C853" in render_sticker(StickerType.NEW, 50, 50, 40, None, "#FFFFFF", None).element
    assert "#00C853" not in render_sticker(StickerType.NEW, 50, 50, 40, "#123456", "#FFFFFF", None).element


def test_sticker_drop_shadow():
    fragment = render_sticker(StickerType.STAR_BADGE, 50, 50, 40, "#FFD700", "#FFFFFF", None, drop_shadow=True)
    assert f'filter="url(#{SHADOW_ID})"' in fragment.element
    assert f'id="{SHADOW_ID}"' in fragment.defs


def test_sticker_lookup():
    assert resolve_sticker("qrcode-details") == (StickerType.QR_DETAILS, None)
    sticker, warning = resolve_sticker("balloon")
    assert sticker is StickerType.NONE
    assert warning


def test_sticker_box_is_centered():
    cx, cy, side = sticker_box(400, 0.25)
    assert (cx, cy, side) == (200, 200, 100)


@pytest.mark.parametrize("frame", [f for f in FrameType if f is not FrameType.NONE])
def test_every_frame_renders(frame):
    fragment = render_frame(frame, 512, "#000000", "#FFFFFF", None)
    assert fragment.before_qr or fragment.after_qr
    assert fragment.defs == ""


def test_frame_caption():
    fragment = render_frame(FrameType.SCAN_ME, 512, "#000000", "#FFFFFF", "HELLO")
    assert "HELLO" in fragment.before_qr + fragment.after_qr
    default = render_frame(FrameType.SOCIAL_FOLLOW, 512, "#000000", "#FFFFFF", None)
    assert "FOLLOW US" in default.before_qr + default.after_qr


def test_frame_shadow_def():
    fragment = render_frame(FrameType.ROUNDED_FRAME, 512, "#000000", "#FFFFFF", None, drop_shadow=True)
    assert "feDropShadow" in fragment.defs


def test_frame_unknown_is_none():
    frame, warning = resolve_frame("polaroid")
    assert frame is FrameType.NONE
    assert warning
    assert render_frame(frame, 512, "#000000", "#FFFFFF", None).before_qr == ""


def test_logo_placement_centered():
    placement = place_logo(500, 0.2)
    assert (placement.x, placement.y, placement.size) == (200, 200, 100)
    assert placement.transform is None


def test_logo_rotation_transform():
    placement = place_logo(500, 0.2, rotate=45)
    assert placement.transform == "rotate(45 250 250)"


def test_logo_background_plates():
    placement = place_logo(500, 0.2)
    plate = background_path(LogoBackgroundShape.CIRCLE, placement, 1.5)
    assert path_bounds(plate.d) == pytest.approx((175, 175, 325, 325))
    square = background_path(LogoBackgroundShape.SQUARE, placement, 1.5)
    assert path_bounds(square.d) == pytest.approx((175, 175, 325, 325))
    assert background_path(LogoBackgroundShape.NONE, placement, 1.5).empty


def test_plate_ignores_logo_rotation():
    upright = place_logo(500, 0.2)
    rotated = place_logo(500, 0.2, rotate=30)
    for shape in (LogoBackgroundShape.SQUARE, LogoBackgroundShape.ROUNDED, LogoBackgroundShape.CIRCLE):
        assert background_path(shape, rotated, 1.5) == background_path(shape, upright, 1.5)


def test_background_shape_aliases():
    assert find_background_shape("rounded-square") is LogoBackgroundShape.ROUNDED
    assert find_background_shape("hexagon") is None


def test_image_element():
    img = image_element(place_logo(500, 0.2), "image/png", "AAAA")
    assert 'href="data:image/png;base64,AAAA"' in img
    assert 'preserveAspectRatio="xMidYMid meet"' in img

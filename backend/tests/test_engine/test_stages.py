"""Tests for individual render stages."""

from qrstudio.engine.composer import compose
from qrstudio.engine.pipeline import create_pipeline
from qrstudio.engine.stages.s005_color import color_stage
from qrstudio.engine.stages.s008_finders import finder_stage
from qrstudio.engine.stages.s105_sticker import has_sticker, sticker_stage
from qrstudio.engine.stages.s110_frame import frame_stage, frame_type, has_frame
from qrstudio.engine.stages.s200_logo import has_logo, logo_stage
from qrstudio.shapes.finders import FinderDotShape, FinderShape, finder_pattern
from qrstudio.shapes.frames import FrameType
from tests.conftest import PNG_DATA_URI, make_context


def test_color_stage_canonicalizes():
    ctx = make_context({"foregroundColor": "#abc", "backgroundColor": "white", "eyeColor": "rgb(255,0,0)"})
    color_stage(ctx)
    assert ctx.foreground_fill == "#AABBCC"
    assert ctx.background_color == "#FFFFFF"
    assert ctx.eye_internal_color == ctx.eye_external_color == "#FF0000"


def test_empty_finder_dot_follows_finder():
    ctx = make_context({"finder": "octagon", "finderDot": ""})
    finder_stage(ctx)
    expected = finder_pattern(FinderShape.OCTAGON, FinderDotShape.OCTAGON, ctx.origin, ctx.origin, ctx.module_size)
    assert ctx.finders[0].dot == expected.dot


def test_empty_finder_dot_for_ring_only_shape():
    ctx = make_context({"finder": "leaf", "finderDot": ""})
    finder_stage(ctx)
    expected = finder_pattern(FinderShape.LEAF, FinderDotShape.SQUARE, ctx.origin, ctx.origin, ctx.module_size)
    assert ctx.finders[0].dot == expected.dot
    assert ctx.warnings == []


def test_sticker_stage_uses_frame_color():
    ctx = make_context({"advancedShape": "check-badge", "advancedShapeFrameColor": "#123456", "stickerText": "OK"})
    assert has_sticker(ctx)
    sticker_stage(ctx)
    assert "#123456" in ctx.sticker.element
    assert ctx.document.defs == []


def test_sticker_shadow_adds_def_once():
    ctx = make_context({"stickerType": "new", "advancedShapeDropShadow": True})
    sticker_stage(ctx)
    sticker_stage(ctx)
    assert len(ctx.document.defs) == 1
    assert "stickerShadow" in ctx.document.defs[0]


def test_frame_key_fallback():
    ctx = make_context({"frame": "ticket", "frameColor": "#00AA00"})
    assert frame_type(ctx) is FrameType.TICKET
    frame_stage(ctx)
    assert "#00AA00" in ctx.frame.before_qr + ctx.frame.after_qr


def test_no_decorations_by_default():
    ctx = make_context()
    assert not has_sticker(ctx)
    assert not has_frame(ctx)
    assert not has_logo(ctx)


def test_logo_stage_plate_and_image():
    ctx = make_context({"logo": PNG_DATA_URI, "logoBackgroundFill": "#EEEEEE", "logoRotate": 15})
    logo_stage(ctx)
    assert ctx.logo.startswith("<path")
    assert 'fill="#EEEEEE"' in ctx.logo
    assert "rotate(15 145 145)" in ctx.logo
    plate, image = ctx.logo.split("<image", 1)
    assert "transform" not in plate
    assert "rotate(15 145 145)" in image


def test_logo_stage_without_plate():
    ctx = make_context({"logo": PNG_DATA_URI, "logoBackground": False})
    logo_stage(ctx)
    assert ctx.logo.startswith("<image")


def test_compose_draw_order():
    ctx = make_context({
        "advancedShape": "banner-bottom",
        "stickerType": "hot",
        "logo": PNG_DATA_URI,
        "foregroundColor": "#010203",
    })
    create_pipeline().run(ctx)
    svg = compose(ctx)
    positions = [
        svg.index("<rect x=\"0\" y=\"0\""),
        svg.index('fill="#010203"'),
        svg.index(">HOT<"),
        svg.index("<image"),
        svg.index(">SCAN QR CODE<"),
    ]
    assert positions == sorted(positions)

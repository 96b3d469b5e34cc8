"""Tests for design normalization."""

import pytest

from qrstudio.engine.normalizer import canonical_key, canonicalize, classify_advanced_shape, normalize
from qrstudio.errors import ValidationError
from qrstudio.models.design import DEFAULT_DESIGN, DesignConfig


def test_none_gives_defaults():
    design = normalize(None)
    assert design is DEFAULT_DESIGN
    assert design.foreground_color == "#000000"
    assert design.background_color == "#FFFFFF"
    assert design.module == "square"
    assert design.margin == 4
    assert design.size == 512


@pytest.mark.parametrize("raw_key, canonical", [
    ("modules_shape", "module"),
    ("eye_shape", "finder"),
    ("finders_dots_shape", "finderDot"),
    ("fg_color", "foregroundColor"),
    ("logo_size", "logoScale"),
    ("sticker", "advancedShape"),
    ("error_correction", "errorCorrection"),
    ("logoBackgroundShape", "logoBackgroundShape"),
])
def test_key_aliases(raw_key, canonical):
    assert canonical_key(raw_key) == canonical


def test_alias_values_reach_fields():
    design = normalize({"fg_color": "#FF0000", "modules_shape": "dot", "eye_shape": "circle", "logo_size": 0.3})
    assert design.foreground_color == "#FF0000"
    assert design.module == "dot"
    assert design.finder == "circle"
    assert design.logo_scale == 0.3


def test_canonical_key_beats_alias():
    assert canonicalize({"module": "dot", "modules_shape": "star"})["module"] == "dot"
    assert canonicalize({"modules_shape": "star", "module": "dot"})["module"] == "dot"


def test_unknown_keys_survive_as_extras():
    design = normalize({"stickerText": "HI", "frame_text": "SCAN"})
    assert design.get("stickerText") == "HI"
    assert design.get("frameText") == "SCAN"


def test_normalize_is_idempotent():
    raw = {"fg_color": "#123456", "modules_shape": "classy", "eye_color": "#FF0000", "stickerText": "x"}
    once = normalize(raw)
    twice = normalize(once.to_wire())
    assert once == twice
    assert normalize(once) is once


def test_eye_color_fills_both_eyes():
    design = normalize({"eyeColor": "#00FF00"})
    assert design.eye_internal_color == "#00FF00"
    assert design.eye_external_color == "#00FF00"
    explicit = normalize({"eyeColor": "#00FF00", "eyeInternalColor": "#0000FF"})
    assert explicit.eye_internal_color == "#0000FF"
    assert explicit.eye_external_color == "#000000"


def test_flat_gradient_keys_build_descriptor():
    design = normalize({"gradient_start_color": "#000", "gradient_end_color": "#FFF", "gradient_angle": 90})
    assert design.gradient_fill == {"type": "LINEAR", "colors": ["#000", "#FFF"], "angle": 90}


def test_nulls_fall_back_to_defaults():
    design = normalize({"foregroundColor": None, "margin": None})
    assert design.foreground_color == "#000000"
    assert design.margin == 4


def test_bad_types_raise_validation_error():
    with pytest.raises(ValidationError) as exc:
        normalize({"margin": "wide"})
    assert exc.value.issues[0]["field"] == "margin"
    with pytest.raises(ValidationError):
        normalize(["not", "a", "dict"])


def test_get_and_first():
    design = DesignConfig.merge(DEFAULT_DESIGN, {"frameColor": "#111111"})
    assert design.get("logoScale") == 0.2
    assert design.get("logo_scale") == 0.2
    assert design.get("missing", "fallback") == "fallback"
    assert design.first("stickerColor", "frameColor") == "#111111"


def test_classify_advanced_shape():
    assert classify_advanced_shape("star-badge") == ("sticker", None)
    assert classify_advanced_shape("banner-bottom") == ("frame", None)
    assert classify_advanced_shape("none") == (None, None)
    kind, warning = classify_advanced_shape("confetti")
    assert kind is None
    assert "confetti" in warning

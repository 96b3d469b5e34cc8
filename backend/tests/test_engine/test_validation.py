"""Tests for pre-flight design validation."""

from qrstudio.engine.validation import validate_design
from tests.conftest import fake_encoder


def _fields(issues):
    return [i["field"] for i in issues]


def test_valid_design():
    report = validate_design("url", {"url": "example.com"}, {"module": "dot"})
    assert report == {"valid": True, "errors": [], "warnings": []}


def test_missing_type_and_data():
    report = validate_design(None, None)
    assert not report["valid"]
    assert _fields(report["errors"]) == ["type", "data"]


def test_unsupported_type():
    report = validate_design("fax", "x")
    assert _fields(report["errors"]) == ["type"]


def test_bad_colors():
    report = validate_design("text", "x", {"foregroundColor": "#12", "bg_color": "nope"})
    assert _fields(report["errors"]) == ["design.foregroundColor", "design.backgroundColor"]


def test_gradient_needs_two_stops():
    report = validate_design("text", "x", {"gradientFill": {"colors": ["#000"]}})
    assert _fields(report["errors"]) == ["design.gradientFill.colors"]


def test_gradient_type_without_descriptor_warns():
    report = validate_design("text", "x", {"fillType": "gradient"})
    assert report["valid"]
    assert _fields(report["warnings"]) == ["design.gradientFill"]


def test_flat_gradient_keys_count_as_descriptor():
    report = validate_design("text", "x", {"fillType": "gradient", "gradientStartColor": "#000", "gradientEndColor": "#fff"})
    assert report["warnings"] == []


def test_bad_error_correction_and_size():
    report = validate_design("text", "x", {"errorCorrection": "Z", "size": 5000})
    assert _fields(report["errors"]) == ["design.errorCorrection", "design.size"]


def test_unknown_shapes_are_warnings():
    report = validate_design("text", "x", {
        "module": "blob",
        "finder": "hexagon",
        "finderDot": "moon",
        "advancedShape": "confetti",
        "logoBackgroundShape": "hexagon",
    })
    assert report["valid"]
    assert _fields(report["warnings"]) == [
        "design.module",
        "design.finder",
        "design.finderDot",
        "design.advancedShape",
        "design.logoBackgroundShape",
    ]


def test_known_aliases_do_not_warn():
    report = validate_design("text", "x", {"modules_shape": "dots", "logoBackgroundShape": "rounded-square"})
    assert report["warnings"] == []


def test_overflowing_data_is_an_error():
    report = validate_design("text", "x" * 5000, {"errorCorrection": "H"})
    assert _fields(report["errors"]) == ["data"]
    assert report["errors"][0]["message"].startswith("Data encoding error")


def test_injected_encoder_is_used():
    calls = []

    def encoder(content, level):
        calls.append(level)
        return fake_encoder(content, level)

    validate_design("text", "x", {"errorCorrection": "quartile"}, matrix_encoder=encoder)
    assert calls == ["Q"]


def test_design_must_be_object():
    report = validate_design("text", "x", "red")
    assert _fields(report["errors"]) == ["design"]

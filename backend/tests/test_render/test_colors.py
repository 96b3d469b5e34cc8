"""Tests for color parsing and gradients."""

import math

import pytest

from qrstudio.errors import ColorError, ValidationError
from qrstudio.svg.colors import (
    canonical_color,
    is_valid_color,
    linear_coordinates,
    normalize_angle,
    parse_color,
    parse_gradient,
    parse_stops,
)


@pytest.mark.parametrize("value, expected", [
    ("#abc", "#AABBCC"),
    ("#ABCD", "#AABBCC"),
    ("#112233", "#112233"),
    ("#11223344", "#112233"),
    ("rgb(255, 0, 0)", "#FF0000"),
    ("rgba(0, 128, 0, 0.5)", "#008000"),
    ("navy", "#000080"),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


def test_invalid_colors():
    assert not is_valid_color("#12")
    assert not is_valid_color("not-a-color")
    assert not is_valid_color(None)
    with pytest.raises(ColorError):
        parse_color("#GGGGGG")
    assert issubclass(ColorError, ValueError)


def test_canonical_color_falls_back():
    assert canonical_color("bogus", "#FFFFFF") == "#FFFFFF"
    assert canonical_color(None) == "#000000"


@pytest.mark.parametrize("angle", [0, 90, 180, 270])
def test_linear_coordinates_follow_formula(angle):
    theta = math.radians(angle - 90)
    expected = (
        round(50 - math.cos(theta) * 50, 2),
        round(50 - math.sin(theta) * 50, 2),
        round(50 + math.cos(theta) * 50, 2),
        round(50 + math.sin(theta) * 50, 2),
    )
    assert linear_coordinates(angle) == pytest.approx(expected)


def test_linear_coordinates_cardinal_directions():
    assert linear_coordinates(0) == pytest.approx((50, 100, 50, 0))
    assert linear_coordinates(90) == pytest.approx((0, 50, 100, 50))


def test_normalize_angle():
    assert normalize_angle(-90) == 270
    assert normalize_angle("45deg") == 45
    assert normalize_angle("to bottom") == 180
    assert normalize_angle("sideways") == 45


def test_stops_spread_evenly():
    stops = parse_stops(["#000", "#888", "#FFF"])
    assert [s.offset for s in stops] == [0, 50, 100]
    assert stops[1].color == "#888888"


def test_explicit_stop_offsets():
    stops = parse_stops([{"color": "red", "stop": 10}, {"color": "blue", "offset": "90%", "opacity": 0.5}])
    assert (stops[0].offset, stops[1].offset, stops[1].opacity) == (10, 90, 0.5)


def test_single_stop_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_stops(["#000"])
    assert exc.value.issues[0]["field"] == "gradientFill.colors"


def test_radial_gradient():
    gradient = parse_gradient({"type": "radial", "colors": ["#000", "#fff"], "cx": 30})
    assert gradient.type == "RADIAL"
    assert (gradient.cx, gradient.cy, gradient.fx) == (30, 50, 30)

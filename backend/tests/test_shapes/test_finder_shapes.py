"""Tests for finder patterns."""

import pytest

from qrstudio.shapes.finders import (
    FinderDotShape,
    FinderShape,
    find_finder_dot_shape,
    finder_pattern,
    resolve_finder_shape,
)
from tests.svg_geometry import path_bounds


@pytest.mark.parametrize("shape", [s for s in FinderShape if s.compound])
def test_compound_shapes_have_empty_middle(shape):
    pattern = finder_pattern(shape, FinderDotShape.SQUARE, 0, 0, 10)
    assert pattern.middle.empty
    assert pattern.outer.is_compound


@pytest.mark.parametrize("shape", [s for s in FinderShape if not s.compound])
def test_simple_shapes_have_middle(shape):
    pattern = finder_pattern(shape, FinderDotShape.SQUARE, 0, 0, 10)
    assert not pattern.middle.empty


@pytest.mark.parametrize("shape", [s for s in FinderShape if s not in (FinderShape.EYE_SHAPED, FinderShape.WHIRLPOOL)])
def test_outer_covers_seven_modules(shape):
    pattern = finder_pattern(shape, FinderDotShape.SQUARE, 40, 40, 10)
    assert path_bounds(pattern.outer.d) == pytest.approx((40, 40, 110, 110))
    assert pattern.box == (40, 40, 70)


def test_middle_and_dot_are_inset():
    pattern = finder_pattern(FinderShape.SQUARE, FinderDotShape.SQUARE, 0, 0, 10)
    assert path_bounds(pattern.middle.d) == pytest.approx((10, 10, 60, 60))
    assert path_bounds(pattern.dot.d) == pytest.approx((20, 20, 50, 50))


@pytest.mark.parametrize("dot", [
    d for d in FinderDotShape if d is not FinderDotShape.WHIRLPOOL
])
def test_dot_fits_center(dot):
    pattern = finder_pattern(FinderShape.SQUARE, dot, 0, 0, 10)
    xmin, ymin, xmax, ymax = path_bounds(pattern.dot.d)
    assert xmin >= 20 - 1e-6 and ymin >= 20 - 1e-6
    assert xmax <= 50 + 1e-6 and ymax <= 50 + 1e-6


def test_aliases_and_fallback():
    assert resolve_finder_shape("dot") == (FinderShape.CIRCLE, None)
    assert resolve_finder_shape("rounded_corners") == (FinderShape.ROUNDED, None)
    shape, warning = resolve_finder_shape("hexagon")
    assert shape is FinderShape.SQUARE
    assert warning
    assert find_finder_dot_shape("leaf") is None
    assert find_finder_dot_shape("Water Drop") is FinderDotShape.WATER_DROP


@pytest.mark.parametrize("shape", list(FinderShape))
def test_outer_stays_inside_footprint(shape):
    pattern = finder_pattern(shape, FinderDotShape.SQUARE, 40, 40, 10)
    xmin, ymin, xmax, ymax = path_bounds(pattern.outer.d)
    assert xmin >= 40 - 1e-6 and ymin >= 40 - 1e-6
    assert xmax <= 110 + 1e-6 and ymax <= 110 + 1e-6


def test_water_drop_reaches_footprint_bottom():
    pattern = finder_pattern(FinderShape.WATER_DROP, FinderDotShape.WATER_DROP, 0, 0, 10)
    assert path_bounds(pattern.outer.d) == pytest.approx((0, 0, 70, 70))
    assert path_bounds(pattern.dot.d) == pytest.approx((23, 23, 47, 47))

"""Tests for polygon_offset module."""
import pytest
from shapely.geometry import Polygon

from geometry_primitives import OffsetError, signed_area
from polygon_offset import align_to, offset


class TestWindingNormalization:
    """Zero-delta offset only fixes winding."""

    def test_ccw_input_unchanged(self, square):
        assert offset(square, 0) == [tuple(map(float, p)) for p in square]

    def test_cw_input_reversed(self, clockwise_square):
        result = offset(clockwise_square, 0)
        assert signed_area(result) > 0
        assert result[0] == (0.0, 0.0)
        assert len(result) == 4

    def test_idempotent(self, clockwise_square, l_shape):
        for outline in (clockwise_square, l_shape):
            once = offset(outline, 0)
            assert offset(once, 0) == once

    def test_closing_point_dropped(self, square):
        assert len(offset(square + [square[0]], 0)) == 4


class TestMitredOffset:
    """Non-zero deltas grow or shrink with sharp corners."""

    def test_outward_square(self, square):
        result = align_to(offset(square, 12.5), square)
        assert result[0] == pytest.approx((-12.5, -12.5))
        assert result[2] == pytest.approx((112.5, 112.5))
        assert Polygon(result).area == pytest.approx(125.0 ** 2)

    def test_inward_square(self, square):
        result = align_to(offset(square, -12.5), square)
        assert result[1] == pytest.approx((87.5, 12.5))
        assert Polygon(result).area == pytest.approx(75.0 ** 2)

    def test_concave_vertex_count_preserved(self, l_shape):
        outer = align_to(offset(l_shape, 12.5), l_shape)
        inner = align_to(offset(l_shape, -12.5), l_shape)
        assert outer[3] == pytest.approx((62.5, 62.5))
        assert inner[3] == pytest.approx((37.5, 37.5))

    def test_result_is_ccw(self, clockwise_square):
        assert signed_area(offset(clockwise_square, 5)) > 0

    def test_collapse_raises(self, square):
        with pytest.raises(OffsetError, match="collapsed"):
            offset(square, -60)

    def test_split_raises(self):
        # Two 40x40 lobes joined by a 10-wide neck
        dumbbell = [(0, 0), (40, 0), (40, 15), (60, 15), (60, 0), (100, 0),
                    (100, 40), (60, 40), (60, 25), (40, 25), (40, 40), (0, 40)]
        with pytest.raises(OffsetError, match="split"):
            offset(dumbbell, -8)


class TestAlignTo:
    """Offset rings are re-indexed to match the outline."""

    def test_rotates_start_vertex(self, square):
        shifted = [(112.5, 112.5), (-12.5, 112.5), (-12.5, -12.5), (112.5, -12.5)]
        result = align_to(shifted, square)
        assert result[0] == (-12.5, -12.5)
        assert result[1] == (112.5, -12.5)

    def test_count_mismatch_raises(self, square):
        with pytest.raises(OffsetError, match="vertices"):
            align_to(square[:3], square)

    def test_straight_run_vertex_is_displaced(self, square_with_midpoint):
        outer = align_to(offset(square_with_midpoint, 12.5), square_with_midpoint, 12.5)
        inner = align_to(offset(square_with_midpoint, -12.5), square_with_midpoint, -12.5)
        assert len(outer) == len(inner) == 5
        assert outer[0] == pytest.approx((-12.5, -12.5))
        assert outer[1] == pytest.approx((50, -12.5))
        assert outer[2] == pytest.approx((112.5, -12.5))
        assert inner[1] == pytest.approx((50, 12.5))

    def test_straight_run_needs_delta(self, square_with_midpoint):
        with pytest.raises(OffsetError, match="4 vertices, expected 5"):
            align_to(offset(square_with_midpoint, 12.5), square_with_midpoint)

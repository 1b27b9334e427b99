"""Tests for line scan conversion."""

import pytest

from rasterkit.config import LineAlgorithm
from rasterkit.core.line import (
    rasterize_bresenham_all_slopes,
    rasterize_bresenham_octant1,
    rasterize_dda,
    rasterize_line,
)
from rasterkit.domain import Point, TraceKind
from rasterkit.exceptions import UnsupportedGeometryError

SHALLOW = [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2)]


class TestDDA:
    """Tests for the DDA rasterizer."""

    def test_horizontal(self) -> None:
        """A horizontal segment covers every column."""
        result = rasterize_dda(Point(0, 0), Point(4, 0))
        assert result.pixels.to_tuples() == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]

    def test_shallow_slope(self) -> None:
        """Each y position is rounded to the nearest row."""
        result = rasterize_dda(Point(0, 0), Point(5, 2))
        assert result.pixels.to_tuples() == SHALLOW

    def test_single_point(self) -> None:
        """Identical endpoints give a single pixel."""
        result = rasterize_dda(Point(3, 3), Point(3, 3))
        assert result.pixels.to_tuples() == [(3, 3)]

    def test_pixel_count_is_steps_plus_one(self) -> None:
        """Steep segments step along y."""
        result = rasterize_dda(Point(0, 0), Point(3, 7))
        assert len(result.pixels) == 8
        assert result.pixels.last == Point(3, 7)

    def test_reverse_direction_starts_at_p0(self) -> None:
        """DDA never swaps endpoints."""
        result = rasterize_dda(Point(4, 0), Point(0, 0))
        assert result.pixels.first == Point(4, 0)
        assert result.pixels.last == Point(0, 0)

    def test_trace_records_increments(self) -> None:
        """The trace shows increments and one plot per pixel."""
        result = rasterize_dda(Point(0, 0), Point(5, 2), trace=True)
        increments = [s for s in result.trace if s.label == "increments"][0]
        assert increments.get("x_inc") == 1.0
        assert increments.get("y_inc") == pytest.approx(0.4)
        assert len(result.trace.of_kind(TraceKind.STEP)) == 6

    def test_trace_off_by_default(self) -> None:
        """No trace unless requested."""
        assert len(rasterize_dda(Point(0, 0), Point(5, 2)).trace) == 0


class TestBresenhamOctant1:
    """Tests for the octant-1 Bresenham rasterizer."""

    def test_shallow_slope(self) -> None:
        """Textbook example from (0,0) to (5,2)."""
        result = rasterize_bresenham_octant1(Point(0, 0), Point(5, 2))
        assert result.pixels.to_tuples() == SHALLOW

    def test_initial_decision_in_trace(self) -> None:
        """Decision parameter starts at 2dy - dx."""
        result = rasterize_bresenham_octant1(Point(0, 0), Point(5, 2), trace=True)
        initial = [s for s in result.trace if s.label == "initial decision"][0]
        assert initial.get("p0") == -1

    def test_horizontal(self) -> None:
        """dy = 0 never moves y."""
        result = rasterize_bresenham_octant1(Point(0, 0), Point(4, 0))
        assert result.pixels.to_tuples() == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]

    def test_diagonal(self) -> None:
        """dy = dx is still octant 1."""
        result = rasterize_bresenham_octant1(Point(0, 0), Point(3, 3))
        assert result.pixels.to_tuples() == [(0, 0), (1, 1), (2, 2), (3, 3)]

    def test_single_point(self) -> None:
        """A zero-length segment gives one pixel."""
        result = rasterize_bresenham_octant1(Point(2, 2), Point(2, 2))
        assert result.pixels.to_tuples() == [(2, 2)]

    @pytest.mark.parametrize(
        "p0,p1",
        [
            (Point(5, 0), Point(0, 0)),
            (Point(0, 0), Point(2, 5)),
            (Point(0, 0), Point(5, -2)),
        ],
    )
    def test_outside_octant_rejected(self, p0: Point, p1: Point) -> None:
        """Leftward, steep and descending segments are refused."""
        with pytest.raises(UnsupportedGeometryError):
            rasterize_bresenham_octant1(p0, p1)


class TestBresenhamAllSlopes:
    """Tests for the all-slopes Bresenham rasterizer."""

    def test_matches_octant1_in_octant1(self) -> None:
        """The low case reproduces the octant-1 result."""
        result = rasterize_bresenham_all_slopes(Point(0, 0), Point(5, 2))
        assert result.pixels.to_tuples() == SHALLOW

    def test_low_case_swaps_endpoints(self) -> None:
        """A leftward low segment starts at the left endpoint."""
        result = rasterize_bresenham_all_slopes(Point(5, 2), Point(0, 0))
        assert result.pixels.to_tuples() == SHALLOW

    def test_high_case_swaps_endpoints(self) -> None:
        """A downward vertical segment starts at the bottom."""
        result = rasterize_bresenham_all_slopes(Point(2, 5), Point(2, 0))
        assert result.pixels.first == Point(2, 0)
        assert result.pixels.last == Point(2, 5)
        assert len(result.pixels) == 6

    def test_steep_negative_x(self) -> None:
        """xi = -1 walks left while y increases."""
        result = rasterize_bresenham_all_slopes(Point(0, 0), Point(-3, 7))
        assert result.pixels.to_tuples() == [
            (0, 0),
            (0, 1),
            (-1, 2),
            (-1, 3),
            (-2, 4),
            (-2, 5),
            (-3, 6),
            (-3, 7),
        ]

    @pytest.mark.parametrize(
        "p1",
        [Point(7, 3), Point(3, 7), Point(-7, 3), Point(-3, -7), Point(0, -4), Point(6, -6)],
    )
    def test_pixel_count(self, p1: Point) -> None:
        """One pixel per step along the driving axis."""
        result = rasterize_bresenham_all_slopes(Point(0, 0), p1)
        assert len(result.pixels) == max(abs(p1.x), abs(p1.y)) + 1

    def test_single_point(self) -> None:
        """A zero-length segment gives one pixel."""
        result = rasterize_bresenham_all_slopes(Point(-1, 4), Point(-1, 4))
        assert result.pixels.to_tuples() == [(-1, 4)]


class TestRasterizeLine:
    """Tests for algorithm dispatch."""

    def test_default_is_dda(self) -> None:
        """DDA is used when no algorithm is given."""
        result = rasterize_line(Point(0, 0), Point(4, 0))
        assert result.algorithm == LineAlgorithm.DDA

    def test_accepts_algorithm_name(self) -> None:
        """Enum values are accepted as plain strings."""
        result = rasterize_line(Point(0, 0), Point(5, 2), "bresenham_octant1")
        assert result.algorithm == LineAlgorithm.BRESENHAM_OCTANT1
        assert result.pixels.to_tuples() == SHALLOW

    @pytest.mark.parametrize("p1", [Point(4, 4), Point(-4, 4), Point(0, 6), Point(-6, 0)])
    def test_dda_and_bresenham_agree_on_axes_and_diagonals(self, p1: Point) -> None:
        """No rounding choices exist on axis-aligned or 45 degree lines."""
        dda = rasterize_line(Point(0, 0), p1, LineAlgorithm.DDA)
        bres = rasterize_line(Point(0, 0), p1, LineAlgorithm.BRESENHAM_ALL_SLOPES)
        assert set(dda.pixels.to_tuples()) == set(bres.pixels.to_tuples())

"""
Tests for Bresenham line rasterization.
"""
import pytest

from thermal_video_analyzer.models import Point
from thermal_video_analyzer.raster import rasterize_line


def test_horizontal_line():
    """(0,0)->(4,0) covers exactly five pixels in order."""
    pixels = rasterize_line(Point(0, 0), Point(4, 0), 5, 5)
    assert pixels == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]


def test_reverse_direction_preserves_traversal_order():
    pixels = rasterize_line(Point(4, 0), Point(0, 0), 5, 5)
    assert pixels == [(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)]


def test_vertical_and_diagonal_lines():
    assert rasterize_line(Point(2, 0), Point(2, 3), 10, 10) == [(2, 0), (2, 1), (2, 2), (2, 3)]
    assert rasterize_line(Point(0, 0), Point(3, 3), 10, 10) == [(0, 0), (1, 1), (2, 2), (3, 3)]
    assert rasterize_line(Point(3, 0), Point(0, 3), 10, 10) == [(3, 0), (2, 1), (1, 2), (0, 3)]


def test_shallow_line_steps_once_per_column():
    pixels = rasterize_line(Point(0, 0), Point(6, 2), 10, 10)
    assert len(pixels) == 7
    assert [p.x for p in pixels] == list(range(7))
    assert all(abs(b.y - a.y) <= 1 for a, b in zip(pixels, pixels[1:]))


@pytest.mark.parametrize("start,end", [
    ((0, 0), (9, 9)),
    ((9, 0), (0, 9)),
    ((3, 7), (8, 1)),
    ((5, 5), (5, 0)),
    ((1, 8), (7, 8)),
])
def test_endpoints_are_first_and_last(start, end):
    pixels = rasterize_line(Point(*start), Point(*end), 10, 10)
    assert pixels[0] == start
    assert pixels[-1] == end
    assert len(pixels) == max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1


def test_degenerate_line():
    assert rasterize_line(Point(3, 4), Point(3, 4), 10, 10) == [(3, 4)]


def test_degenerate_line_out_of_bounds():
    assert rasterize_line(Point(12, 4), Point(12, 4), 10, 10) == []


def test_out_of_bounds_points_are_dropped():
    """Points outside the frame are skipped, not clamped."""
    pixels = rasterize_line(Point(-2, 1), Point(6, 1), 5, 5)
    assert pixels == [(0, 1), (1, 1), (2, 1), (3, 1), (4, 1)]


def test_line_entirely_outside_frame():
    assert rasterize_line(Point(-5, -5), Point(-1, -1), 5, 5) == []

# Copyright (c) 2026 opticsWolf
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for grid storage, fill order and pixel geometry."""

import pytest

from mired_grid import ColorGrid, GridCell
from mired_linalg import Point, Rect


def _filled(wing, size=0):
    grid = ColorGrid(wing, size)
    grid.update_colors(lambda cell: (cell.x, cell.y))
    return grid


class TestLayout:

    @pytest.mark.parametrize("wing, side", [(0, 1), (1, 3), (3, 7), (5, 11)])
    def test_cell_counts(self, wing, side):
        grid = ColorGrid(wing)
        assert grid.num_cells == side
        assert grid.total_cell_count == side * side
        assert len(grid.cells) == side * side

    def test_row_major_order(self):
        grid = _filled(1)
        assert grid.cells == (
            (-1, -1), (0, -1), (1, -1),
            (-1, 0), (0, 0), (1, 0),
            (-1, 1), (0, 1), (1, 1),
        )

    def test_offset_addressing(self):
        grid = _filled(3)
        for cell in grid.iter_cells():
            idx = (cell.y + 3) * 7 + (cell.x + 3)
            assert grid.offset_to_index(cell.x, cell.y) == idx
            assert grid.cell(cell.x, cell.y) == (cell.x, cell.y)

    def test_offset_out_of_range(self):
        grid = ColorGrid(2)
        with pytest.raises(IndexError):
            grid.offset_to_index(3, 0)

    def test_centre_flags(self):
        seen = []
        grid = ColorGrid(2)
        grid.update_colors(lambda cell: seen.append(cell) or 0)
        assert len(seen) == 25
        centre = [c for c in seen if c.is_center_x and c.is_center_y]
        assert centre == [GridCell(0, 0)]
        assert sum(c.is_center_x for c in seen) == 5
        assert sum(c.is_center_y for c in seen) == 5

    def test_recompute_overwrites_every_cell(self):
        grid = _filled(2)
        grid.update_colors(lambda cell: "x")
        assert set(grid.cells) == {"x"}

    def test_set_wing_cell_count_reallocates(self):
        grid = _filled(3, 70)
        grid.set_wing_cell_count(1)
        assert grid.cells == (None,) * 9
        assert grid.cell_size == 23
        assert grid.grid_size == 69

    @pytest.mark.parametrize("bad, exc", [(-1, ValueError), (1.5, TypeError), (True, TypeError)])
    def test_bad_wing(self, bad, exc):
        with pytest.raises(exc):
            ColorGrid(bad)


class TestResize:

    def test_snaps_to_whole_cells(self):
        grid = ColorGrid(3)
        assert grid.resize(242) == 238
        assert grid.cell_size == 34
        assert grid.grid_size == 238

    def test_exact_fit(self):
        grid = ColorGrid(3)
        assert grid.resize(70) == 70
        assert grid.cell_size == 10

    def test_smaller_than_cell_count(self):
        grid = ColorGrid(3)
        assert grid.resize(6) == 0
        assert grid.cell_size == 0

    def test_negative_size(self):
        with pytest.raises(ValueError):
            ColorGrid(3).resize(-1)


class TestPixelLookup:

    def test_inside(self):
        grid = _filled(3, 70)
        assert grid.get_color(0, 0) == (-3, -3)
        assert grid.get_color(35, 35) == (0, 0)
        assert grid.get_color(69.9, 0) == (3, -3)

    @pytest.mark.parametrize("x, y", [(-1, 5), (5, -0.5), (70, 5), (5, 70), (1000, 1000)])
    def test_outside_returns_none(self, x, y):
        grid = _filled(3, 70)
        assert grid.get_color(x, y) is None

    def test_zero_size_grid_has_no_colors(self):
        grid = _filled(3)
        assert grid.get_color(0, 0) is None

    def test_position_offset(self):
        grid = _filled(1, 30)
        grid.pos = Point(100, 50)
        assert grid.get_color(5, 5) is None
        assert grid.get_color(105, 55) == (-1, -1)
        assert grid.bounds == Rect(100, 50, 130, 80)


class TestCellRects:

    def test_rects_tile_the_grid(self):
        grid = _filled(1, 30)
        rects = list(grid.cell_rects())
        assert len(rects) == 9
        assert rects[0] == (Rect(0, 0, 10, 10), (-1, -1))
        assert rects[-1] == (Rect(20, 20, 30, 30), (1, 1))

    def test_rect_contains_its_own_lookup(self):
        grid = _filled(2, 50)
        for rect, value in grid.cell_rects():
            centre = Point(rect.left + rect.width / 2, rect.top + rect.height / 2)
            assert grid.get_color(centre.x, centre.y) == value

# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Square swatch grid storage and pixel geometry.

The grid knows nothing about colour: cells hold whatever the fill function
returns. Layout is (2 * wing_cells + 1) cells per side, addressed row-major
from the top-left, with cell offsets running -wing_cells .. +wing_cells on
both axes:

    index = (y + wing) * side + (x + wing)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from mired_linalg import Point, Rect

__all__ = [
    "GridCell",
    "ColorGrid",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class GridCell:
    """Offset of one cell from the grid centre."""
    x: int
    y: int

    @property
    def is_center_x(self) -> bool:
        return self.x == 0

    @property
    def is_center_y(self) -> bool:
        return self.y == 0


class ColorGrid(Generic[T]):
    """
    Square grid of cells plus the pixel geometry needed to draw and hit-test it.

    The backing list is exclusively owned by the grid: ``set_wing_cell_count``
    reallocates it and ``update_colors`` overwrites every cell in place.
    """

    def __init__(self, wing_cells: int, grid_size: int = 0) -> None:
        self.pos: Point = Point(0, 0)
        self._raw_grid_size: int = 0
        self._grid_size: int = 0
        self._cell_size: int = 0
        self._cells: List[Optional[T]] = []
        self.set_wing_cell_count(wing_cells)
        if grid_size:
            self.resize(grid_size)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def num_wing_cells(self) -> int:
        return self._num_wing_cells

    @property
    def num_cells(self) -> int:
        """Cells per side."""
        return self._num_cells

    @property
    def total_cell_count(self) -> int:
        return self._num_cells * self._num_cells

    @property
    def cell_size(self) -> int:
        return self._cell_size

    @property
    def grid_size(self) -> int:
        """Snapped pixel extent (cell_size * num_cells)."""
        return self._grid_size

    @property
    def cells(self) -> Tuple[Optional[T], ...]:
        """Row-major snapshot of the cell values."""
        return tuple(self._cells)

    def set_wing_cell_count(self, wing_cells: int) -> None:
        """Sets the grid radius and reallocates the (empty) cell storage."""
        if isinstance(wing_cells, bool) or not isinstance(wing_cells, int):
            raise TypeError(f"wing_cells must be an int, got {type(wing_cells).__name__}")
        if wing_cells < 0:
            raise ValueError(f"wing_cells must be >= 0, got {wing_cells}")

        self._num_wing_cells = wing_cells
        self._num_cells = wing_cells * 2 + 1
        self._cells = [None] * self.total_cell_count
        logger.debug("[Grid] allocated %dx%d cells", self._num_cells, self._num_cells)
        self._adjust_cell_size()

    def resize(self, grid_size: int) -> int:
        """
        Requests a pixel extent and returns the one actually used.

        Cells are integer sized, so the grid snaps down to
        ``floor(grid_size / num_cells) * num_cells``.
        """
        if grid_size < 0:
            raise ValueError(f"grid_size must be >= 0, got {grid_size}")
        self._raw_grid_size = grid_size
        return self._adjust_cell_size()

    def _adjust_cell_size(self) -> int:
        self._cell_size = math.floor(self._raw_grid_size / self._num_cells)
        self._grid_size = self._cell_size * self._num_cells
        return self._grid_size

    def offset_to_index(self, x: int, y: int) -> int:
        wing = self._num_wing_cells
        if not (-wing <= x <= wing and -wing <= y <= wing):
            raise IndexError(f"Cell offset ({x}, {y}) outside wing {wing}")
        return (y + wing) * self._num_cells + (x + wing)

    def cell(self, x: int, y: int) -> Optional[T]:
        """Value of the cell at offset (x, y) from the centre."""
        return self._cells[self.offset_to_index(x, y)]

    def iter_cells(self) -> Iterator[GridCell]:
        """Cell offsets in storage order (rows top to bottom, left to right)."""
        wing = self._num_wing_cells
        for y in range(-wing, wing + 1):
            for x in range(-wing, wing + 1):
                yield GridCell(x, y)

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------
    def update_colors(self, fill: Callable[[GridCell], T]) -> None:
        """Recomputes every cell as ``fill(cell)``."""
        for idx, cell in enumerate(self.iter_cells()):
            self._cells[idx] = fill(cell)

    # ------------------------------------------------------------------
    # Pixel queries
    # ------------------------------------------------------------------
    def get_color(self, x: float, y: float) -> Optional[T]:
        """
        Value of the cell under pixel (x, y), or ``None`` outside the grid.

        Coordinates are in the same space as ``pos``. Never raises for
        out-of-range or negative input.
        """
        if self._cell_size <= 0:
            return None
        ix = math.floor((x - self.pos.x) / self._cell_size)
        iy = math.floor((y - self.pos.y) / self._cell_size)
        n = self._num_cells
        if 0 <= ix < n and 0 <= iy < n:
            return self._cells[iy * n + ix]
        return None

    def cell_rect(self, x: int, y: int) -> Rect:
        """Pixel rectangle of the cell at offset (x, y)."""
        wing = self._num_wing_cells
        self.offset_to_index(x, y)
        left = self.pos.x + (x + wing) * self._cell_size
        top = self.pos.y + (y + wing) * self._cell_size
        return Rect(left, top, left + self._cell_size, top + self._cell_size)

    def cell_rects(self) -> Iterator[Tuple[Rect, Optional[T]]]:
        """``(rect, value)`` for every cell, in storage order, for renderers."""
        for idx, cell in enumerate(self.iter_cells()):
            yield self.cell_rect(cell.x, cell.y), self._cells[idx]

    @property
    def bounds(self) -> Rect:
        return Rect(self.pos.x, self.pos.y,
                    self.pos.x + self._grid_size, self.pos.y + self._grid_size)

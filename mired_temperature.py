# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Colour Temperature Grid Generator

Algorithm (one full recompute per parameter change):
────────────────────────────────────────────────────
  1. centre RGB -> XYZ -> Lab                     (centre_lab, anchor Y = centre_xyz.y)
  2. reference Lab at CENTER_MIRED, same Y         (centre_temp_lab)
  3. for every cell offset (x, y):
       x == 0 : lab = centre_lab                   (no temperature shift)
       x != 0 : t   = locus Lab at CENTER_MIRED + x * mired_step, same Y
                a'  = centre_lab.a + (t.a - centre_temp_lab.a)
                b'  = centre_lab.b + (t.b - centre_temp_lab.b)
                L'  = t.l
       L' = clamp(L' - y * luminance_step, 0, 100)  (positive y darkens)
       cell = Lab -> XYZ -> linear RGB

  Only the a/b DELTA induced by the temperature shift is applied, so the
  centre colour keeps its own chroma and the locus fit's deviation from D65
  at the reference temperature cancels out.

Step sizes:
    mired_step     = lerp(10, 100, mired_scale)     / wing_cells
    luminance_step = lerp(0.1, 2.0, luminance_scale) / wing_cells
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Final, List, Optional, Tuple

from mired_colorengine import CieLabColor, CieXyzColor, RgbColor
from mired_grid import ColorGrid, GridCell
from mired_locus import kelvin_to_mired, lab_from_temperature
from mired_mathhelper import clamp, lerp, saturate

__all__ = [
    "D65_CALIBRATED_KELVIN",
    "CENTER_MIRED",
    "GridSettings",
    "TemperatureShift",
    "ColorTemperature",
]

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
# D65 was defined as 6500 K with c2 = 1.438e-2 m*K; with the revised
# c2 = 1.4388e-2 m*K the same chromaticity sits at 6500 * 1.4388 / 1.438 K.
D65_CALIBRATED_KELVIN: Final[float] = 1.4388 / 1.438 * 6500.0
CENTER_MIRED: Final[float] = kelvin_to_mired(D65_CALIBRATED_KELVIN)

DEFAULT_COLOR: Final[RgbColor] = RgbColor(0.8, 0.8, 0.8)

Listener = Callable[["ColorTemperature"], None]


# ---------------------------------------------------------------------------
# 1.  Configuration
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class GridSettings:
    """Grid radius, slider positions and the ranges the sliders map onto."""
    wing_cells:      int                 = 3
    mired_range:     Tuple[float, float] = (10.0, 100.0)
    luminance_range: Tuple[float, float] = (0.1, 2.0)
    mired_scale:     float               = 0.1
    luminance_scale: float               = 0.1

    def __post_init__(self) -> None:
        if isinstance(self.wing_cells, bool) or not isinstance(self.wing_cells, int):
            raise TypeError(
                f"wing_cells must be an int, got {type(self.wing_cells).__name__}"
            )
        if self.wing_cells < 0:
            raise ValueError(f"wing_cells must be >= 0, got {self.wing_cells}")
        for label, (lo, hi) in (("mired_range", self.mired_range),
                                ("luminance_range", self.luminance_range)):
            if lo > hi:
                raise ValueError(f"{label} must satisfy min <= max, got ({lo}, {hi})")

    @property
    def num_cells(self) -> int:
        return self.wing_cells * 2 + 1

    def _per_cell(self, total: float) -> float:
        # A single-cell grid never steps, avoid dividing by zero.
        if self.wing_cells == 0:
            return 0.0
        return total / self.wing_cells

    @property
    def mired_step(self) -> float:
        return self._per_cell(lerp(*self.mired_range, self.mired_scale))

    @property
    def luminance_step(self) -> float:
        return self._per_cell(lerp(*self.luminance_range, self.luminance_scale))


# ---------------------------------------------------------------------------
# 2.  Per-recompute context
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class TemperatureShift:
    """
    Everything one recompute needs, derived once from the centre colour.

    ``lab_at`` / ``color_at`` are pure, so the same shift always yields
    bit-identical cells.
    """
    center_color:    RgbColor
    center_xyz:      CieXyzColor
    center_lab:      CieLabColor
    center_temp_lab: CieLabColor
    center_mired:    float
    mired_step:      float
    luminance_step:  float

    @classmethod
    def from_center(cls, color: RgbColor, settings: GridSettings,
                    center_mired: float = CENTER_MIRED) -> TemperatureShift:
        center_xyz = color.to_cie_xyz()
        center_lab = center_xyz.to_cie_lab()

        # Bias reference: the locus colour at the centre temperature with the
        # centre's luminance. Must use the same mired as ``mired_at(0)``.
        center_temp_lab = lab_from_temperature(center_mired, center_xyz.y)

        return cls(
            center_color=color,
            center_xyz=center_xyz,
            center_lab=center_lab,
            center_temp_lab=center_temp_lab,
            center_mired=center_mired,
            mired_step=settings.mired_step,
            luminance_step=settings.luminance_step,
        )

    def mired_at(self, x: int) -> float:
        """Mired of column offset ``x``; symmetric around ``center_mired``."""
        return self.center_mired + x * self.mired_step

    def lab_at(self, x: int, y: int) -> CieLabColor:
        """Shifted Lab for cell offset (x, y)."""
        temp_lab = self.center_lab
        if x != 0:
            shifted = lab_from_temperature(self.mired_at(x), self.center_xyz.y)
            temp_lab = CieLabColor(
                shifted.l,
                self.center_lab.a + (shifted.a - self.center_temp_lab.a),
                self.center_lab.b + (shifted.b - self.center_temp_lab.b),
            )

        return CieLabColor(
            clamp(temp_lab.l - y * self.luminance_step, 0.0, 100.0),
            temp_lab.a,
            temp_lab.b,
        )

    def color_at(self, cell: GridCell) -> RgbColor:
        """Fill function for ``ColorGrid.update_colors``."""
        return self.lab_at(cell.x, cell.y).to_cie_xyz().to_linear_srgb()


# ---------------------------------------------------------------------------
# 3.  Controller
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class _ListenerSet:
    _listeners: List[Listener] = field(default_factory=list)

    def add(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def notify(self, sender: ColorTemperature) -> None:
        for listener in tuple(self._listeners):
            listener(sender)


class ColorTemperature:
    """
    Owns the swatch grid and recomputes it from the selected colour and the
    two slider scales.

    Every mutator runs a full synchronous recompute and then notifies
    listeners (renderers, host bridges) in registration order. There is no
    incremental update.
    """

    def __init__(self,
                 settings: Optional[GridSettings] = None,
                 color: RgbColor = DEFAULT_COLOR,
                 grid_size: int = 0) -> None:
        self._settings: GridSettings = settings if settings is not None else GridSettings()
        self._listeners = _ListenerSet()
        self.grid: ColorGrid[RgbColor] = ColorGrid(self._settings.wing_cells, grid_size)
        self._shift: Optional[TemperatureShift] = None
        self._selected_color: RgbColor = color
        self.update_colors(color)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def settings(self) -> GridSettings:
        return self._settings

    @property
    def selected_color(self) -> RgbColor:
        return self._selected_color

    @property
    def mired_scale(self) -> float:
        return self._settings.mired_scale

    @property
    def luminance_scale(self) -> float:
        return self._settings.luminance_scale

    @property
    def center_mired(self) -> float:
        return CENTER_MIRED

    @property
    def shift(self) -> TemperatureShift:
        """Context of the last recompute."""
        assert self._shift is not None
        return self._shift

    @property
    def colors(self) -> Tuple[RgbColor, ...]:
        """Row-major cell colours for rendering."""
        return self.grid.cells  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        self._listeners.add(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def update_colors(self, color: RgbColor) -> None:
        """Re-centres on ``color`` and recomputes every cell."""
        self._selected_color = color
        self._shift = TemperatureShift.from_center(color, self._settings, self.center_mired)
        self.grid.update_colors(self._shift.color_at)
        logger.debug(
            "[Temperature] recomputed %d cells around rgb(%.4f, %.4f, %.4f), "
            "mired_step=%.4f luminance_step=%.4f",
            self.grid.total_cell_count, color.r, color.g, color.b,
            self._shift.mired_step, self._shift.luminance_step,
        )
        self._listeners.notify(self)

    def set_color(self, color: RgbColor) -> bool:
        """Selects ``color``; returns False (and does nothing) if unchanged."""
        if color == self._selected_color:
            return False
        self.update_colors(color)
        return True

    def set_mired_scale(self, value: float) -> None:
        self._settings = replace(self._settings, mired_scale=saturate(value))
        self.update_colors(self._selected_color)

    def set_luminance_scale(self, value: float) -> None:
        self._settings = replace(self._settings, luminance_scale=saturate(value))
        self.update_colors(self._selected_color)

    def set_wing_cell_count(self, wing_cells: int) -> None:
        """Changes the grid radius (reallocates the grid) and recomputes."""
        self._settings = replace(self._settings, wing_cells=wing_cells)
        self.grid.set_wing_cell_count(wing_cells)
        self.update_colors(self._selected_color)

    def resize(self, grid_size: int) -> int:
        """Pixel resize; returns the snapped grid size. Colours are unchanged."""
        return self.grid.resize(grid_size)

    def select_at(self, x: float, y: float) -> Optional[RgbColor]:
        """
        Picks the swatch under pixel (x, y) and re-centres on it.

        Returns the picked colour, or None when the point is off the grid.
        """
        color = self.grid.get_color(x, y)
        if color is None:
            return None
        self.set_color(color)
        return color


# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Planckian Locus Approximation
=============================
Colour temperature (Kelvin) -> CIE 1960 UCS (u, v) -> CIE 1931 (x, y).

    u(T) = (0.860117757 + 1.54118254e-4 T + 1.28641212e-7 T^2)
           / (1 + 8.42420235e-4 T + 7.08145163e-7 T^2)

    v(T) = (0.317398726 + 4.22806245e-5 T + 4.20481691e-8 T^2)
           / (1 - 2.89741816e-5 T + 1.61456053e-7 T^2)

Accuracy caveat:
    This is the closed-form rational fit of Krystek (1985), not a blackbody
    integral. It is within |du|, |dv| < 8e-5 for 1000 K < T < 15000 K and
    degrades smoothly outside that range. Temperatures outside it are NOT
    rejected: the grid's mired spread can reach roughly 4000 K to 19000 K
    and the small extra deviation there is acceptable for swatches.

Mired (micro reciprocal degree) = 10^6 / Kelvin. Perceived warmth shifts are
closer to linear in mired, so the grid steps in mired.

References:
    - M. Krystek, "An algorithm to calculate correlated colour temperature",
      Color Research & Application 10(1), 38-40 (1985)
"""

from __future__ import annotations

from typing import Final

import numpy as np
from numba import njit

from mired_colorengine import (
    ArrayFloat,
    CieChromaticityXyColor,
    CieLabColor,
    CieXyzColor,
    ColorSpaceEngine,
)

__all__ = [
    "LOCUS_VALID_KELVIN_MIN",
    "LOCUS_VALID_KELVIN_MAX",
    "kelvin_to_mired",
    "mired_to_kelvin",
    "planckian_uv",
    "planckian_xy",
    "chromaticity_from_temperature",
    "lab_from_temperature",
]

# Range over which the rational fit is published as accurate.
LOCUS_VALID_KELVIN_MIN: Final[float] = 1000.0
LOCUS_VALID_KELVIN_MAX: Final[float] = 15000.0


def kelvin_to_mired(kelvin: float) -> float:
    return 1000000.0 / kelvin


def mired_to_kelvin(mired: float) -> float:
    return 1000000.0 / mired


@njit(cache=True, fastmath=True)
def _planckian_uv_kernel(kelvin: ArrayFloat) -> ArrayFloat:
    """
    Kernel for T -> CIE 1960 (u, v).
    Input: (N,), Output: (N, 2)
    """
    n = kelvin.shape[0]
    uv = np.empty((n, 2), dtype=np.float64)

    for i in range(n):
        t = kelvin[i]
        t2 = t * t
        uv[i, 0] = ((0.860117757 + 1.54118254e-4 * t + 1.28641212e-7 * t2)
                    / (1.0 + 8.42420235e-4 * t + 7.08145163e-7 * t2))
        uv[i, 1] = ((0.317398726 + 4.22806245e-5 * t + 4.20481691e-8 * t2)
                    / (1.0 - 2.89741816e-5 * t + 1.61456053e-7 * t2))
    return uv


def planckian_uv(kelvin) -> ArrayFloat:
    """
    CIE 1960 UCS coordinates of the Planckian locus.

    Args:
        kelvin: Temperature(s) in Kelvin, scalar or shape (N,).

    Returns:
        Shape (2,) for scalar input, (N, 2) otherwise.
    """
    t = np.asarray(kelvin, dtype=np.float64)
    uv = _planckian_uv_kernel(np.ascontiguousarray(np.atleast_1d(t)))
    if t.ndim == 0:
        return uv[0]
    return uv


def planckian_xy(kelvin) -> ArrayFloat:
    """CIE 1931 xy chromaticity of the Planckian locus, same shapes as ``planckian_uv``."""
    return ColorSpaceEngine.uv1960_to_xy(planckian_uv(kelvin))


def chromaticity_from_temperature(kelvin: float) -> CieChromaticityXyColor:
    """Chromaticity of a blackbody radiator at ``kelvin``."""
    xy = planckian_xy(float(kelvin))
    return CieChromaticityXyColor(float(xy[0]), float(xy[1]))


def lab_from_temperature(mired: float, luminance: float) -> CieLabColor:
    """
    Lab of the locus colour at ``mired`` with XYZ luminance held at ``luminance``.

    This is the temperature lookup used by every off-centre grid column and by
    the bias reference at the centre temperature.
    """
    xy = chromaticity_from_temperature(mired_to_kelvin(mired))
    return CieXyzColor.from_cie_chromaticity_xy(xy, luminance).to_cie_lab()

# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Scalar helpers shared by the linear algebra, colour engine and grid modules.
"""

import math
from typing import Final

__all__ = [
    "PI",
    "TWO_PI",
    "PI_OVER_2",
    "PI_OVER_4",
    "to_radians",
    "to_degrees",
    "lerp",
    "saturate",
    "clamp",
]

PI: Final[float] = math.pi
TWO_PI: Final[float] = math.pi * 2.0
PI_OVER_2: Final[float] = math.pi / 2.0
PI_OVER_4: Final[float] = math.pi / 4.0

_PI_OVER_180: Final[float] = math.pi / 180.0
_180_OVER_PI: Final[float] = 180.0 / math.pi


def to_radians(degrees: float) -> float:
    """Converts degrees to radians."""
    return degrees * _PI_OVER_180


def to_degrees(radians: float) -> float:
    """Converts radians to degrees."""
    return radians * _180_OVER_PI


def lerp(value1: float, value2: float, t: float) -> float:
    """
    Linearly interpolates between two values.

    Args:
        value1: Source value (returned for t = 0).
        value2: Source value (returned for t = 1).
        t: Weight of value2. Not clamped, so t outside [0, 1] extrapolates.
    """
    return value1 + (value2 - value1) * t


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamps value into [min_value, max_value]."""
    return max(min_value, min(value, max_value))


def saturate(value: float) -> float:
    """Clamps value into [0, 1]."""
    return max(0.0, min(value, 1.0))

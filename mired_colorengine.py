# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colour Space Engine
===================
Linear sRGB, CIE XYZ, CIE xy chromaticity and CIELAB conversions for the
swatch grid, in two flavours:

1. ``ColorSpaceEngine``: static, shape-safe array API operating on (N, 3)
   (or (N, 2) for chromaticities) float64 arrays, backed by Numba kernels.
2. Immutable value types (``RgbColor``, ``CieXyzColor``,
   ``CieChromaticityXyColor``, ``CieLabColor``, ``HsvColor``) for single
   colours. Every conversion returns a new instance.

Scale conventions:
    - RGB is LINEAR sRGB, nominally [0, 1]. No transfer function is applied
      anywhere in this module and values are never clipped internally.
    - XYZ is D65 relative with Y in [0, 100], so linear RGB white (1, 1, 1)
      maps onto the Lab reference white (95.047, 100.0, 108.883).

The RGB <-> XYZ matrices are not hard-coded: they are derived once at import
from the sRGB primaries and the D65 white chromaticity by
``compute_color_space_conversion_matrix`` and are read-only afterwards.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB primaries and white point)
    - R. Juckett, "RGB Color Space Conversion" (primaries -> matrix derivation)
"""

from __future__ import annotations

import functools
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Final, Tuple, TypeAlias

import numpy as np
import numpy.typing as npt
from numba import njit

from mired_linalg import Matrix, Vector3
from mired_mathhelper import saturate

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "REF_WHITE_D65",
    "LAB_EPSILON",
    "LAB_KAPPA",
    "SRGB_RED_XY",
    "SRGB_GREEN_XY",
    "SRGB_BLUE_XY",
    "D65_WHITE_XY",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Matrices ---
    "SingularMatrixError",
    "compute_color_space_conversion_matrix",
    "LINEAR_SRGB_TO_XYZ",
    "XYZ_TO_LINEAR_SRGB",
    "M_LINEAR_SRGB_TO_XYZ_T",
    "M_XYZ_TO_LINEAR_SRGB_T",

    # --- Decorators ---
    "handle_shapes",

    # --- Classes ---
    "ColorSpaceEngine",
    "RgbColor",
    "HsvColor",
    "CieXyzColor",
    "CieChromaticityXyColor",
    "CieLabColor",
]

logger = logging.getLogger(__name__)

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]


# --- Reference White ---
# D65 tristimulus values on the Y = 100 scale used throughout this module.
REF_WHITE_D65: Final[ArrayFloat] = np.array([95.047, 100.0, 108.883], dtype=np.float64)
REF_WHITE_D65.flags.writeable = False

# --- Exact Rational Math Constants ---
# Defined by CIE 1976 for the Lab transformation.
# delta = 6/29 is the threshold where the function switches from cubic to linear.
_LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = _LAB_DELTA * _LAB_DELTA * _LAB_DELTA  # ~0.008856
LAB_KAPPA: Final[float]   = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0) # ~903.296


# --- Runtime Configuration ---
# When True, Numba kernels use fastmath=False variants that preserve strict
# IEEE 754 semantics (inf / NaN propagation, no FP reassociation). Needed
# when feeding degenerate chromaticities (y = 0) through the engine.
#
#     import mired_colorengine as ce
#     ce.set_strict_ieee(True)   # enable strict mode
#     ce.set_strict_ieee(False)  # back to fast mode (default)
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)
    logger.debug("[Color] strict IEEE kernels %s", "on" if _STRICT_IEEE else "off")


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and safeguard shape.

    1D inputs (single colours) are treated as 2D batches internally.
        - If input is (3,), returns the first row of the result
        - If input is (N, 3), returns the full result
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.shape[-1] != 3:
            raise ValueError(f"Expected last dimension size 3, got {arr_in.shape[-1]}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


def _as_pairs(arr: ArrayFloat) -> Tuple[ArrayFloat, bool]:
    """Shape check for chromaticity inputs: returns ((N, 2) array, was_1d)."""
    arr = np.asarray(arr, dtype=np.float64)
    arr_in = np.ascontiguousarray(np.atleast_2d(arr))
    if arr_in.shape[-1] != 2:
        raise ValueError(f"Expected last dimension size 2, got {arr_in.shape[-1]}")
    return arr_in, arr.ndim == 1


# =============================================================================
# 2. LOW-LEVEL MATH KERNELS (Numba Optimized)
# =============================================================================
# NOTE: fastmath=True allows reassociation and relaxed IEEE compliance.

@njit(cache=True, fastmath=True)
def _xyz_to_lab_f(t: ArrayFloat) -> ArrayFloat:
    """
    Non-linear transfer function f(t) for CIELAB.

        f(t) = t^(1/3)                   t >  (6/29)^3
        f(t) = (1/3)(29/6)^2 t + 4/29    otherwise

    The linear segment avoids the infinite slope of the cube root at zero.
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()

    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0/3.0)
        else:
            out_flat[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out

@njit(cache=True, fastmath=True)
def _lab_to_xyz_f_inv(t: ArrayFloat) -> ArrayFloat:
    """
    Inverse of f(t), switching at t = 6/29.

    Uses the multiplication form (116*t - 16)/kappa, identical to
    3(6/29)^2 (t - 4/29).
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()

    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_DELTA:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out

@njit(cache=True, fastmath=True, error_model="numpy")
def _xy_to_xyz_kernel(xy: ArrayFloat, lum: ArrayFloat) -> ArrayFloat:
    """
    Chromaticity (x, y) plus luminance Y -> XYZ.

        X = Y / y * x
        Z = Y / y * (1 - x - y)

    y = 0 is deliberately not guarded.
    """
    n = xy.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        x = xy[i, 0]
        y = xy[i, 1]
        Y = lum[i]
        out[i, 0] = Y / y * x
        out[i, 1] = Y
        out[i, 2] = Y / y * (1.0 - x - y)
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False)
def _xyz_to_lab_f_strict(t: ArrayFloat) -> ArrayFloat:
    """Lab f(t), strict IEEE 754 variant."""
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0/3.0)
        else:
            out_flat[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out

@njit(cache=True, fastmath=False)
def _lab_to_xyz_f_inv_strict(t: ArrayFloat) -> ArrayFloat:
    """Lab f_inv(t), strict IEEE 754 variant."""
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_DELTA:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out

@njit(cache=True, fastmath=False, error_model="numpy")
def _xy_to_xyz_kernel_strict(xy: ArrayFloat, lum: ArrayFloat) -> ArrayFloat:
    """xy + Y -> XYZ, strict IEEE 754 variant."""
    n = xy.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        x = xy[i, 0]
        y = xy[i, 1]
        Y = lum[i]
        out[i, 0] = Y / y * x
        out[i, 1] = Y
        out[i, 2] = Y / y * (1.0 - x - y)
    return out


# --- Kernel dispatchers ---

def _lab_f(t: ArrayFloat) -> ArrayFloat:
    """Dispatch Lab f(t) to fast or strict kernel."""
    if _STRICT_IEEE:
        return _xyz_to_lab_f_strict(t)
    return _xyz_to_lab_f(t)

def _lab_f_inv(t: ArrayFloat) -> ArrayFloat:
    """Dispatch Lab f_inv(t) to fast or strict kernel."""
    if _STRICT_IEEE:
        return _lab_to_xyz_f_inv_strict(t)
    return _lab_to_xyz_f_inv(t)

def _xy_to_xyz(xy: ArrayFloat, lum: ArrayFloat) -> ArrayFloat:
    """Dispatch xy -> XYZ to fast or strict kernel."""
    if _STRICT_IEEE:
        return _xy_to_xyz_kernel_strict(xy, lum)
    return _xy_to_xyz_kernel(xy, lum)


@njit(cache=True, fastmath=True)
def _uv_1960_to_xy_kernel(uv: ArrayFloat) -> ArrayFloat:
    """
    Kernel for CIE 1960 (u, v) -> CIE 1931 (x, y).
    Input: (N, 2), Output: (N, 2)
    """
    n = uv.shape[0]
    xy = np.empty_like(uv)

    for i in range(n):
        u = uv[i, 0]
        v = uv[i, 1]

        # Denominator: 2u - 8v + 4
        denom = 2.0 * u - 8.0 * v + 4.0

        if abs(denom) < 1e-12:
            xy[i, 0] = 0.0
            xy[i, 1] = 0.0
        else:
            inv_d = 1.0 / denom
            xy[i, 0] = 3.0 * u * inv_d
            xy[i, 1] = 2.0 * v * inv_d

    return xy


# =============================================================================
# 3. CONVERSION MATRICES
# =============================================================================

class SingularMatrixError(ValueError):
    """Primaries that do not span XYZ (the chromaticity matrix has no inverse)."""


def compute_color_space_conversion_matrix(
    red: CieChromaticityXyColor,
    green: CieChromaticityXyColor,
    blue: CieChromaticityXyColor,
    white: CieChromaticityXyColor,
    white_luminance: float = 1.0,
) -> Matrix:
    """
    Derives the RGB -> XYZ matrix of an RGB space from its primaries.

    With N holding the primaries' xyz chromaticities (z = 1 - x - y) and
    W the white point in XYZ, the unknown matrix is M = N · S where S is a
    diagonal of per-primary scales. RGB white (1, 1, 1) must land on W:

        W = N · S · (1, 1, 1)   =>   (sR, sG, sB) = N^-1 · W

    In the row-vector layout of ``Matrix`` the primaries are ROWS, so
    scaling a column of N is scaling a row here.

    Args:
        red, green, blue: Primary chromaticities.
        white: Reference white chromaticity.
        white_luminance: Y assigned to the white point. 1.0 gives the
            normalised matrix; 100.0 gives XYZ on the Lab scale.

    Returns:
        The RGB -> XYZ matrix embedded in a 4x4 ``Matrix``.

    Raises:
        SingularMatrixError: If the primaries are collinear in xy.
    """
    n = Matrix.from_3x3(np.array([
        [red.x,   red.y,   1.0 - (red.x + red.y)],
        [green.x, green.y, 1.0 - (green.x + green.y)],
        [blue.x,  blue.y,  1.0 - (blue.x + blue.y)],
    ], dtype=np.float64))

    # XYZ = xyz * (Y / y)
    k = white_luminance / white.y
    w = Vector3(white.x * k, white.y * k, (1.0 - (white.x + white.y)) * k)

    inv = n.invert()
    if inv is None:
        raise SingularMatrixError(
            f"Primaries r={red}, g={green}, b={blue} do not span XYZ "
            f"(|det| < 1e-8)."
        )

    scale = Vector3.transform_normal(w, inv)
    logger.debug("[Color] primary scales sR=%.6f sG=%.6f sB=%.6f",
                 scale.x, scale.y, scale.z)
    return n.scale_rows(scale.x, scale.y, scale.z)


# sRGB primaries (IEC 61966-2-1) and the D65 white chromaticity.
# Defined as plain tuples because the value types are declared further down.
SRGB_RED_XY: Final[Tuple[float, float]]   = (0.64, 0.33)
SRGB_GREEN_XY: Final[Tuple[float, float]] = (0.30, 0.60)
SRGB_BLUE_XY: Final[Tuple[float, float]]  = (0.15, 0.06)
D65_WHITE_XY: Final[Tuple[float, float]]  = (0.3127, 0.3290)


# =============================================================================
# 4. COLOR SPACE ENGINE
# =============================================================================

class ColorSpaceEngine:
    """Static utility class for array colour space transformations.

    Core transforms provide both a public ``@handle_shapes`` decorated API
    and an internal ``_raw`` fast-path that assumes pre-validated (N, 3)
    float64 input. Convenience pipelines call the ``_raw`` variants to avoid
    redundant shape checks at each stage.
    """

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, 3) float64)
    # =====================================================================

    @staticmethod
    def _linear_srgb_to_xyz_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        return np.dot(rgb_array, M_LINEAR_SRGB_TO_XYZ_T)

    @staticmethod
    def _xyz_to_linear_srgb_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        return np.dot(xyz_array, M_XYZ_TO_LINEAR_SRGB_T)

    @staticmethod
    def _xyz_to_lab_raw(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        xyz_norm = xyz_array / illuminant
        f_xyz = _lab_f(xyz_norm)

        out = np.empty_like(xyz_array)
        out[..., 0] = 116.0 * f_xyz[..., 1] - 16.0
        out[..., 1] = 500.0 * (f_xyz[..., 0] - f_xyz[..., 1])
        out[..., 2] = 200.0 * (f_xyz[..., 1] - f_xyz[..., 2])
        return out

    @staticmethod
    def _lab_to_xyz_raw(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        L, a, b = lab_array[..., 0], lab_array[..., 1], lab_array[..., 2]

        fy = (L + 16.0) / 116.0
        fx = a / 500.0 + fy
        fz = fy - b / 200.0

        xyz = np.empty_like(lab_array)
        xyz[..., 0] = _lab_f_inv(fx)
        xyz[..., 1] = _lab_f_inv(fy)
        xyz[..., 2] = _lab_f_inv(fz)

        xyz *= illuminant
        return xyz

    @staticmethod
    def _xyz_to_xy_raw(xyz_array: ArrayFloat) -> ArrayFloat:
        sum_xyz = np.sum(xyz_array, axis=-1)
        mask = sum_xyz > 1e-12
        xy = np.empty((xyz_array.shape[0], 2), dtype=np.float64)

        if np.any(mask):
            inv_sum = 1.0 / sum_xyz[mask]
            xy[mask, 0] = xyz_array[mask, 0] * inv_sum
            xy[mask, 1] = xyz_array[mask, 1] * inv_sum

        # Black has no chromaticity; report the D65 white point (Lindbloom
        # convention) so the result stays finite.
        xy[~mask, 0] = D65_WHITE_XY[0]
        xy[~mask, 1] = D65_WHITE_XY[1]
        return xy

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def linear_srgb_to_xyz(rgb_array: ArrayFloat) -> ArrayFloat:
        """
        Converts linear sRGB to CIE XYZ (D65, Y in [0, 100]).

        No clipping: out-of-range RGB propagates.

        Args:
            rgb_array: Input linear RGB, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._linear_srgb_to_xyz_raw(rgb_array)

    @staticmethod
    @handle_shapes
    def xyz_to_linear_srgb(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIE XYZ (D65, Y in [0, 100]) to linear sRGB.

        Args:
            xyz_array: Input XYZ, shape (N, 3) or (3,).
        """
        return ColorSpaceEngine._xyz_to_linear_srgb_raw(xyz_array)

    @staticmethod
    @handle_shapes
    def xyz_to_lab(xyz_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        Converts XYZ to CIELAB (L*a*b*).

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).
            illuminant: Reference white on the same scale as the input.
        """
        return ColorSpaceEngine._xyz_to_lab_raw(xyz_array, illuminant)

    @staticmethod
    @handle_shapes
    def lab_to_xyz(lab_array: ArrayFloat, illuminant: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """Converts CIELAB to XYZ."""
        return ColorSpaceEngine._lab_to_xyz_raw(lab_array, illuminant)

    @staticmethod
    @handle_shapes
    def xyz_to_xy(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ to chromaticity (x, y).

        Returns:
            Shape (N, 2) or (2,).
        """
        return ColorSpaceEngine._xyz_to_xy_raw(xyz_array)

    @staticmethod
    def xy_to_xyz(xy_array: ArrayFloat, luminance: Any) -> ArrayFloat:
        """
        Converts chromaticity (x, y) to XYZ at the given luminance Y.

        Args:
            xy_array: Input chromaticities, shape (N, 2) or (2,).
            luminance: Y, scalar or shape (N,).

        Returns:
            XYZ, shape (N, 3) or (3,). y = 0 yields inf/NaN (use
            ``set_strict_ieee(True)`` for faithful IEEE propagation).
        """
        arr_in, was_1d = _as_pairs(xy_array)
        lum = np.ascontiguousarray(
            np.broadcast_to(np.asarray(luminance, dtype=np.float64), (arr_in.shape[0],))
        )
        res = _xy_to_xyz(arr_in, lum)
        if was_1d:
            return res[0]
        return res

    @staticmethod
    def uv1960_to_xy(uv_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIE 1960 UCS (u, v) to CIE 1931 (x, y).

            x = 3u / (2u - 8v + 4),  y = 2v / (2u - 8v + 4)

        Args:
            uv_array: Input data, shape (N, 2) or (2,).
        """
        arr_in, was_1d = _as_pairs(uv_array)
        res = _uv_1960_to_xy_kernel(arr_in)
        if was_1d:
            return res[0]
        return res

    # --- Convenience: linear sRGB <-> Lab ---

    @staticmethod
    @handle_shapes
    def linear_srgb_to_lab(rgb_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion linear sRGB -> CIELAB."""
        xyz = ColorSpaceEngine._linear_srgb_to_xyz_raw(rgb_array)
        return ColorSpaceEngine._xyz_to_lab_raw(xyz)

    @staticmethod
    @handle_shapes
    def lab_to_linear_srgb(lab_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion CIELAB -> linear sRGB."""
        xyz = ColorSpaceEngine._lab_to_xyz_raw(lab_array)
        return ColorSpaceEngine._xyz_to_linear_srgb_raw(xyz)


# =============================================================================
# 5. VALUE TYPES
# =============================================================================

_CSS_RGB_PATTERN = re.compile(r"^rgb\((\d+),\s*(\d+),\s*(\d+)\)$")


@dataclass(slots=True, frozen=True)
class RgbColor:
    """
    Linear RGB colour, channels nominally in [0, 1].

    Channels are left unbounded through all colour math; ``saturate`` and
    the byte/hex encoders clamp only at the output boundary.
    """
    r: float
    g: float
    b: float

    @classmethod
    def from_css_rgb(cls, rgb_text: str) -> RgbColor:
        """Parses ``'rgb(10, 20, 30)'`` (0..255 channels)."""
        match = _CSS_RGB_PATTERN.match(rgb_text.strip())
        if match is None:
            raise ValueError(f"Not a CSS rgb() colour: {rgb_text!r}")
        r, g, b = (int(match.group(i), 10) / 255.0 for i in (1, 2, 3))
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, hex_code: str) -> RgbColor:
        """Parses ``'#RRGGBB'`` (the leading '#' is optional)."""
        hex_code = hex_code.strip().lstrip("#")
        if len(hex_code) != 6:
            raise ValueError("Hex code must be 6 characters long.")
        try:
            r, g, b = (int(hex_code[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
        except ValueError as exc:
            raise ValueError(f"Invalid hex colour: #{hex_code}") from exc
        return cls(r, g, b)

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> RgbColor:
        """
        Creates a colour from hue [0, 360), saturation and value [0, 100].

        Host pickers are less trusted than internal math, so the hue is
        wrapped modulo 360 and s, v are saturated before conversion.
        """
        h = saturate((h % 360.0) / 360.0)
        s = saturate(s / 100.0)
        v = saturate(v / 100.0)

        i = math.floor(h * 6.0)
        f = h * 6.0 - i
        p = v * (1.0 - s)
        q = v * (1.0 - f * s)
        t = v * (1.0 - (1.0 - f) * s)

        sector = i % 6
        if sector == 0:
            return cls(v, t, p)
        if sector == 1:
            return cls(q, v, p)
        if sector == 2:
            return cls(p, v, t)
        if sector == 3:
            return cls(p, q, v)
        if sector == 4:
            return cls(t, p, v)
        return cls(v, p, q)

    @classmethod
    def from_cie_xyz(cls, xyz: CieXyzColor) -> RgbColor:
        v = Vector3.transform(Vector3(xyz.x, xyz.y, xyz.z), XYZ_TO_LINEAR_SRGB)
        return cls(v.x, v.y, v.z)

    def to_cie_xyz(self) -> CieXyzColor:
        return CieXyzColor.from_linear_srgb(self)

    def saturate(self) -> RgbColor:
        """Clamps every channel into [0, 1]."""
        return RgbColor(saturate(self.r), saturate(self.g), saturate(self.b))

    def to_bytes(self) -> Tuple[int, int, int]:
        """Saturated channels as 0..255 integers (floor, as the host expects)."""
        return (
            math.floor(saturate(self.r) * 255),
            math.floor(saturate(self.g) * 255),
            math.floor(saturate(self.b) * 255),
        )

    def to_hex_string(self) -> str:
        """Hex string like ``'#80aabb'``."""
        r, g, b = self.to_bytes()
        return f"#{r:02x}{g:02x}{b:02x}"

    def as_array(self) -> ArrayFloat:
        return np.array([self.r, self.g, self.b], dtype=np.float64)


@dataclass(slots=True, frozen=True)
class HsvColor:
    """HSV triple as delivered by host pickers: h in degrees, s and v in 0..100."""
    h: float
    s: float
    v: float

    def to_rgb(self) -> RgbColor:
        return RgbColor.from_hsv(self.h, self.s, self.v)


@dataclass(slots=True, frozen=True)
class CieXyzColor:
    """CIE 1931 XYZ tristimulus values, D65 relative, Y in [0, 100]."""
    x: float
    y: float
    z: float

    @classmethod
    def from_linear_srgb(cls, rgb: RgbColor) -> CieXyzColor:
        v = Vector3.transform(Vector3(rgb.r, rgb.g, rgb.b), LINEAR_SRGB_TO_XYZ)
        return cls(v.x, v.y, v.z)

    @classmethod
    def from_cie_chromaticity_xy(cls, xy: CieChromaticityXyColor, y: float) -> CieXyzColor:
        """XYZ with chromaticity ``xy`` and luminance ``y``."""
        res = ColorSpaceEngine.xy_to_xyz(np.array([xy.x, xy.y]), y)
        return cls(float(res[0]), float(res[1]), float(res[2]))

    @classmethod
    def from_cie_lab(cls, lab: CieLabColor) -> CieXyzColor:
        res = ColorSpaceEngine.lab_to_xyz(lab.as_array())
        return cls(float(res[0]), float(res[1]), float(res[2]))

    def to_cie_lab(self) -> CieLabColor:
        return CieLabColor.from_cie_xyz(self)

    def to_linear_srgb(self) -> RgbColor:
        return RgbColor.from_cie_xyz(self)

    def to_cie_chromaticity_xy(self) -> CieChromaticityXyColor:
        return CieChromaticityXyColor.from_cie_xyz(self)

    def as_array(self) -> ArrayFloat:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@dataclass(slots=True, frozen=True)
class CieChromaticityXyColor:
    """CIE 1931 chromaticity coordinates. x + y <= 1 for real colours."""
    x: float
    y: float

    @classmethod
    def from_cie_xyz(cls, xyz: CieXyzColor) -> CieChromaticityXyColor:
        res = ColorSpaceEngine.xyz_to_xy(xyz.as_array())
        return cls(float(res[0]), float(res[1]))

    def to_cie_xyz(self, y: float) -> CieXyzColor:
        """XYZ at luminance ``y``."""
        return CieXyzColor.from_cie_chromaticity_xy(self, y)


@dataclass(slots=True, frozen=True)
class CieLabColor:
    """CIELAB colour: l nominally 0..100, a and b roughly -128..127."""
    l: float
    a: float
    b: float

    @classmethod
    def from_cie_xyz(cls, xyz: CieXyzColor) -> CieLabColor:
        res = ColorSpaceEngine.xyz_to_lab(xyz.as_array())
        return cls(float(res[0]), float(res[1]), float(res[2]))

    def to_cie_xyz(self) -> CieXyzColor:
        return CieXyzColor.from_cie_lab(self)

    def as_array(self) -> ArrayFloat:
        return np.array([self.l, self.a, self.b], dtype=np.float64)


# --- Process-wide conversion constants ---
# Computed once at import; SingularMatrixError here means the constants above
# are wrong and the module must not load.

LINEAR_SRGB_TO_XYZ: Final[Matrix] = compute_color_space_conversion_matrix(
    CieChromaticityXyColor(*SRGB_RED_XY),
    CieChromaticityXyColor(*SRGB_GREEN_XY),
    CieChromaticityXyColor(*SRGB_BLUE_XY),
    CieChromaticityXyColor(*D65_WHITE_XY),
    white_luminance=100.0,
)

_xyz_to_linear_srgb = LINEAR_SRGB_TO_XYZ.invert()
if _xyz_to_linear_srgb is None:
    raise SingularMatrixError("sRGB -> XYZ matrix is not invertible.")
XYZ_TO_LINEAR_SRGB: Final[Matrix] = _xyz_to_linear_srgb
del _xyz_to_linear_srgb

# Row-vector 3x3 blocks for np.dot(rgb_rows, M_T).
M_LINEAR_SRGB_TO_XYZ_T: Final[ArrayFloat] = LINEAR_SRGB_TO_XYZ.linear_part
M_XYZ_TO_LINEAR_SRGB_T: Final[ArrayFloat] = XYZ_TO_LINEAR_SRGB.linear_part

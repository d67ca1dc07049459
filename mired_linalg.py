# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Small-Vector and 4x4 Matrix Algebra

Conventions:
─────────────
  Row-vector layout (vector on the left):

        [x' y' z' 1] = [x y z 1] · M

  so the translation lives in the fourth ROW (m41, m42, m43) and the
  linear part in the upper-left 3x3 block. A 3x3 colour matrix embedded
  in a Matrix therefore keeps an identity fourth row/column.

  ``transform``         applies linear part + translation (points).
  ``transform_normal``  applies the linear part only (directions, basis
                        vectors, colour tristimulus vectors).

Determinant and Inverse:
─────────────────────────
  Both use Laplace expansion along the first row. The six 2x2 minors of the
  bottom two rows (kp-lo, jp-ln, jo-kn, ip-lm, io-km, in-jm) are computed once
  and shared, so ``determinant()`` and ``invert()`` agree bit for bit on the
  value they test against the singularity threshold.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Optional, Sequence, Tuple

import numpy as np
from numba import njit

__all__ = [
    "SINGULAR_DETERMINANT_EPSILON",
    "Matrix",
    "Vector2",
    "Vector3",
    "Point",
    "Rect",
]

# |det| below this is reported as "no inverse".
SINGULAR_DETERMINANT_EPSILON: Final[float] = 1e-8


# ═══════════════════════════════════════════════════════════════════════════════
# Kernels
# ═══════════════════════════════════════════════════════════════════════════════

@njit(cache=True)
def _determinant_kernel(mtx: np.ndarray) -> float:
    """
    | a b c d |     | f g h |     | e g h |     | e f h |     | e f g |
    | e f g h | = a | j k l | - b | i k l | + c | i j l | - d | i j k |
    | i j k l |     | n o p |     | m o p |     | m n p |     | m n o |
    | m n o p |

    17 adds and 28 muls.
    """
    a, b, c, d = mtx[0, 0], mtx[0, 1], mtx[0, 2], mtx[0, 3]
    e, f, g, h = mtx[1, 0], mtx[1, 1], mtx[1, 2], mtx[1, 3]
    i, j, k, l = mtx[2, 0], mtx[2, 1], mtx[2, 2], mtx[2, 3]
    m, n, o, p = mtx[3, 0], mtx[3, 1], mtx[3, 2], mtx[3, 3]

    kp_lo = k * p - l * o
    jp_ln = j * p - l * n
    jo_kn = j * o - k * n
    ip_lm = i * p - l * m
    io_km = i * o - k * m
    in_jm = i * n - j * m

    a11 = +(f * kp_lo - g * jp_ln + h * jo_kn)
    a12 = -(e * kp_lo - g * ip_lm + h * io_km)
    a13 = +(e * jp_ln - f * ip_lm + h * in_jm)
    a14 = -(e * jo_kn - f * io_km + g * in_jm)

    return a * a11 + b * a12 + c * a13 + d * a14


@njit(cache=True)
def _invert_kernel(mtx: np.ndarray, epsilon: float) -> Tuple[float, np.ndarray]:
    """
    M^-1 = adj(M) / det(M), adj(M) = C^T with C_ij = (-1)^(i+j) det(M_ij).

    The first-row cofactors double as the determinant terms. Returns
    ``(det, inverse)``; when ``|det| < epsilon`` the inverse is left zeroed
    and the caller must discard it.

    53 adds, 104 muls and 1 div.
    """
    out = np.zeros((4, 4), dtype=np.float64)

    a, b, c, d = mtx[0, 0], mtx[0, 1], mtx[0, 2], mtx[0, 3]
    e, f, g, h = mtx[1, 0], mtx[1, 1], mtx[1, 2], mtx[1, 3]
    i, j, k, l = mtx[2, 0], mtx[2, 1], mtx[2, 2], mtx[2, 3]
    m, n, o, p = mtx[3, 0], mtx[3, 1], mtx[3, 2], mtx[3, 3]

    kp_lo = k * p - l * o
    jp_ln = j * p - l * n
    jo_kn = j * o - k * n
    ip_lm = i * p - l * m
    io_km = i * o - k * m
    in_jm = i * n - j * m

    a11 = +(f * kp_lo - g * jp_ln + h * jo_kn)
    a12 = -(e * kp_lo - g * ip_lm + h * io_km)
    a13 = +(e * jp_ln - f * ip_lm + h * in_jm)
    a14 = -(e * jo_kn - f * io_km + g * in_jm)

    det = a * a11 + b * a12 + c * a13 + d * a14
    if abs(det) < epsilon:
        return det, out

    inv_det = 1.0 / det

    # Column 1 of the inverse is the first cofactor row.
    out[0, 0] = a11 * inv_det
    out[1, 0] = a12 * inv_det
    out[2, 0] = a13 * inv_det
    out[3, 0] = a14 * inv_det

    out[0, 1] = -(b * kp_lo - c * jp_ln + d * jo_kn) * inv_det
    out[1, 1] = +(a * kp_lo - c * ip_lm + d * io_km) * inv_det
    out[2, 1] = -(a * jp_ln - b * ip_lm + d * in_jm) * inv_det
    out[3, 1] = +(a * jo_kn - b * io_km + c * in_jm) * inv_det

    gp_ho = g * p - h * o
    fp_hn = f * p - h * n
    fo_gn = f * o - g * n
    ep_hm = e * p - h * m
    eo_gm = e * o - g * m
    en_fm = e * n - f * m

    out[0, 2] = +(b * gp_ho - c * fp_hn + d * fo_gn) * inv_det
    out[1, 2] = -(a * gp_ho - c * ep_hm + d * eo_gm) * inv_det
    out[2, 2] = +(a * fp_hn - b * ep_hm + d * en_fm) * inv_det
    out[3, 2] = -(a * fo_gn - b * eo_gm + c * en_fm) * inv_det

    gl_hk = g * l - h * k
    fl_hj = f * l - h * j
    fk_gj = f * k - g * j
    el_hi = e * l - h * i
    ek_gi = e * k - g * i
    ej_fi = e * j - f * i

    out[0, 3] = -(b * gl_hk - c * fl_hj + d * fk_gj) * inv_det
    out[1, 3] = +(a * gl_hk - c * el_hi + d * ek_gi) * inv_det
    out[2, 3] = -(a * fl_hj - b * el_hi + d * ej_fi) * inv_det
    out[3, 3] = +(a * fk_gj - b * ek_gi + c * ej_fi) * inv_det

    return det, out


# ═══════════════════════════════════════════════════════════════════════════════
# Matrix
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, eq=False)
class Matrix:
    """
    Immutable 4x4 float64 matrix (row-vector convention).

    ``values`` is a read-only C-contiguous (4, 4) array; element ``mRC`` of
    the usual notation is ``values[R - 1, C - 1]``.
    """
    values: np.ndarray

    def __post_init__(self) -> None:
        arr = np.array(self.values, dtype=np.float64, order="C", copy=True)
        if arr.shape != (4, 4):
            raise ValueError(f"Matrix expects shape (4, 4), got {arr.shape}")
        arr.flags.writeable = False
        object.__setattr__(self, "values", arr)

    @classmethod
    def from_rows(cls, *rows: Sequence[float]) -> Matrix:
        """Builds a matrix from four rows of four numbers."""
        if len(rows) != 4:
            raise ValueError(f"Matrix expects 4 rows, got {len(rows)}")
        return cls(np.array(rows, dtype=np.float64))

    @classmethod
    def from_3x3(cls, block: np.ndarray) -> Matrix:
        """Embeds a 3x3 linear map, identity in the fourth row and column."""
        block = np.asarray(block, dtype=np.float64)
        if block.shape != (3, 3):
            raise ValueError(f"Expected a (3, 3) block, got {block.shape}")
        arr = np.eye(4, dtype=np.float64)
        arr[:3, :3] = block
        return cls(arr)

    @staticmethod
    def identity() -> Matrix:
        return _IDENTITY

    @staticmethod
    def create_rotation_z(radians: float) -> Matrix:
        """
        Rotation around the z axis.

            [  c  s  0  0 ]
            [ -s  c  0  0 ]
            [  0  0  1  0 ]
            [  0  0  0  1 ]
        """
        c = math.cos(radians)
        s = math.sin(radians)
        return Matrix.from_rows(
            ( c,   s,   0.0, 0.0),
            (-s,   c,   0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )

    def __getitem__(self, index):
        return self.values[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    __hash__ = None  # type: ignore[assignment]

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(self.values @ other.values)

    @property
    def linear_part(self) -> np.ndarray:
        """Read-only view of the upper-left 3x3 block."""
        return self.values[:3, :3]

    def determinant(self) -> float:
        return float(_determinant_kernel(self.values))

    def scale_rows(self, sx: float, sy: float, sz: float) -> Matrix:
        """Scales the first three rows (the basis vectors) independently."""
        arr = self.values.copy()
        arr[0, :3] *= sx
        arr[1, :3] *= sy
        arr[2, :3] *= sz
        return Matrix(arr)

    def invert(self) -> Optional[Matrix]:
        """
        Inverse of the matrix, or ``None`` when ``|det| < 1e-8``.

        ``None`` is the only "no inverse" signal; a zero or identity
        matrix is never substituted.
        """
        det, inv = _invert_kernel(self.values, SINGULAR_DETERMINANT_EPSILON)
        if abs(det) < SINGULAR_DETERMINANT_EPSILON:
            return None
        return Matrix(inv)

    def __repr__(self) -> str:
        rows = ", ".join(
            "(" + ", ".join(f"{v:.6g}" for v in row) + ")" for row in self.values
        )
        return f"Matrix({rows})"


_IDENTITY: Final[Matrix] = Matrix(np.eye(4, dtype=np.float64))


# ═══════════════════════════════════════════════════════════════════════════════
# Vectors
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(slots=True, frozen=True)
class Vector3:
    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Vector3:
        return Vector3(0.0, 0.0, 0.0)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @staticmethod
    def transform(position: Vector3, matrix: Matrix) -> Vector3:
        """Transforms (x, y, z, 1) by the matrix."""
        m = matrix.values
        x, y, z = position.x, position.y, position.z
        return Vector3(
            float(x * m[0, 0] + y * m[1, 0] + z * m[2, 0] + m[3, 0]),
            float(x * m[0, 1] + y * m[1, 1] + z * m[2, 1] + m[3, 1]),
            float(x * m[0, 2] + y * m[1, 2] + z * m[2, 2] + m[3, 2]),
        )

    @staticmethod
    def transform_normal(normal: Vector3, matrix: Matrix) -> Vector3:
        """Transforms a direction by the linear part only (no translation)."""
        m = matrix.values
        x, y, z = normal.x, normal.y, normal.z
        return Vector3(
            float(x * m[0, 0] + y * m[1, 0] + z * m[2, 0]),
            float(x * m[0, 1] + y * m[1, 1] + z * m[2, 1]),
            float(x * m[0, 2] + y * m[1, 2] + z * m[2, 2]),
        )


@dataclass(slots=True, frozen=True)
class Vector2:
    x: float
    y: float

    @staticmethod
    def zero() -> Vector2:
        return Vector2(0.0, 0.0)

    @staticmethod
    def transform(position: Vector2, matrix: Matrix) -> Vector2:
        """Transforms (x, y, 0, 1) by the matrix."""
        m = matrix.values
        return Vector2(
            float(position.x * m[0, 0] + position.y * m[1, 0] + m[3, 0]),
            float(position.x * m[0, 1] + position.y * m[1, 1] + m[3, 1]),
        )

    @staticmethod
    def transform_normal(normal: Vector2, matrix: Matrix) -> Vector2:
        m = matrix.values
        return Vector2(
            float(normal.x * m[0, 0] + normal.y * m[1, 0]),
            float(normal.x * m[0, 1] + normal.y * m[1, 1]),
        )

    @staticmethod
    def lerp(value1: Vector2, value2: Vector2, amount: float) -> Vector2:
        return Vector2(
            value1.x + (value2.x - value1.x) * amount,
            value1.y + (value2.y - value1.y) * amount,
        )

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)


# ═══════════════════════════════════════════════════════════════════════════════
# Pixel geometry
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(slots=True, frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)


@dataclass(slots=True, frozen=True)
class Rect:
    """Axis-aligned rectangle, half-open on the right and bottom edges."""
    left:   float
    top:    float
    right:  float
    bottom: float

    @property
    def pos(self) -> Point:
        return Point(self.left, self.top)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains_point(self, point: Point) -> bool:
        return (self.left <= point.x < self.right
                and self.top <= point.y < self.bottom)

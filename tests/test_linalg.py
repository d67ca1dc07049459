# Copyright (c) 2026 opticsWolf
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the 4x4 matrix, vectors and pixel geometry."""

import math

import numpy as np
import pytest

from mired_linalg import Matrix, Point, Rect, Vector2, Vector3


def _random_invertible(seed):
    rng = np.random.RandomState(seed)
    return Matrix(rng.uniform(-1.0, 1.0, (4, 4)) + 4.0 * np.eye(4))


class TestDeterminant:

    def test_identity(self):
        assert Matrix.identity().determinant() == 1.0

    def test_diagonal(self):
        m = Matrix(np.diag([2.0, 3.0, 4.0, 0.5]))
        assert m.determinant() == pytest.approx(12.0)

    @pytest.mark.parametrize("seed", range(5))
    def test_matches_numpy(self, seed):
        m = _random_invertible(seed)
        assert m.determinant() == pytest.approx(np.linalg.det(m.values), rel=1e-9)

    def test_row_swap_flips_sign(self):
        m = _random_invertible(7)
        swapped = Matrix(m.values[[1, 0, 2, 3]])
        assert swapped.determinant() == pytest.approx(-m.determinant(), rel=1e-12)


class TestInvert:

    def test_identity(self):
        assert Matrix.identity().invert() == Matrix.identity()

    @pytest.mark.parametrize("seed", range(10))
    def test_product_is_identity(self, seed):
        m = _random_invertible(seed)
        inv = m.invert()
        assert inv is not None
        np.testing.assert_allclose((m @ inv).values, np.eye(4), atol=1e-6)
        np.testing.assert_allclose((inv @ m).values, np.eye(4), atol=1e-6)

    def test_translation(self):
        m = Matrix.from_rows(
            (1.0, 0.0, 0.0, 0.0),
            (0.0, 1.0, 0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0),
            (5.0, -2.0, 3.0, 1.0),
        )
        inv = m.invert()
        np.testing.assert_allclose(inv.values[3, :3], [-5.0, 2.0, -3.0])

    def test_singular_returns_none(self):
        m = Matrix.from_rows(
            (1.0, 2.0, 3.0, 0.0),
            (2.0, 4.0, 6.0, 0.0),
            (0.0, 1.0, 0.0, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
        assert m.invert() is None

    def test_below_threshold_returns_none(self):
        # det = 1e-12, well-formed but under the 1e-8 singularity threshold.
        m = Matrix(np.diag([1e-3, 1e-3, 1e-3, 1e-3]))
        assert m.invert() is None

    def test_just_above_threshold_inverts(self):
        m = Matrix(np.diag([1e-2, 1e-2, 1e-2, 1e-2 * 1.01]))
        assert m.invert() is not None


class TestMatrixValue:

    def test_is_read_only(self):
        m = Matrix.identity()
        with pytest.raises(ValueError):
            m.values[0, 0] = 2.0

    def test_source_array_is_copied(self):
        src = np.eye(4)
        m = Matrix(src)
        src[0, 0] = 9.0
        assert m[0, 0] == 1.0

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            Matrix(np.eye(3))

    def test_from_3x3_embeds_identity_row(self):
        m = Matrix.from_3x3(np.arange(9.0).reshape(3, 3))
        np.testing.assert_array_equal(m.values[3], [0.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_equal(m.values[:, 3], [0.0, 0.0, 0.0, 1.0])

    def test_scale_rows(self):
        m = Matrix.identity().scale_rows(2.0, 3.0, 4.0)
        np.testing.assert_array_equal(np.diag(m.values), [2.0, 3.0, 4.0, 1.0])


class TestVectors:

    def test_transform_applies_translation(self):
        m = Matrix.from_rows(
            (2.0, 0.0, 0.0, 0.0),
            (0.0, 2.0, 0.0, 0.0),
            (0.0, 0.0, 2.0, 0.0),
            (1.0, 1.0, 1.0, 1.0),
        )
        assert Vector3.transform(Vector3(1.0, 2.0, 3.0), m) == Vector3(3.0, 5.0, 7.0)

    def test_transform_normal_ignores_translation(self):
        m = Matrix.from_rows(
            (2.0, 0.0, 0.0, 0.0),
            (0.0, 2.0, 0.0, 0.0),
            (0.0, 0.0, 2.0, 0.0),
            (1.0, 1.0, 1.0, 1.0),
        )
        assert Vector3.transform_normal(Vector3(1.0, 2.0, 3.0), m) == Vector3(2.0, 4.0, 6.0)

    def test_rotation_z(self):
        m = Matrix.create_rotation_z(math.pi / 2.0)
        v = Vector3.transform_normal(Vector3(1.0, 0.0, 0.0), m)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)
        v2 = Vector2.transform(Vector2(1.0, 0.0), m)
        assert v2.y == pytest.approx(1.0)

    def test_vector2_lerp_and_add(self):
        v = Vector2.lerp(Vector2(0.0, 0.0), Vector2(10.0, -4.0), 0.25)
        assert v == Vector2(2.5, -1.0)
        assert v + Vector2(0.5, 1.0) == Vector2(3.0, 0.0)

    def test_zero(self):
        assert Vector3.zero() == Vector3(0.0, 0.0, 0.0)
        assert Vector2.zero() == Vector2(0.0, 0.0)


class TestGeometry:

    def test_point_arithmetic(self):
        assert Point(1, 2) + Point(3, 4) == Point(4, 6)
        assert Point(1, 2) - Point(3, 4) == Point(-2, -2)

    def test_rect_is_half_open(self):
        rc = Rect(0, 0, 10, 20)
        assert rc.width == 10
        assert rc.height == 20
        assert rc.pos == Point(0, 0)
        assert rc.contains_point(Point(0, 0))
        assert rc.contains_point(Point(9.5, 19.5))
        assert not rc.contains_point(Point(10, 5))
        assert not rc.contains_point(Point(5, 20))
        assert not rc.contains_point(Point(-1, 5))

# Copyright (c) 2026 opticsWolf
# SPDX-License-Identifier: LGPL-3.0-or-later

import math

import pytest

from mired_linalg import Matrix, Vector3
from mired_mathhelper import (
    PI,
    PI_OVER_2,
    PI_OVER_4,
    TWO_PI,
    clamp,
    lerp,
    saturate,
    to_degrees,
    to_radians,
)


def test_constants():
    assert PI == math.pi
    assert TWO_PI == pytest.approx(2.0 * PI)
    assert PI_OVER_2 == pytest.approx(2.0 * PI_OVER_4)


def test_angle_conversion():
    assert to_radians(180.0) == pytest.approx(PI)
    assert to_degrees(PI_OVER_2) == pytest.approx(90.0)
    assert to_degrees(to_radians(37.5)) == pytest.approx(37.5)


def test_rotation_from_degrees():
    m = Matrix.create_rotation_z(to_radians(90.0))
    v = Vector3.transform_normal(Vector3(0.0, 1.0, 0.0), m)
    assert (v.x, v.y) == pytest.approx((-1.0, 0.0), abs=1e-12)


@pytest.mark.parametrize("t, expected", [(0.0, 10.0), (1.0, 100.0), (0.1, 19.0), (2.0, 190.0)])
def test_lerp(t, expected):
    assert lerp(10.0, 100.0, t) == pytest.approx(expected)


def test_clamp():
    assert clamp(120.0, 0.0, 100.0) == 100.0
    assert clamp(-3.0, 0.0, 100.0) == 0.0
    assert clamp(42.0, 0.0, 100.0) == 42.0


@pytest.mark.parametrize("value, expected", [(-0.5, 0.0), (0.25, 0.25), (7.0, 1.0)])
def test_saturate(value, expected):
    assert saturate(value) == expected

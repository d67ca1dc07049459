# Copyright (c) 2026 opticsWolf
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the Planckian locus approximation and mired helpers."""

import numpy as np
import pytest

from mired_colorengine import CieChromaticityXyColor
from mired_locus import (
    chromaticity_from_temperature,
    kelvin_to_mired,
    lab_from_temperature,
    mired_to_kelvin,
    planckian_uv,
    planckian_xy,
)


class TestMired:

    def test_reciprocal(self):
        assert kelvin_to_mired(5000.0) == pytest.approx(200.0)
        assert mired_to_kelvin(200.0) == pytest.approx(5000.0)

    @pytest.mark.parametrize("kelvin", [2000.0, 6504.0, 12000.0])
    def test_roundtrip(self, kelvin):
        assert mired_to_kelvin(kelvin_to_mired(kelvin)) == pytest.approx(kelvin, rel=1e-12)


class TestPlanckianLocus:

    @pytest.mark.parametrize("kelvin, expected", [
        (2856.0, (0.4476, 0.4074)),   # CIE illuminant A, a blackbody
        (6500.0, (0.3135, 0.3236)),
    ])
    def test_known_chromaticities(self, kelvin, expected):
        xy = chromaticity_from_temperature(kelvin)
        assert xy.x == pytest.approx(expected[0], abs=1e-3)
        assert xy.y == pytest.approx(expected[1], abs=1e-3)

    def test_scalar_and_array_agree(self):
        temps = np.array([3000.0, 6500.0, 9000.0])
        batch = planckian_xy(temps)
        assert batch.shape == (3, 2)
        for t, row in zip(temps, batch):
            np.testing.assert_array_equal(planckian_xy(float(t)), row)

    def test_uv_shape(self):
        assert planckian_uv(6500.0).shape == (2,)
        assert planckian_uv([4000.0, 5000.0]).shape == (2, 2)

    def test_warmer_is_redder(self):
        # Along the locus x falls monotonically as temperature rises.
        xs = planckian_xy(np.linspace(2000.0, 15000.0, 40))[:, 0]
        assert np.all(np.diff(xs) < 0.0)

    def test_outside_validated_range_still_finite(self):
        xy = planckian_xy(np.array([500.0, 25000.0, 100000.0]))
        assert np.all(np.isfinite(xy))

    def test_returns_value_type(self):
        assert isinstance(chromaticity_from_temperature(6500.0), CieChromaticityXyColor)


class TestLabFromTemperature:

    def test_luminance_is_held(self):
        lab = lab_from_temperature(kelvin_to_mired(6500.0), 50.0)
        expected_l = 116.0 * 0.5 ** (1.0 / 3.0) - 16.0
        assert lab.l == pytest.approx(expected_l, rel=1e-9)

    def test_lower_temperature_is_warmer(self):
        warm = lab_from_temperature(kelvin_to_mired(4000.0), 60.0)
        cool = lab_from_temperature(kelvin_to_mired(9000.0), 60.0)
        assert warm.a > cool.a
        assert warm.b > cool.b

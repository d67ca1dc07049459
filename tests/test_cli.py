# Copyright (c) 2026 opticsWolf
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Tests for the terminal front end."""

import pytest
from typer.testing import CliRunner

from __about__ import __version__
from mired_cli import app, parse_color
from mired_colorengine import RgbColor

runner = CliRunner()


class TestParseColor:

    def test_hex(self):
        assert parse_color("#ff0000") == RgbColor(1.0, 0.0, 0.0)

    def test_css(self):
        assert parse_color("rgb(0, 255, 0)") == RgbColor(0.0, 1.0, 0.0)

    def test_floats(self):
        assert parse_color(" 0.1, 0.2,0.3 ") == RgbColor(0.1, 0.2, 0.3)

    def test_hsv(self):
        c = parse_color("240,100,100", hsv=True)
        assert (c.r, c.g, c.b) == pytest.approx((0.0, 0.0, 1.0))

    @pytest.mark.parametrize("text", ["nope", "#12345", "1,2", "a,b,c"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_color(text)


class TestCommands:

    def test_grid(self):
        result = runner.invoke(app, ["grid", "#cccccc", "--wing-cells", "2"])
        assert result.exit_code == 0, result.output
        assert "Mired" in result.output
        assert "5x5" in result.output

    def test_grid_single_cell(self):
        result = runner.invoke(app, ["grid", "0.5,0.5,0.5", "-w", "0"])
        assert result.exit_code == 0, result.output
        assert "1x1" in result.output

    def test_bad_color(self):
        result = runner.invoke(app, ["grid", "not-a-colour"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_scale_out_of_range(self):
        result = runner.invoke(app, ["grid", "#cccccc", "--mired-scale", "2"])
        assert result.exit_code != 0

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "LGPL-3.0-or-later" in result.output

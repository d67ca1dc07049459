# -*- coding: utf-8 -*-
"""
Mired: Colour temperature and luminance swatch grids
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Terminal front end: prints the temperature/luminance swatch grid for a colour.

    mired-grid grid "#cc8844" --wing-cells 3 --mired-scale 0.4
    mired-grid grid "30,60,80" --hsv
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from __about__ import __title__, metadata_summary
from mired_colorengine import RgbColor
from mired_temperature import ColorTemperature, GridSettings

app = typer.Typer(help="Colour temperature / luminance swatch grid generator")
console = Console()


def parse_color(text: str, hsv: bool = False) -> RgbColor:
    """
    Parses a colour argument.

    Accepted forms: ``#rrggbb``, ``rgb(r, g, b)`` (0..255), ``r,g,b`` linear
    floats, or with ``hsv=True`` ``h,s,v`` (degrees, 0..100, 0..100).
    """
    text = text.strip()
    if text.startswith("#") and not hsv:
        return RgbColor.from_hex(text)
    if text.lower().startswith("rgb(") and not hsv:
        return RgbColor.from_css_rgb(text)

    parts = [p for p in text.replace(" ", "").split(",") if p]
    if len(parts) != 3:
        raise ValueError(f"Expected three comma separated numbers, got {text!r}")
    values = [float(p) for p in parts]
    if hsv:
        return RgbColor.from_hsv(*values)
    return RgbColor(*values)


def _swatch(color: RgbColor, center: bool) -> Text:
    hex_color = color.to_hex_string()
    label = Text("██ ", style=hex_color)
    label.append(hex_color, style="bold" if center else "dim")
    return label


def render_grid(controller: ColorTemperature) -> Table:
    """Rich table of the grid; rows run from brightest (top) to darkest."""
    grid = controller.grid
    wing = grid.num_wing_cells
    shift = controller.shift

    table = Table(box=None, padding=(0, 1), show_header=True)
    table.add_column("ΔL", style="bold cyan", justify="right", no_wrap=True)
    for x in range(-wing, wing + 1):
        table.add_column(f"{shift.mired_at(x):.0f} M", justify="center", no_wrap=True)

    for y in range(-wing, wing + 1):
        row = [f"{-y * shift.luminance_step:+.2f}"]
        for x in range(-wing, wing + 1):
            row.append(_swatch(grid.cell(x, y), center=(x == 0 and y == 0)))
        table.add_row(*row)
    return table


@app.command()
def grid(
    color: str = typer.Argument(..., help="Centre colour: #rrggbb, rgb(r, g, b) or r,g,b."),
    wing_cells: int = typer.Option(3, "--wing-cells", "-w", min=0, help="Cells on each side of the centre."),
    mired_scale: float = typer.Option(0.1, "--mired-scale", "-m", min=0.0, max=1.0,
                                      help="Temperature spread, 0..1 of 10..100 mired."),
    luminance_scale: float = typer.Option(0.1, "--luminance-scale", "-l", min=0.0, max=1.0,
                                          help="Lightness spread, 0..1 of 0.1..2.0 L*."),
    hsv: bool = typer.Option(False, "--hsv", help="Interpret COLOR as h,s,v."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log recompute details."),
):
    """Print the swatch grid around COLOR."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        center = parse_color(color, hsv=hsv)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    controller = ColorTemperature(
        GridSettings(
            wing_cells=wing_cells,
            mired_scale=mired_scale,
            luminance_scale=luminance_scale,
        ),
        color=center,
    )

    console.print(Panel.fit(
        f"[bold cyan]{__title__}[/bold cyan]  centre {center.to_hex_string()}  "
        f"({controller.grid.num_cells}x{controller.grid.num_cells})"
    ))
    console.print(render_grid(controller))


@app.command()
def version():
    """Show the version and licence."""
    meta = metadata_summary()
    console.print(f"{meta['title']} {meta['version']} ({meta['license']})")
    console.print(meta["description"], style="dim")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

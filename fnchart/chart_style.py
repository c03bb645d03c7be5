"""Style and default-configuration contracts for :class:`fnchart.chart.Chart`.

This module centralizes the discoverable style fields used by the grid and
function renderers, together with the compiled-in defaults of a chart (axis
extremums, surface size, transition duration). Keeping these values outside
``chart.py`` gives tests a single place to lock layout semantics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any

from .geometry import Extremum

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_X_EXTREMUM = Extremum(-20.0, 20.0)
DEFAULT_Y_EXTREMUM = Extremum(-100.0, 100.0)
DEFAULT_DURATION_MS = 1000.0
DEFAULT_FRAME_INTERVAL_MS = 1000.0 / 60.0
TICKS_PER_HALF_AXIS = 10

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class FontSpec:
    """Font used for tick labels.

    ``family`` is handed to Pillow's TrueType loader; when the file cannot be
    found the raster surface falls back to Pillow's default font at ``size``.
    """

    family: str = "DejaVuSans.ttf"
    size: int = 11


@dataclass(frozen=True)
class ChartStyle:
    """
    Visual layout options shared by the grid and function renderers.

    Parameters
    ----------
    padding:
        Inset (pixels) between the surface edge and the drawing rectangle.
    dash_size:
        Length (pixels) of each tick mark, centered on its axis.
    label_margin:
        Gap (pixels) between the end of a tick mark and its label.
    label_angle:
        Label rotation in radians, clockwise on screen.
    label_precision:
        ``0`` prints whole numbers, ``1`` prints one decimal.
    font:
        Tick label font.
    axis_color, axis_width:
        Stroke of the axis lines and tick marks.
    label_color:
        Fill of the tick labels.
    line_color, line_width:
        Stroke of the plotted function.
    background:
        Colour under both layers when compositing an image.
    """

    padding: float = 20.0
    dash_size: float = 6.0
    label_margin: float = 4.0
    label_angle: float = math.pi / 4
    label_precision: int = 0
    font: FontSpec = field(default_factory=FontSpec)
    axis_color: Color = (120, 120, 120, 255)
    axis_width: int = 1
    label_color: Color = (80, 80, 80, 255)
    line_color: Color = (37, 99, 235, 255)
    line_width: int = 2
    background: Color = (255, 255, 255, 255)

    def __post_init__(self) -> None:
        if self.label_precision not in (0, 1):
            raise ValueError(
                f"label_precision must be 0 or 1, got {self.label_precision!r}"
            )

    def with_options(self, **overrides: Any) -> "ChartStyle":
        """Return a copy with the given fields replaced."""
        unknown = set(overrides) - set(CHART_STYLE_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown chart style option(s): {sorted(unknown)}")
        return replace(self, **overrides)


CHART_STYLE_OPTIONS: dict[str, str] = {
    "padding": "Inset in pixels between the surface edge and the plotted area.",
    "dash_size": "Tick mark length in pixels, centered on the axis.",
    "label_margin": "Gap in pixels between a tick mark and its label.",
    "label_angle": "Tick label rotation in radians, clockwise on screen.",
    "label_precision": "Tick label decimals: 0 (whole numbers) or 1.",
    "font": "FontSpec(family, size) used for tick labels.",
    "axis_color": "RGBA tuple for axis lines and tick marks.",
    "axis_width": "Axis line width in pixels.",
    "label_color": "RGBA tuple for tick labels.",
    "line_color": "RGBA tuple for the plotted function.",
    "line_width": "Plotted function line width in pixels.",
    "background": "RGBA tuple painted under both layers in composited images.",
}


__all__ = [
    "CHART_STYLE_OPTIONS",
    "ChartStyle",
    "Color",
    "DEFAULT_DURATION_MS",
    "DEFAULT_FRAME_INTERVAL_MS",
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "DEFAULT_X_EXTREMUM",
    "DEFAULT_Y_EXTREMUM",
    "FontSpec",
    "TICKS_PER_HALF_AXIS",
]

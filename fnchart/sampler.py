"""Function sampling and polyline plotting on the foreground layer.

Purpose
-------
Walks every integer pixel column of the drawing rectangle, maps the column back
to data space, evaluates the plotted function, maps the value to a pixel row
and strokes the resulting polyline.

Undefined values
----------------
A plotted function may be partial. Whatever it does for an input outside its
domain (return ``nan`` or an infinity, return a complex number, raise
``ValueError``/``ArithmeticError``) the sampled value becomes ``0.0``, so the
polyline is never broken and rendering never aborts.

Examples
--------
>>> from fnchart.geometry import Extremum, compute_geometry
>>> g = compute_geometry(100, 100, 10, Extremum(-1, 1), Extremum(-1, 1))
>>> xs, ys = sample_function(lambda x: 0.0, g)
>>> len(xs), float(ys[0])
(81, 50.0)
"""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np

from .chart_style import ChartStyle
from .geometry import Geometry
from .surface import Surface

PlotFunction = Callable[[float], Any]


def normalize_value(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it is undefined."""
    if isinstance(value, (complex, np.complexfloating)):
        if value.imag != 0:
            return 0.0
        value = value.real
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def evaluate(fn: PlotFunction, x: float) -> float:
    """Evaluate ``fn`` at ``x`` with undefined results normalized to zero."""
    try:
        with np.errstate(all="ignore"):
            value = fn(x)
    except (ValueError, ArithmeticError):
        return 0.0
    return normalize_value(value)


def pixel_columns(geometry: Geometry) -> np.ndarray:
    """Return the integer pixel columns from ``rect.left`` to ``rect.right`` inclusive."""
    first = math.ceil(geometry.rect.left)
    last = math.floor(geometry.rect.right)
    return np.arange(first, last + 1, dtype=float)


def sample_function(fn: PlotFunction, geometry: Geometry) -> tuple[np.ndarray, np.ndarray]:
    """Return the pixel-space points ``(xs, ys)`` of ``fn`` over the drawing rectangle."""
    columns = pixel_columns(geometry)
    values = np.array(
        [evaluate(fn, geometry.data_x_at(column)) for column in columns],
        dtype=float,
    )
    return columns, geometry.pixel_y_for(values)


def plot_function(
    surface: Surface,
    fn: PlotFunction,
    geometry: Geometry,
    style: ChartStyle,
) -> tuple[np.ndarray, np.ndarray]:
    """Clear ``surface`` and stroke ``fn`` as a polyline; return the drawn points."""
    xs, ys = sample_function(fn, geometry)

    surface.clear()
    surface.begin_path()
    surface.move_to(float(xs[0]), float(ys[0]))
    for x, y in zip(xs[1:], ys[1:]):
        surface.line_to(float(x), float(y))
    surface.stroke(style.line_color, style.line_width)
    return xs, ys


__all__ = [
    "PlotFunction",
    "evaluate",
    "normalize_value",
    "pixel_columns",
    "plot_function",
    "sample_function",
]

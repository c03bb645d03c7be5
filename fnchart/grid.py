"""Axis and tick-label rendering for the static grid layer.

Purpose
-------
Paints, once, the two axis lines through the chart center plus evenly spaced
tick marks and rotated numeric labels along each axis.

Tick layout
-----------
For each axis the ticks start at the axis middle value ``(min + max) / 2``
and step by ``(max - middle) / 10`` towards both edges, which yields exactly
21 ticks with the outermost ones on the extremums. Values are computed from
their index (``middle + i * step``) rather than by repeated addition so the
edge ticks land exactly on ``min`` and ``max``.

Label placement
---------------
Labels are rotated clockwise by ``style.label_angle`` and positioned so that
one corner of the rotated text box touches an anchor just past the tick mark,
regardless of how long the label is:

- horizontal axis: the label hangs below its tick, top-left corner on the
  anchor;
- vertical axis: the label sits left of its tick, top-right corner on the
  anchor.

All functions take the geometry and style explicitly; nothing here keeps
state between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Literal

from .chart_style import TICKS_PER_HALF_AXIS, ChartStyle
from .geometry import Extremum, Geometry, Point
from .surface import Surface, TextMetrics

Axis = Literal["x", "y"]


@dataclass(frozen=True)
class Tick:
    """A tick that was drawn: its axis, data value, pixel position and label."""

    axis: Axis
    value: float
    position: Point
    label: str
    label_center: Point


def axis_ticks(extremum: Extremum, count: int = TICKS_PER_HALF_AXIS) -> list[float]:
    """Return tick values for one axis.

    The first value is the axis middle, followed by ``count`` values up to
    ``extremum.max`` and ``count`` values down to ``extremum.min``.

    Examples
    --------
    >>> axis_ticks(Extremum(-20, 20), count=2)
    [0.0, 10.0, 20.0, -10.0, -20.0]
    """
    start = extremum.middle
    stop = extremum.max
    step = (stop - start) / count

    ticks = [float(start)]
    ticks.extend(float(start + i * step) for i in range(1, count + 1))
    ticks.extend(float(start - i * step) for i in range(1, count + 1))
    return ticks


# Wide enough for every finite float written out in full.
_LABEL_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def format_tick_label(value: float, precision: int = 0) -> str:
    """Format a tick value as a whole number or with one decimal.

    Halves round away from zero (``2.5`` prints ``3``) and negative zero
    prints without its sign.
    """
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(str(value)).quantize(quantum, context=_LABEL_CONTEXT)
    if rounded == 0:
        rounded = abs(rounded)
    return str(rounded)


def label_position(anchor: Point, size: TextMetrics, angle: float, axis: Axis) -> Point:
    """Return the center at which a rotated label must be drawn.

    Parameters
    ----------
    anchor : Point
        Pixel point that the label's near corner should touch.
    size : TextMetrics
        Measured (unrotated) label size.
    angle : float
        Clockwise rotation in radians.
    axis : {"x", "y"}
        Axis the label belongs to; selects which corner is the near one.
    """
    half_w = size.width / 2
    half_h = size.height / 2
    c, s = math.cos(angle), math.sin(angle)

    if axis == "x":
        return Point(
            x=anchor.x + half_w * c - half_h * s,
            y=anchor.y + half_w * s + half_h * c,
        )
    return Point(
        x=anchor.x - half_w * c - half_h * s,
        y=anchor.y - half_w * s + half_h * c,
    )


def draw_axes(surface: Surface, geometry: Geometry, style: ChartStyle) -> None:
    rect, center = geometry.rect, geometry.center
    surface.begin_path()
    surface.move_to(rect.left, center.y)
    surface.line_to(rect.right, center.y)
    surface.move_to(center.x, rect.top)
    surface.line_to(center.x, rect.bottom)
    surface.stroke(style.axis_color, style.axis_width)


def draw_label(surface: Surface, text: str, center: Point, style: ChartStyle) -> None:
    surface.save()
    surface.translate(center.x, center.y)
    surface.rotate(style.label_angle)
    surface.fill_text(text, 0, 0, style.font, style.label_color)
    surface.restore()


def draw_horizontal_tick(
    surface: Surface, geometry: Geometry, style: ChartStyle, value: float
) -> Tick:
    """Draw one x-axis tick: a vertical dash and a label below it."""
    x = geometry.pixel_x_for(value)
    y = geometry.center.y
    half_dash = style.dash_size / 2

    surface.begin_path()
    surface.move_to(x, y - half_dash)
    surface.line_to(x, y + half_dash)
    surface.stroke(style.axis_color, style.axis_width)

    text = format_tick_label(value, style.label_precision)
    anchor = Point(x, y + half_dash + style.label_margin)
    center = label_position(
        anchor, surface.measure_text(text, style.font), style.label_angle, "x"
    )
    draw_label(surface, text, center, style)
    return Tick("x", value, Point(x, y), text, center)


def draw_vertical_tick(
    surface: Surface, geometry: Geometry, style: ChartStyle, value: float
) -> Tick:
    """Draw one y-axis tick: a horizontal dash and a label to its left."""
    x = geometry.center.x
    y = geometry.pixel_y_for(value)
    half_dash = style.dash_size / 2

    surface.begin_path()
    surface.move_to(x - half_dash, y)
    surface.line_to(x + half_dash, y)
    surface.stroke(style.axis_color, style.axis_width)

    text = format_tick_label(value, style.label_precision)
    anchor = Point(x - half_dash - style.label_margin, y)
    center = label_position(
        anchor, surface.measure_text(text, style.font), style.label_angle, "y"
    )
    draw_label(surface, text, center, style)
    return Tick("y", value, Point(x, y), text, center)


def draw_grid(surface: Surface, geometry: Geometry, style: ChartStyle) -> list[Tick]:
    """Paint axes, ticks and labels; return the ticks in drawing order."""
    draw_axes(surface, geometry, style)

    ticks = [
        draw_horizontal_tick(surface, geometry, style, value)
        for value in axis_ticks(geometry.x_extremum)
    ]
    ticks.extend(
        draw_vertical_tick(surface, geometry, style, value)
        for value in axis_ticks(geometry.y_extremum)
    )
    return ticks


__all__ = [
    "Tick",
    "axis_ticks",
    "draw_axes",
    "draw_grid",
    "draw_horizontal_tick",
    "draw_label",
    "draw_vertical_tick",
    "format_tick_label",
    "label_position",
]

"""Pixel-space geometry for a fixed Cartesian viewport.

Purpose
-------
Maps the data-space extremums of both axes and a rectangular pixel surface to
the quantities every renderer needs:

- the drawing rectangle (surface inset by ``padding``),
- the scale (pixels per data unit, per axis),
- the center (midpoint of the drawing rectangle, where the axes cross).

Architecture notes
------------------
Everything here is pure. ``compute_geometry`` is called once when a chart is
built; calling it again with new extremums or a new surface size is all that
is needed to re-derive the layout, no cached state has to be invalidated.

Examples
--------
>>> g = compute_geometry(800, 600, 20, Extremum(-20, 20), Extremum(-100, 100))
>>> g.center
Point(x=400.0, y=300.0)
>>> g.scale.x
19.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import DegenerateGeometryError


@dataclass(frozen=True)
class Extremum:
    """Inclusive data-space bounds of one axis."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def middle(self) -> float:
        return (self.min + self.max) / 2


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Pixel edges of the drawable area."""

    top: float
    right: float
    bottom: float
    left: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class Geometry:
    """Drawing rectangle, scale and center derived from extremums and size.

    ``scale`` is stored as a :class:`Point` of pixels-per-unit values so that
    ``scale.x`` and ``scale.y`` read naturally at the call sites.
    """

    width: int
    height: int
    padding: float
    x_extremum: Extremum
    y_extremum: Extremum
    rect: Rect
    scale: Point
    center: Point

    def data_x_at(self, column: float) -> float:
        """Return the data-space x shown at pixel column ``column``."""
        return self.x_extremum.min + (column - self.rect.left) / self.scale.x

    def pixel_y_for(self, value: float) -> float:
        """Return the pixel row of a data-space y value.

        The rect center shows the middle of the y extremum, so function values
        and vertical-axis ticks share one mapping for any extremum (for the
        default symmetric axis this is ``center.y - scale.y * value``).
        """
        return self.center.y - self.scale.y * (value - self.y_extremum.middle)

    def pixel_x_for(self, value: float) -> float:
        """Return the pixel column of a data-space x value."""
        return self.rect.left + (value - self.x_extremum.min) * self.scale.x


def _check_extremum(extremum: Extremum, *, axis: str) -> None:
    if not (math.isfinite(extremum.min) and math.isfinite(extremum.max)):
        raise DegenerateGeometryError(
            f"{axis}-extremum must be finite, got ({extremum.min!r}, {extremum.max!r})"
        )
    if not extremum.min < extremum.max:
        raise DegenerateGeometryError(
            f"{axis}-extremum requires min < max, got ({extremum.min!r}, {extremum.max!r})"
        )


def compute_geometry(
    width: int,
    height: int,
    padding: float,
    x_extremum: Extremum,
    y_extremum: Extremum,
) -> Geometry:
    """Compute the drawing rectangle, scale and center of a chart surface.

    Parameters
    ----------
    width, height : int
        Surface size in pixels; both must be positive.
    padding : float
        Inset applied on every side; ``2 * padding`` must stay below
        ``min(width, height)``.
    x_extremum, y_extremum : Extremum
        Data-space bounds of each axis, ``min < max``.

    Returns
    -------
    Geometry

    Raises
    ------
    DegenerateGeometryError
        If any precondition above is violated.
    """
    if width <= 0 or height <= 0:
        raise DegenerateGeometryError(
            f"surface size must be positive, got {width}x{height}"
        )
    if padding < 0 or 2 * padding >= min(width, height):
        raise DegenerateGeometryError(
            f"padding {padding!r} leaves no drawable area on a {width}x{height} surface"
        )
    _check_extremum(x_extremum, axis="x")
    _check_extremum(y_extremum, axis="y")

    rect = Rect(
        top=padding,
        right=width - padding,
        bottom=height - padding,
        left=padding,
    )
    scale = Point(
        x=rect.width / x_extremum.span,
        y=rect.height / y_extremum.span,
    )
    center = Point(
        x=(rect.left + rect.right) / 2,
        y=(rect.top + rect.bottom) / 2,
    )
    return Geometry(
        width=width,
        height=height,
        padding=padding,
        x_extremum=x_extremum,
        y_extremum=y_extremum,
        rect=rect,
        scale=scale,
        center=center,
    )


__all__ = ["Extremum", "Point", "Rect", "Geometry", "compute_geometry"]

"""Raster drawing surfaces for the chart layers.

Purpose
-------
The renderers in :mod:`fnchart.grid` and :mod:`fnchart.sampler` only talk to
the small canvas-like :class:`Surface` protocol defined here: paths, strokes,
centered text, a save/restore-scoped affine transform and text metrics.

:class:`RasterSurface` implements that protocol on top of a Pillow RGBA image.
Pillow has no notion of a current transform, so the surface keeps its own
3x3 affine matrix: path points are transformed before they reach
``ImageDraw``, and text is rendered into a small tile that is rotated by the
matrix angle and pasted centered on the transformed anchor.

:class:`Layers` bundles the two same-size surfaces a chart owns (grid beneath,
chart above) and composites them into a single image.

Important gotchas
-----------------
- ``rotate`` takes radians and is clockwise on screen (y grows downward), the
  same convention as an HTML canvas.
- Path coordinates are clipped to ``COORDINATE_LIMIT`` before stroking so that
  huge function values cannot overflow Pillow's integer conversion.
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .chart_style import Color, FontSpec

COORDINATE_LIMIT = 1.0e6
TRANSPARENT: Color = (0, 0, 0, 0)


@dataclass(frozen=True)
class TextMetrics:
    """Rendered extent of a piece of text, in pixels."""

    width: float
    height: float


class Surface(Protocol):
    """Minimal 2D drawing contract used by the renderers."""

    width: int
    height: int

    def clear(self) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self, color: Color, width: int) -> None: ...

    def fill_text(self, text: str, x: float, y: float, font: FontSpec, color: Color) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, angle: float) -> None: ...

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics: ...

    def to_image(self) -> Image.Image: ...


@lru_cache(maxsize=None)
def load_font(spec: FontSpec) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    """Return a Pillow font for ``spec``, falling back to Pillow's default font."""
    try:
        return ImageFont.truetype(spec.family, spec.size)
    except OSError:
        return ImageFont.load_default(size=spec.size)


def _translation(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def _rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _clip(value: float) -> float:
    return min(max(value, -COORDINATE_LIMIT), COORDINATE_LIMIT)


class RasterSurface:
    """Pillow-backed implementation of :class:`Surface`.

    Parameters
    ----------
    width, height : int
        Pixel size of the underlying RGBA image.

    Examples
    --------
    >>> s = RasterSurface(40, 30)
    >>> s.begin_path(); s.move_to(0, 15); s.line_to(39, 15)
    >>> s.stroke((0, 0, 0, 255), 1)
    >>> s.image.getpixel((20, 15))
    (0, 0, 0, 255)
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGBA", (self.width, self.height), TRANSPARENT)
        self._draw = ImageDraw.Draw(self.image)
        self._matrix = np.identity(3)
        self._saved: list[np.ndarray] = []
        self._subpaths: list[list[tuple[float, float]]] = []

    # --- Pixels ---

    def clear(self) -> None:
        self.image.paste(TRANSPARENT, (0, 0, self.width, self.height))

    def to_image(self) -> Image.Image:
        return self.image

    # --- Transform ---

    def save(self) -> None:
        self._saved.append(self._matrix.copy())

    def restore(self) -> None:
        if self._saved:
            self._matrix = self._saved.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._matrix = self._matrix @ _translation(dx, dy)

    def rotate(self, angle: float) -> None:
        self._matrix = self._matrix @ _rotation(angle)

    def _apply(self, x: float, y: float) -> tuple[float, float]:
        tx, ty, _ = self._matrix @ np.array([x, y, 1.0])
        return _clip(float(tx)), _clip(float(ty))

    @property
    def _angle(self) -> float:
        return math.atan2(self._matrix[1, 0], self._matrix[0, 0])

    # --- Paths ---

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([self._apply(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append(self._apply(x, y))

    def stroke(self, color: Color, width: int) -> None:
        for points in self._subpaths:
            if len(points) >= 2:
                self._draw.line(points, fill=tuple(color), width=int(width), joint="curve")

    # --- Text ---

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics:
        left, top, right, bottom = load_font(font).getbbox(text)
        return TextMetrics(width=float(right - left), height=float(bottom - top))

    def fill_text(self, text: str, x: float, y: float, font: FontSpec, color: Color) -> None:
        """Draw ``text`` centered on ``(x, y)`` under the current transform."""
        pil_font = load_font(font)
        left, top, right, bottom = pil_font.getbbox(text)
        tile = Image.new(
            "RGBA",
            (int(math.ceil(right - left)) + 2, int(math.ceil(bottom - top)) + 2),
            TRANSPARENT,
        )
        ImageDraw.Draw(tile).text((1 - left, 1 - top), text, font=pil_font, fill=tuple(color))

        angle = self._angle
        if angle:
            # Pillow rotates counter-clockwise for positive angles.
            tile = tile.rotate(-math.degrees(angle), resample=Image.Resampling.BICUBIC, expand=True)

        cx, cy = self._apply(x, y)
        dest = (int(round(cx - tile.width / 2)), int(round(cy - tile.height / 2)))
        self.image.paste(tile, dest, tile)


class Layers:
    """The two stacked surfaces a chart paints on: ``grid`` below ``chart``."""

    def __init__(
        self,
        width: int,
        height: int,
        surface_factory: Callable[[int, int], Surface] = RasterSurface,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = surface_factory(self.width, self.height)
        self.chart = surface_factory(self.width, self.height)

    def composite(self, background: Color = (255, 255, 255, 255)) -> Image.Image:
        """Return a new image with both layers painted over ``background``."""
        base = Image.new("RGBA", (self.width, self.height), tuple(background))
        for layer in (self.grid, self.chart):
            base.alpha_composite(layer.to_image().convert("RGBA"))
        return base

    def to_png(self, background: Color = (255, 255, 255, 255)) -> bytes:
        buffer = io.BytesIO()
        self.composite(background).save(buffer, format="PNG")
        return buffer.getvalue()


__all__ = [
    "COORDINATE_LIMIT",
    "Layers",
    "RasterSurface",
    "Surface",
    "TextMetrics",
    "load_font",
]

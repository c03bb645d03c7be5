from __future__ import annotations

import math

import numpy as np

from fnchart.chart_style import FontSpec
from fnchart.surface import Layers, RasterSurface

BLACK = (0, 0, 0, 255)


def _alpha(surface: RasterSurface) -> np.ndarray:
    return np.asarray(surface.to_image())[:, :, 3]


def test_stroke_draws_only_the_current_path() -> None:
    surface = RasterSurface(40, 30)
    surface.begin_path()
    surface.move_to(0, 15)
    surface.line_to(39, 15)
    surface.stroke(BLACK, 1)

    alpha = _alpha(surface)
    assert alpha[15].min() == 255
    assert alpha[0].max() == 0

    surface.clear()
    assert _alpha(surface).max() == 0


def test_translate_and_rotate_transform_path_points() -> None:
    surface = RasterSurface(40, 40)
    surface.save()
    surface.translate(20, 20)
    surface.rotate(math.pi / 2)
    surface.begin_path()
    surface.move_to(0, 0)
    surface.line_to(10, 0)
    surface.stroke(BLACK, 1)
    surface.restore()

    alpha = _alpha(surface)
    # Clockwise on screen: +x turns into +y.
    assert alpha[25, 20] > 0
    assert alpha[20, 25] == 0


def test_restore_without_save_is_harmless() -> None:
    surface = RasterSurface(10, 10)
    surface.restore()
    surface.begin_path()
    surface.move_to(0, 5)
    surface.line_to(9, 5)
    surface.stroke(BLACK, 1)

    assert _alpha(surface)[5].max() > 0


def test_huge_coordinates_are_clipped() -> None:
    surface = RasterSurface(20, 20)
    surface.begin_path()
    surface.move_to(10, 10)
    surface.line_to(10, -1e300)
    surface.stroke(BLACK, 1)

    assert _alpha(surface)[0, 10] > 0


def test_fill_text_is_centered_on_the_anchor() -> None:
    surface = RasterSurface(100, 60)
    font = FontSpec(size=14)

    surface.fill_text("88", 50, 30, font, BLACK)

    ys, xs = np.nonzero(_alpha(surface))
    assert len(xs) > 0
    assert abs((xs.min() + xs.max()) / 2 - 50) <= 2
    assert abs((ys.min() + ys.max()) / 2 - 30) <= 2


def test_measure_text_grows_with_the_text() -> None:
    surface = RasterSurface(10, 10)
    font = FontSpec(size=12)

    short = surface.measure_text("1", font)
    long = surface.measure_text("-100", font)

    assert long.width > short.width > 0
    assert long.height > 0


def test_layers_composite_grid_below_chart() -> None:
    layers = Layers(10, 10)
    for surface, color in ((layers.grid, (255, 0, 0, 255)), (layers.chart, (0, 0, 255, 255))):
        surface.begin_path()
        surface.move_to(0, 5)
        surface.line_to(9, 5)
        surface.stroke(color, 1)

    image = layers.composite((255, 255, 255, 255))

    assert image.getpixel((5, 5)) == (0, 0, 255, 255)
    assert image.getpixel((5, 0)) == (255, 255, 255, 255)
    assert layers.to_png().startswith(b"\x89PNG")

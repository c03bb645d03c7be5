"""Animated single-function chart.

Purpose
-------
``Chart`` is the coordinator that ties the rendering pieces together:

- geometry is computed once from the surface size and the axis extremums
  (:mod:`fnchart.geometry`);
- the grid layer is painted once (:mod:`fnchart.grid`);
- every function assignment starts an eased transition
  (:mod:`fnchart.transition`) whose frames repaint only the chart layer
  (:mod:`fnchart.sampler`).

The chart owns both layers for its whole lifetime. Hosts observe it through
three hook registries: ``on_transition_start``, ``on_transition_end`` and
``on_draw`` (after every foreground repaint).

Examples
--------
>>> chart = Chart(400, 300, duration_ms=0)  # doctest: +SKIP
>>> chart.set_function(lambda x: x**2)  # doctest: +SKIP
>>> chart.render_image().save("square.png")  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Hashable, Optional

import numpy as np
from PIL import Image

from .animation import FrameScheduler
from .chart_style import (
    DEFAULT_DURATION_MS,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DEFAULT_X_EXTREMUM,
    DEFAULT_Y_EXTREMUM,
    ChartStyle,
)
from .easing import EasingFunction, linear
from .functions import PlotFunction
from .geometry import Extremum, Geometry, compute_geometry
from .grid import Tick, draw_grid
from .hooks import HookRegistry
from .sampler import plot_function
from .surface import Layers, RasterSurface, Surface
from .transition import Transition, TransitionController, TransitionEvent

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class Chart:
    """
    A Cartesian function plot that animates between assigned functions.

    Parameters
    ----------
    width, height : int, optional
        Surface size in pixels.
    x_extremum, y_extremum : Extremum or tuple[float, float], optional
        Fixed data-space bounds of each axis.
    style : ChartStyle, optional
        Layout and colour options.
    duration_ms : float, optional
        Transition length.
    easing : callable or str, optional
        Initial easing (identity by default).
    scheduler : FrameScheduler, optional
        Frame driver; tests pass one with a fake clock.
    animate_initial : bool, optional
        Animate the first function in from the zero function (default) or
        paint it directly.
    cancel_superseded : bool, optional
        Make only the most recent transition draw.
    surface_factory : callable, optional
        ``(width, height) -> Surface`` used for both layers.

    Raises
    ------
    DegenerateGeometryError
        If the extremums or the surface size cannot form a valid geometry.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        x_extremum: Extremum | tuple[float, float] = DEFAULT_X_EXTREMUM,
        y_extremum: Extremum | tuple[float, float] = DEFAULT_Y_EXTREMUM,
        style: Optional[ChartStyle] = None,
        duration_ms: float = DEFAULT_DURATION_MS,
        easing: Any = linear,
        scheduler: Optional[FrameScheduler] = None,
        animate_initial: bool = True,
        cancel_superseded: bool = False,
        surface_factory: Callable[[int, int], Surface] = RasterSurface,
    ) -> None:
        self.style = style if style is not None else ChartStyle()
        self.geometry: Geometry = compute_geometry(
            int(width),
            int(height),
            self.style.padding,
            _as_extremum(x_extremum),
            _as_extremum(y_extremum),
        )
        self.layers = Layers(self.geometry.width, self.geometry.height, surface_factory)
        self.ticks: list[Tick] = draw_grid(self.layers.grid, self.geometry, self.style)

        self._draw_hooks = HookRegistry("draw")
        self._last_points: Optional[tuple[np.ndarray, np.ndarray]] = None
        self._transitions = TransitionController(
            self._draw,
            scheduler=scheduler,
            duration_ms=duration_ms,
            easing=easing,
            animate_initial=animate_initial,
            cancel_superseded=cancel_superseded,
        )
        logger.info(
            "chart %dx%d x=[%g, %g] y=[%g, %g]",
            self.geometry.width,
            self.geometry.height,
            self.geometry.x_extremum.min,
            self.geometry.x_extremum.max,
            self.geometry.y_extremum.min,
            self.geometry.y_extremum.max,
        )

    # --- Function / easing ---

    @property
    def function(self) -> PlotFunction:
        """Target function of the latest assignment (zero before any)."""
        return self._transitions.function

    def set_function(self, fn: Any) -> Optional[asyncio.Task]:
        """
        Assign a new plotted function and start the transition to it.

        Parameters
        ----------
        fn : callable or sympy.Expr
            Function of one real argument.

        Returns
        -------
        asyncio.Task or None
            Task of the transition when an event loop is running.

        Raises
        ------
        InvalidAssignmentError
            If ``fn`` is not a usable function; nothing is drawn.
        """
        return self._transitions.set_function(fn)

    @property
    def easing(self) -> EasingFunction:
        return self._transitions.easing

    def set_easing(self, easing: Any) -> None:
        """Set the easing (callable or catalog name) for later transitions."""
        self._transitions.set_easing(easing)

    @property
    def duration_ms(self) -> float:
        return self._transitions.duration_ms

    @duration_ms.setter
    def duration_ms(self, value: float) -> None:
        self._transitions.duration_ms = float(value)

    # --- Transition state ---

    @property
    def is_transitioning(self) -> bool:
        return self._transitions.is_transitioning

    @property
    def transition(self) -> Optional[Transition]:
        return self._transitions.transition

    async def wait(self) -> None:
        """Wait for every running transition to finish."""
        await self._transitions.wait()

    # --- Hooks ---

    def on_transition_start(
        self, callback: Callable[[TransitionEvent], Any], hook_id: Optional[Hashable] = None
    ) -> Hashable:
        """Register a callback fired synchronously when a transition begins."""
        return self._transitions.start_hooks.add_hook(callback, hook_id)

    def on_transition_end(
        self, callback: Callable[[TransitionEvent], Any], hook_id: Optional[Hashable] = None
    ) -> Hashable:
        """Register a callback fired after a transition's final frame."""
        return self._transitions.end_hooks.add_hook(callback, hook_id)

    def on_draw(self, callback: Callable[["Chart"], Any], hook_id: Optional[Hashable] = None) -> Hashable:
        """Register a callback fired after every foreground repaint."""
        return self._draw_hooks.add_hook(callback, hook_id)

    def remove_hook(self, hook_id: Hashable) -> bool:
        """Unregister a hook from whichever registry holds it."""
        registries = (
            self._transitions.start_hooks,
            self._transitions.end_hooks,
            self._draw_hooks,
        )
        return any(registry.remove_hook(hook_id) for registry in registries)

    # --- Rendering ---

    @property
    def points(self) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Pixel points of the last foreground polyline, ``None`` before the first draw."""
        return self._last_points

    def _draw(self, fn: PlotFunction) -> None:
        self._last_points = plot_function(self.layers.chart, fn, self.geometry, self.style)
        self._draw_hooks.fire(self)

    def render_image(self) -> Image.Image:
        """Return the grid and chart layers composited over the background."""
        return self.layers.composite(self.style.background)

    def to_png(self) -> bytes:
        return self.layers.to_png(self.style.background)

    def _repr_png_(self) -> bytes:
        return self.to_png()


def _as_extremum(value: Extremum | tuple[float, float]) -> Extremum:
    if isinstance(value, Extremum):
        return value
    lo, hi = value
    return Extremum(float(lo), float(hi))


__all__ = ["Chart"]

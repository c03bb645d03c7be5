"""Top-level public API for the ``fnchart`` package.

This module re-exports the chart component and its building blocks so users
can import from a single namespace, for example:

>>> from fnchart import Chart, FUNCTIONS, EASINGS  # doctest: +SKIP

The notebook panel (:class:`ChartPanel`) is exported as well; it needs
``ipywidgets`` and ``IPython``.
"""

from .animation import FrameScheduler, animate
from .chart import Chart
from .chart_layout import ChartPanel
from .chart_style import CHART_STYLE_OPTIONS, ChartStyle, FontSpec
from .easing import EASINGS, linear, resolve_easing
from .errors import DegenerateGeometryError, InvalidAssignmentError
from .functions import FUNCTION_EXPRESSIONS, FUNCTIONS, as_plot_function, zero_function
from .geometry import Extremum, Geometry, Point, Rect, compute_geometry
from .grid import Tick, axis_ticks, draw_grid, format_tick_label, label_position
from .sampler import evaluate, plot_function, sample_function
from .surface import Layers, RasterSurface, Surface, TextMetrics
from .transition import Transition, TransitionController, TransitionEvent, blend

__all__ = [
    "CHART_STYLE_OPTIONS",
    "Chart",
    "ChartPanel",
    "ChartStyle",
    "DegenerateGeometryError",
    "EASINGS",
    "Extremum",
    "FUNCTIONS",
    "FUNCTION_EXPRESSIONS",
    "FontSpec",
    "FrameScheduler",
    "Geometry",
    "InvalidAssignmentError",
    "Layers",
    "Point",
    "RasterSurface",
    "Rect",
    "Surface",
    "TextMetrics",
    "Tick",
    "Transition",
    "TransitionController",
    "TransitionEvent",
    "animate",
    "as_plot_function",
    "axis_ticks",
    "blend",
    "compute_geometry",
    "draw_grid",
    "evaluate",
    "format_tick_label",
    "label_position",
    "linear",
    "plot_function",
    "resolve_easing",
    "sample_function",
    "zero_function",
]

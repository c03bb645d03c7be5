"""Notebook host panel for a :class:`~fnchart.chart.Chart`.

This module builds the ipywidgets tree around a chart: a function selector,
an easing selector and an image view of the composited layers. The panel is a
pure collaborator of the chart. It listens to the chart's hooks to refresh
the image after every repaint and to disable both selectors while a
transition runs, so a user cannot start overlapping transitions from the UI.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import ipywidgets as widgets
from IPython.display import display

from .chart import Chart
from .easing import EASINGS, EasingFunction
from .functions import FUNCTIONS, PlotFunction
from .transition import TransitionEvent


class ChartPanel:
    """
    Widget layout hosting one chart with function and easing selectors.

    Parameters
    ----------
    chart : Chart, optional
        Chart to host; a default 800x600 chart is created when omitted.
    functions : mapping, optional
        Selector entries ``{label: function}``.
    easings : mapping, optional
        Selector entries ``{label: easing}``.

    Examples
    --------
    >>> panel = ChartPanel()  # doctest: +SKIP
    >>> panel  # doctest: +SKIP
    """

    def __init__(
        self,
        chart: Optional[Chart] = None,
        *,
        functions: Mapping[str, PlotFunction] = FUNCTIONS,
        easings: Mapping[str, EasingFunction] = EASINGS,
    ) -> None:
        self.chart = chart if chart is not None else Chart()
        self._functions = dict(functions)
        self._easings = dict(easings)

        self.function_select = widgets.Dropdown(
            options=list(self._functions),
            value=None,
            description="Function",
            layout=widgets.Layout(width="220px"),
        )
        self.easing_select = widgets.Dropdown(
            options=list(self._easings),
            value=self._initial_easing_name(),
            description="Easing",
            layout=widgets.Layout(width="220px"),
        )
        self._controls = widgets.HBox(
            [self.function_select, self.easing_select],
            layout=widgets.Layout(align_items="center", margin="0 0 6px 0"),
        )
        self.image = widgets.Image(
            value=self.chart.to_png(),
            format="png",
            width=self.chart.geometry.width,
            height=self.chart.geometry.height,
        )
        self.widget = widgets.VBox([self._controls, self.image])

        self.function_select.observe(self._on_function_change, names="value")
        self.easing_select.observe(self._on_easing_change, names="value")
        self.chart.on_transition_start(self._on_transition_start)
        self.chart.on_transition_end(self._on_transition_end)
        self.chart.on_draw(self._on_draw)

    def _initial_easing_name(self) -> Optional[str]:
        for name, easing in self._easings.items():
            if easing is self.chart.easing:
                return name
        return None

    # --- Widget events ---

    def _on_function_change(self, change: Mapping[str, Any]) -> None:
        name = change["new"]
        if name is None:
            return
        self.chart.set_function(self._functions[name])

    def _on_easing_change(self, change: Mapping[str, Any]) -> None:
        name = change["new"]
        if name is None:
            return
        self.chart.set_easing(self._easings[name])

    # --- Chart hooks ---

    def set_controls_disabled(self, disabled: bool) -> None:
        self.function_select.disabled = disabled
        self.easing_select.disabled = disabled

    def _on_transition_start(self, event: TransitionEvent) -> None:
        self.set_controls_disabled(True)

    def _on_transition_end(self, event: TransitionEvent) -> None:
        if not self.chart.is_transitioning:
            self.set_controls_disabled(False)

    def _on_draw(self, chart: Chart) -> None:
        self.image.value = chart.to_png()

    def _ipython_display_(self, **kwargs: Any) -> None:
        display(self.widget)


__all__ = ["ChartPanel"]

"""Exception types raised at the chart's public boundary."""

from __future__ import annotations


class InvalidAssignmentError(TypeError):
    """Raised when a plotted function or easing function is not usable.

    The chart rejects the value synchronously and does not start a transition.
    """


class DegenerateGeometryError(ValueError):
    """Raised when extremums or surface dimensions cannot form a valid geometry.

    Examples are a zero-span axis (``min == max``) or padding that leaves no
    drawable area.
    """


__all__ = ["InvalidAssignmentError", "DegenerateGeometryError"]

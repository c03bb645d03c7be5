"""Normalized easing functions for chart transitions.

Every easing maps linear time progress ``t`` in ``[0, 1]`` to display
progress. Some curves overshoot (``elastic``) or only approach an endpoint
(``in_expo`` starts at ``2**-10``, ``out_expo`` ends at ``1 - 2**-10``);
transition code has to tolerate values outside ``[0, 1]``.

The catalog mirrors the classic ``ts-easing`` set under snake_case names.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from .errors import InvalidAssignmentError

EasingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def quadratic(t: float) -> float:
    return t * (-(t * t) * t + 4 * t * t - 6 * t + 4)


def cubic(t: float) -> float:
    return t * (4 * t * t - 9 * t + 6)


def elastic(t: float) -> float:
    return t * (33 * t**4 - 106 * t**3 + 126 * t * t - 67 * t + 15)


def in_quad(t: float) -> float:
    return t * t


def out_quad(t: float) -> float:
    return t * (2 - t)


def in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def in_cubic(t: float) -> float:
    return t**3


def out_cubic(t: float) -> float:
    return (t - 1) ** 3 + 1


def in_out_cubic(t: float) -> float:
    return 4 * t**3 if t < 0.5 else (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


def in_quart(t: float) -> float:
    return t**4


def out_quart(t: float) -> float:
    return 1 - (t - 1) ** 4


def in_out_quart(t: float) -> float:
    return 8 * t**4 if t < 0.5 else 1 - 8 * (t - 1) ** 4


def in_quint(t: float) -> float:
    return t**5


def out_quint(t: float) -> float:
    return 1 + (t - 1) ** 5


def in_out_quint(t: float) -> float:
    return 16 * t**5 if t < 0.5 else 1 + 16 * (t - 1) ** 5


def in_sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def out_sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def in_expo(t: float) -> float:
    return 2 ** (10 * (t - 1))


def out_expo(t: float) -> float:
    return 1 - 2 ** (-10 * t)


def in_out_expo(t: float) -> float:
    if t == 0 or t == 1:
        return t
    if t < 0.5:
        return 0.5 * 2 ** (10 * (2 * t - 1))
    return 0.5 * (2 - 2 ** (-10 * (2 * t - 1)))


def in_circ(t: float) -> float:
    return 1 - math.sqrt(max(0.0, 1 - t * t))


def out_circ(t: float) -> float:
    return math.sqrt(max(0.0, 1 - (t - 1) ** 2))


def in_out_circ(t: float) -> float:
    scaled = 2 * t
    if scaled < 1:
        return -0.5 * (math.sqrt(max(0.0, 1 - scaled * scaled)) - 1)
    shifted = scaled - 2
    return 0.5 * (math.sqrt(max(0.0, 1 - shifted * shifted)) + 1)


EASINGS: dict[str, EasingFunction] = {
    fn.__name__: fn
    for fn in (
        linear,
        quadratic,
        cubic,
        elastic,
        in_quad,
        out_quad,
        in_out_quad,
        in_cubic,
        out_cubic,
        in_out_cubic,
        in_quart,
        out_quart,
        in_out_quart,
        in_quint,
        out_quint,
        in_out_quint,
        in_sine,
        out_sine,
        in_out_sine,
        in_expo,
        out_expo,
        in_out_expo,
        in_circ,
        out_circ,
        in_out_circ,
    )
}


def resolve_easing(value: Any) -> EasingFunction:
    """Return an easing callable for a catalog name or a callable.

    Raises
    ------
    InvalidAssignmentError
        If ``value`` is neither a known easing name nor callable.
    """
    if isinstance(value, str):
        try:
            return EASINGS[value]
        except KeyError:
            raise InvalidAssignmentError(
                f"Unknown easing {value!r}; choose one of {sorted(EASINGS)}"
            ) from None
    if callable(value):
        return value
    raise InvalidAssignmentError(
        f"easing must be callable or an easing name, got {type(value).__name__}"
    )


__all__ = ["EASINGS", "EasingFunction", "linear", "resolve_easing"] + [
    name for name in EASINGS if name != "linear"
]

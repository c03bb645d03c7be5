"""Built-in plot functions and plot-input normalization.

Purpose
-------
This module isolates the conversion of user input into the scalar
``float -> float`` callable the chart samples. Accepted forms:

- any Python callable of one argument;
- a SymPy expression with at most one free symbol, compiled with
  :func:`sympy.lambdify` against NumPy.

Anything else is rejected with :class:`~fnchart.errors.InvalidAssignmentError`
before a transition starts.

It also holds the catalog of built-in functions offered by the notebook
panel. They are kept as SymPy expressions (``FUNCTION_EXPRESSIONS``) so they
can be printed or manipulated symbolically, and compiled once into
``FUNCTIONS``. Trigonometric entries take their argument in degrees.

Examples
--------
>>> import sympy as sp
>>> x = sp.Symbol("x")
>>> f = as_plot_function(x**2 + 1)
>>> float(f(2.0))
5.0
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import sympy as sp
from sympy.core.expr import Expr

from .errors import InvalidAssignmentError

PlotFunction = Callable[[float], Any]

X = sp.Symbol("x", real=True)


def zero_function(x: float) -> float:
    """The implicit function shown before any assignment."""
    return 0.0


def compile_expression(expr: Expr) -> PlotFunction:
    """Compile a SymPy expression of (at most) one variable to a NumPy callable."""
    free = sorted(expr.free_symbols, key=lambda s: s.sort_key())
    if len(free) > 1:
        names = ", ".join(str(s) for s in free)
        raise InvalidAssignmentError(
            f"plotted expressions must have a single free symbol, got [{names}]"
        )
    var = free[0] if free else X
    fn = sp.lambdify(var, expr, modules="numpy")
    fn.__name__ = str(expr)
    return fn


def as_plot_function(value: Any) -> PlotFunction:
    """Return a one-argument callable for ``value``.

    Raises
    ------
    InvalidAssignmentError
        If ``value`` is neither callable nor a single-variable SymPy expression.
    """
    # SymPy symbols are callable (they build undefined functions), so the
    # expression check has to come first.
    if isinstance(value, Expr):
        return compile_expression(value)
    if callable(value):
        return value
    raise InvalidAssignmentError(
        f"plotted function must be callable or a SymPy expression, got {type(value).__name__}"
    )


def _degrees(expr: Expr) -> Expr:
    return expr * sp.pi / 180


FUNCTION_EXPRESSIONS: Mapping[str, Expr] = {
    "square": X**2,
    "cube": X**3,
    "sqrt": sp.sqrt(X),
    "sin": sp.sin(_degrees(X)),
    "cos": sp.cos(_degrees(X)),
}

FUNCTIONS: dict[str, PlotFunction] = {
    name: compile_expression(expr) for name, expr in FUNCTION_EXPRESSIONS.items()
}


__all__ = [
    "FUNCTIONS",
    "FUNCTION_EXPRESSIONS",
    "PlotFunction",
    "X",
    "as_plot_function",
    "compile_expression",
    "zero_function",
]

"""Animated transitions between two plotted functions.

Purpose
-------
``TransitionController`` is the state machine behind ``Chart.set_function``.
It has two observable states:

- **idle**: one function is displayed and nothing is running;
- **transitioning**: at least one run is blending an outgoing function into
  an incoming one, frame by frame.

Each run captures its own ``(previous, next)`` pair, easing and duration when
it starts. Assigning a new function while a run is in flight starts another
run anchored at the function held at that moment; the earlier run is not
cancelled and keeps drawing until it completes, so the last run to draw on a
given frame wins. With ``cancel_superseded=True`` every run checks a
generation counter and stops drawing once a newer run exists (it still
completes and still notifies).

Notifications
-------------
``start_hooks`` fire synchronously inside ``set_function`` before anything
is drawn; ``end_hooks`` fire after the scheduler has delivered the final
frame of that run. Both receive a :class:`TransitionEvent`.

If the progress-0 frame raises (a plotted function failing with something
other than a domain error), the call is rolled back: the previous function is
restored, the run is closed with an end notification and the error
propagates. A background run that fails later is logged when its task
finishes.

Event loop
----------
When called with a running asyncio loop (a notebook kernel, an async app),
``set_function`` schedules the run as a task and returns it. Without a running
loop the run is executed to completion with :func:`asyncio.run` before
``set_function`` returns.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from .animation import FrameScheduler, default_scheduler
from .chart_style import DEFAULT_DURATION_MS
from .easing import EasingFunction, linear, resolve_easing
from .functions import PlotFunction, as_plot_function, zero_function
from .hooks import HookRegistry
from .sampler import evaluate

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class Transition:
    """In-flight state of one transition run."""

    previous: PlotFunction
    next: PlotFunction
    generation: int
    duration_ms: float
    progress: float = 0.0


@dataclass(frozen=True)
class TransitionEvent:
    """Payload passed to transition start/end hooks.

    Parameters
    ----------
    kind : {"start", "end"}
        Which lifecycle notification this is.
    previous : callable
        Outgoing function of the run.
    next : callable
        Incoming function of the run.
    generation : int
        Sequence number of the run (1 for the first transition).
    duration_ms : float
        Configured run duration.
    """

    kind: Literal["start", "end"]
    previous: PlotFunction
    next: PlotFunction
    generation: int
    duration_ms: float


def blend(previous: PlotFunction, next: PlotFunction, progress: float) -> PlotFunction:
    """Return ``x -> from(x) + progress * (to(x) - from(x))``.

    Both endpoints are evaluated with undefined values normalized to zero, so
    ``blend(f, g, 0)`` equals ``f`` and ``blend(f, g, 1)`` equals ``g`` up to
    that normalization.
    """

    def blended(x: float) -> float:
        from_y = evaluate(previous, x)
        to_y = evaluate(next, x)
        return from_y + progress * (to_y - from_y)

    return blended


class TransitionController:
    """
    Blend plotted functions over time and notify observers.

    Parameters
    ----------
    draw:
        Called with a one-argument function to paint on the foreground layer.
    scheduler:
        Frame driver; defaults to the shared :class:`FrameScheduler`.
    duration_ms:
        Length of each transition.
    easing:
        Easing applied to new runs (name or callable).
    animate_initial:
        If ``True`` the first assignment animates in from the zero function;
        otherwise it is painted directly without notifications.
    cancel_superseded:
        If ``True`` a run stops drawing once a newer run has started.
    """

    def __init__(
        self,
        draw: Callable[[PlotFunction], Any],
        *,
        scheduler: Optional[FrameScheduler] = None,
        duration_ms: float = DEFAULT_DURATION_MS,
        easing: Any = linear,
        animate_initial: bool = True,
        cancel_superseded: bool = False,
    ) -> None:
        self._draw = draw
        self.scheduler = scheduler if scheduler is not None else default_scheduler()
        self.duration_ms = float(duration_ms)
        self._easing: EasingFunction = resolve_easing(easing)
        self.animate_initial = bool(animate_initial)
        self.cancel_superseded = bool(cancel_superseded)

        self.start_hooks = HookRegistry("transition_start")
        self.end_hooks = HookRegistry("transition_end")

        self._function: Optional[PlotFunction] = None
        self._generation = 0
        self._active: dict[int, Transition] = {}
        self._tasks: set[asyncio.Task] = set()
        self._frame_log_last_t = 0.0

    # --- State ---

    @property
    def function(self) -> PlotFunction:
        """The target function; the zero function before any assignment."""
        return self._function if self._function is not None else zero_function

    @property
    def easing(self) -> EasingFunction:
        return self._easing

    def set_easing(self, easing: Any) -> None:
        """Replace the easing used by transitions started from now on."""
        self._easing = resolve_easing(easing)

    @property
    def is_transitioning(self) -> bool:
        return bool(self._active)

    @property
    def transition(self) -> Optional[Transition]:
        """State of the most recently started in-flight run, if any."""
        if not self._active:
            return None
        return self._active[max(self._active)]

    @property
    def generation(self) -> int:
        return self._generation

    # --- Transitions ---

    def set_function(self, value: Any) -> Optional[asyncio.Task]:
        """
        Make ``value`` the plotted function and start a transition to it.

        Parameters
        ----------
        value : callable or sympy.Expr
            New plotted function.

        Returns
        -------
        asyncio.Task or None
            The run's task when an event loop is running, otherwise ``None``
            (the run has already completed).

        Raises
        ------
        InvalidAssignmentError
            If ``value`` cannot be used as a plotted function.
        Exception
            Whatever the new function raises on the first frame, after the
            controller has been returned to its previous state.
        """
        fn = as_plot_function(value)

        if self._function is None and not self.animate_initial:
            self._draw(fn)
            self._function = fn
            logger.info("painted initial function %s without transition", _name(fn))
            return None

        first = self._function is None
        previous = self.function
        self._function = fn
        self._generation += 1
        transition = Transition(
            previous=previous,
            next=fn,
            generation=self._generation,
            duration_ms=self.duration_ms,
        )
        self._active[transition.generation] = transition

        logger.info(
            "transition %d start: %s -> %s (%.0f ms)",
            transition.generation,
            _name(previous),
            _name(fn),
            transition.duration_ms,
        )
        self.start_hooks.fire(_event("start", transition))
        try:
            self._draw_frame(transition, 0.0)
        except Exception:
            # Roll back to the state before the call, then close the run.
            self._active.pop(transition.generation, None)
            self._function = None if first else previous
            self._generation -= 1
            logger.warning("transition %d aborted: first frame failed", transition.generation)
            self.end_hooks.fire(_event("end", transition))
            raise

        run = self._run(transition, self._easing)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(run)
            return None

        task = loop.create_task(run)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("transition run failed: %s", exc, exc_info=exc)

    async def wait(self) -> None:
        """Wait until every run started so far has finished."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def _run(self, transition: Transition, easing: EasingFunction) -> None:
        try:
            await self.scheduler.animate(
                transition.duration_ms,
                lambda progress: self._draw_frame(transition, progress),
                easing,
            )
            if transition.progress != 1.0:
                # Easings that only approach 1 still settle on the target.
                self._draw_frame(transition, 1.0)
        finally:
            self._active.pop(transition.generation, None)
            logger.info("transition %d end", transition.generation)
            self.end_hooks.fire(_event("end", transition))

    def _draw_frame(self, transition: Transition, progress: float) -> None:
        transition.progress = progress
        if self.cancel_superseded and transition.generation != self._generation:
            return
        self._log_frame(transition)
        self._draw(blend(transition.previous, transition.next, progress))

    def _log_frame(self, transition: Transition) -> None:
        now = time.monotonic()
        if logger.isEnabledFor(logging.DEBUG) and (now - self._frame_log_last_t) > 0.5:
            self._frame_log_last_t = now
            logger.debug(
                "transition %d frame progress=%.3f active=%d",
                transition.generation,
                transition.progress,
                len(self._active),
            )


def _event(kind: Literal["start", "end"], transition: Transition) -> TransitionEvent:
    return TransitionEvent(
        kind=kind,
        previous=transition.previous,
        next=transition.next,
        generation=transition.generation,
        duration_ms=transition.duration_ms,
    )


def _name(fn: PlotFunction) -> str:
    return getattr(fn, "__name__", type(fn).__name__)


__all__ = ["Transition", "TransitionController", "TransitionEvent", "blend"]

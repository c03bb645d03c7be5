"""Frame scheduler: a timed, eased, per-frame callback driver.

Purpose
-------
``FrameScheduler.animate`` calls a callback once per frame with eased
progress until the configured duration has elapsed. It is the only place in
the package that suspends: everything a frame callback does runs to
completion before the next frame is awaited.

Timing model
------------
- The run first waits one frame, then takes the start time from the clock.
  The first callback therefore always receives ``easing(0)``.
- Raw progress is ``elapsed / duration`` clamped to ``[0, 1]``; it is strictly
  time-linear. Only the easing may push the value outside ``[0, 1]``.
- The final callback is always made with raw progress exactly ``1`` and is
  awaited before ``animate`` returns.
- A run cannot be cancelled. Two runs started back to back are independent
  and interleave frame by frame in the order they were started.

The clock and the sleeper are injectable so tests can drive the scheduler
with a fake monotonic time instead of the event loop's wall clock.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from .chart_style import DEFAULT_FRAME_INTERVAL_MS
from .easing import EasingFunction, linear

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

FrameCallback = Callable[[float], Any]


class FrameScheduler:
    """Drive frame callbacks at a fixed cadence on the running event loop.

    Parameters
    ----------
    frame_interval_ms:
        Delay between frames in milliseconds (one display refresh).
    clock:
        Monotonic clock returning seconds. Defaults to :func:`time.monotonic`.
    sleep:
        Coroutine function awaited between frames, called with seconds.
        Defaults to :func:`asyncio.sleep`.
    """

    def __init__(
        self,
        *,
        frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ) -> None:
        if frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be > 0")
        self._frame_interval_s = frame_interval_ms / 1000.0
        self._clock = clock if clock is not None else time.monotonic
        self._sleep = sleep if sleep is not None else asyncio.sleep

    @property
    def frame_interval_ms(self) -> float:
        return self._frame_interval_s * 1000.0

    async def next_frame(self) -> None:
        await self._sleep(self._frame_interval_s)

    async def animate(
        self,
        duration_ms: float,
        frame_callback: FrameCallback,
        easing: EasingFunction = linear,
    ) -> None:
        """
        Invoke ``frame_callback(easing(progress))`` once per frame until done.

        Parameters
        ----------
        duration_ms : float
            Run length in milliseconds. Non-positive durations produce a
            single frame at progress ``1``.
        frame_callback : callable
            Receives the eased progress. May return an awaitable, which is
            awaited before the next frame.
        easing : callable, optional
            Progress mapping applied to the clamped linear progress.
        """
        await self.next_frame()
        start = self._clock()
        frames = 0

        while True:
            elapsed_ms = (self._clock() - start) * 1000.0
            if duration_ms <= 0:
                progress = 1.0
            else:
                progress = min(max(elapsed_ms / duration_ms, 0.0), 1.0)

            result = frame_callback(easing(progress))
            if inspect.isawaitable(result):
                await result
            frames += 1

            if progress >= 1.0:
                logger.debug("animation finished after %d frames (%.1f ms)", frames, elapsed_ms)
                return

            await self.next_frame()


_default_scheduler: Optional[FrameScheduler] = None


def default_scheduler() -> FrameScheduler:
    """Return the shared scheduler used when none is given explicitly."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = FrameScheduler()
    return _default_scheduler


async def animate(
    duration_ms: float,
    frame_callback: FrameCallback,
    easing: EasingFunction = linear,
) -> None:
    """Run :meth:`FrameScheduler.animate` on the default scheduler."""
    await default_scheduler().animate(duration_ms, frame_callback, easing)


__all__ = ["FrameCallback", "FrameScheduler", "animate", "default_scheduler"]

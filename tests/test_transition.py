from __future__ import annotations

import asyncio
import logging
import math

import pytest

from fnchart.errors import InvalidAssignmentError
from fnchart.functions import zero_function
from fnchart.transition import TransitionController, TransitionEvent, blend


def _controller(scheduler, **kwargs):
    draws: list = []
    ctrl = TransitionController(draws.append, scheduler=scheduler, duration_ms=1000, **kwargs)
    events: list[TransitionEvent] = []
    ctrl.start_hooks.add_hook(events.append)
    ctrl.end_hooks.add_hook(events.append)
    return ctrl, draws, events


def test_blend_boundary_law() -> None:
    f = lambda x: 3 * x  # noqa: E731
    g = lambda x: x * x  # noqa: E731

    for x in (-2.0, 0.0, 1.5):
        assert blend(f, g, 0.0)(x) == f(x)
        assert blend(f, g, 1.0)(x) == g(x)
        assert blend(f, g, 0.5)(x) == pytest.approx((f(x) + g(x)) / 2)


def test_blend_normalizes_undefined_endpoints() -> None:
    undefined = lambda x: math.nan  # noqa: E731

    assert blend(undefined, lambda x: 10.0, 0.0)(1.0) == 0.0
    assert blend(undefined, lambda x: 10.0, 0.25)(1.0) == 2.5
    assert blend(lambda x: math.sqrt(x), lambda x: 4.0, 1.0)(-1.0) == 4.0


def test_blend_tolerates_overshooting_progress() -> None:
    assert blend(lambda x: 0.0, lambda x: 10.0, 1.2)(0.0) == pytest.approx(12.0)


def test_invalid_assignment_is_rejected_before_anything_happens(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)

    with pytest.raises(InvalidAssignmentError):
        ctrl.set_function(42)

    assert draws == []
    assert events == []
    assert ctrl.function is zero_function
    assert not ctrl.is_transitioning


def test_first_assignment_animates_in_from_zero(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)
    target = lambda x: 5.0  # noqa: E731

    result = ctrl.set_function(target)

    assert result is None
    assert [e.kind for e in events] == ["start", "end"]
    assert events[0].previous is zero_function
    assert events[0].next is target
    assert draws[0](0.0) == 0.0
    assert draws[-1](0.0) == 5.0
    assert ctrl.function is target
    assert not ctrl.is_transitioning
    assert ctrl.transition is None


def test_first_assignment_can_be_painted_directly(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler, animate_initial=False)
    target = lambda x: 5.0  # noqa: E731

    ctrl.set_function(target)

    assert events == []
    assert draws == [target]


def test_two_assignments_produce_one_notification_pair(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler, animate_initial=False, easing="linear")

    ctrl.set_function(lambda x: 0)
    ctrl.set_function(lambda x: x)

    assert [e.kind for e in events] == ["start", "end"]
    assert draws[-1](7.0) == 7.0


def test_start_fires_synchronously_and_end_after_final_frame(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)
    states: list[tuple[str, bool, int]] = []
    ctrl.start_hooks.add_hook(lambda e: states.append(("start", ctrl.is_transitioning, len(draws))))
    ctrl.end_hooks.add_hook(lambda e: states.append(("end", ctrl.is_transitioning, len(draws))))

    async def main() -> None:
        task = ctrl.set_function(lambda x: x)
        assert isinstance(task, asyncio.Task)
        assert [e.kind for e in events] == ["start"]
        assert len(draws) == 1
        assert ctrl.is_transitioning
        await task

    asyncio.run(main())

    assert states[0] == ("start", True, 0)
    assert states[1][0:2] == ("end", False)
    # One redraw at progress 0, then one per scheduler frame (nine frames).
    assert states[1][2] == 10


def test_sequential_transitions_do_not_overlap(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)

    async def main() -> None:
        await ctrl.set_function(lambda x: 0)
        await ctrl.set_function(lambda x: x)

    asyncio.run(main())

    assert [(e.kind, e.generation) for e in events] == [
        ("start", 1),
        ("end", 1),
        ("start", 2),
        ("end", 2),
    ]


def test_reassignment_mid_transition_starts_from_held_function(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)
    f = lambda x: 10.0  # noqa: E731
    g = lambda x: 20.0  # noqa: E731

    async def main() -> None:
        ctrl.set_function(f)
        for _ in range(3):
            await asyncio.sleep(0)
        assert ctrl.transition.progress < 1.0
        ctrl.set_function(g)
        assert ctrl.function is g
        assert ctrl.transition.generation == 2
        await ctrl.wait()

    asyncio.run(main())

    starts = [e for e in events if e.kind == "start"]
    assert [e.generation for e in starts] == [1, 2]
    assert starts[1].previous is f
    assert starts[1].next is g
    assert sorted(e.generation for e in events if e.kind == "end") == [1, 2]
    assert draws[-1](0.0) == 20.0
    assert not ctrl.is_transitioning


def _values_after_second_start(scheduler, **kwargs) -> list[float]:
    ctrl, draws, events = _controller(scheduler, **kwargs)
    marker: list[int] = []
    ctrl.start_hooks.add_hook(
        lambda e: marker.append(len(draws)) if e.generation == 2 else None
    )

    async def main() -> None:
        ctrl.set_function(lambda x: 10.0)
        for _ in range(3):
            await asyncio.sleep(0)
        ctrl.set_function(lambda x: 20.0)
        await ctrl.wait()

    asyncio.run(main())
    return [fn(0.0) for fn in draws[marker[0]:]]


def test_superseded_runs_keep_drawing_by_default(scheduler) -> None:
    values = _values_after_second_start(scheduler)

    assert any(v < 10.0 for v in values)
    assert values[-1] == 20.0


def test_superseded_runs_stop_drawing_when_cancelling(scheduler) -> None:
    values = _values_after_second_start(scheduler, cancel_superseded=True)

    assert all(v >= 10.0 for v in values)
    assert values[-1] == 20.0


def test_easing_is_captured_when_a_run_starts(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler, easing="in_quad")
    captured: list[float] = []

    async def main() -> None:
        task = ctrl.set_function(lambda x: 1.0)
        ctrl.set_easing("linear")
        await task

    ctrl.end_hooks.add_hook(lambda e: captured.extend(fn(0.0) for fn in draws))
    asyncio.run(main())

    assert captured[2] == pytest.approx(0.125**2)


def test_easing_that_never_reaches_one_still_settles_on_target(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler, easing="out_expo")

    ctrl.set_function(lambda x: 8.0)

    assert draws[-1](0.0) == 8.0


def test_failing_hook_warns_and_transition_completes(scheduler) -> None:
    ctrl, draws, events = _controller(scheduler)

    def broken(event):
        raise RuntimeError("boom")

    ctrl.start_hooks.add_hook(broken, "broken")

    with pytest.warns(UserWarning, match="Hook broken failed"):
        ctrl.set_function(lambda x: 1.0)

    assert [e.kind for e in events] == ["start", "end"]
    assert draws[-1](0.0) == 1.0


def _failing(x):
    raise KeyError("lookup table has no entry")


def test_function_failing_on_first_frame_is_rolled_back(scheduler) -> None:
    draws: list[float] = []
    ctrl = TransitionController(lambda fn: draws.append(fn(1.5)), scheduler=scheduler)
    events: list[TransitionEvent] = []
    ctrl.start_hooks.add_hook(events.append)
    ctrl.end_hooks.add_hook(events.append)
    held = lambda x: 10.0  # noqa: E731
    ctrl.set_function(held)
    events.clear()

    with pytest.raises(KeyError):
        ctrl.set_function(_failing)

    assert [(e.kind, e.generation) for e in events] == [("start", 2), ("end", 2)]
    assert ctrl.function is held
    assert ctrl.generation == 1
    assert not ctrl.is_transitioning
    assert ctrl.transition is None

    ctrl.set_function(lambda x: 20.0)
    assert draws[-1] == 20.0
    assert ctrl.generation == 2


def test_failed_first_assignment_leaves_the_zero_function(scheduler) -> None:
    ctrl = TransitionController(lambda fn: fn(0.0), scheduler=scheduler)

    with pytest.raises(KeyError):
        ctrl.set_function(_failing)

    assert ctrl.function is zero_function
    assert not ctrl.is_transitioning


def test_failed_direct_paint_leaves_the_zero_function(scheduler) -> None:
    ctrl = TransitionController(lambda fn: fn(0.0), scheduler=scheduler, animate_initial=False)

    with pytest.raises(KeyError):
        ctrl.set_function(_failing)

    assert ctrl.function is zero_function


def test_background_run_failure_is_logged(scheduler, caplog) -> None:
    frames: list[float] = []

    def draw(fn):
        if len(frames) >= 2:
            raise RuntimeError("surface lost")
        frames.append(fn(0.0))

    ctrl = TransitionController(draw, scheduler=scheduler)
    ends: list[TransitionEvent] = []
    ctrl.end_hooks.add_hook(ends.append)
    caplog.set_level(logging.ERROR, logger="fnchart.transition")

    async def main() -> None:
        ctrl.set_function(lambda x: 1.0)
        while ctrl.is_transitioning:
            await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(main())

    assert [e.kind for e in ends] == ["end"]
    assert any("transition run failed: surface lost" in r.getMessage() for r in caplog.records)

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from PIL import Image

_START = Path(__file__).resolve().parent
_repo_root = _START
while _repo_root != _repo_root.parent and not (_repo_root / "fnchart" / "__init__.py").exists():
    _repo_root = _repo_root.parent

sys.path.insert(0, str(_repo_root))

from fnchart.animation import FrameScheduler  # noqa: E402
from fnchart.surface import TextMetrics  # noqa: E402


class FakeClock:
    """Monotonic clock that only advances when the scheduler sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.now += seconds
        self.sleeps.append(seconds)
        await asyncio.sleep(0)


class RecordingSurface:
    """Surface double that records every drawing call."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple] = []

    def _record(self, *call) -> None:
        self.calls.append(call)

    def clear(self) -> None:
        self._record("clear")

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x, y) -> None:
        self._record("move_to", x, y)

    def line_to(self, x, y) -> None:
        self._record("line_to", x, y)

    def stroke(self, color, width) -> None:
        self._record("stroke", color, width)

    def fill_text(self, text, x, y, font, color) -> None:
        self._record("fill_text", text, x, y)

    def save(self) -> None:
        self._record("save")

    def restore(self) -> None:
        self._record("restore")

    def translate(self, dx, dy) -> None:
        self._record("translate", dx, dy)

    def rotate(self, angle) -> None:
        self._record("rotate", angle)

    def measure_text(self, text, font) -> TextMetrics:
        return TextMetrics(width=6.0 * len(text), height=10.0)

    def to_image(self) -> Image.Image:
        return Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> FrameScheduler:
    # 125 ms frames are exact in binary floating point: a 1000 ms run takes
    # exactly eight steps after the first frame.
    return FrameScheduler(frame_interval_ms=125, clock=clock.time, sleep=clock.sleep)


@pytest.fixture
def recording_surface() -> type[RecordingSurface]:
    return RecordingSurface

"""Shared test fixtures."""

import pytest

from flipbook.widget.base import Widget
from flipbook.widget.surface import Surface


class Probe(Widget):
    """Test double: done after *length* ticks, counts every lifecycle call.

    Entries ``(name, "tick" | "is_done" | "reset")`` are appended to *log*
    when one is given.
    """

    def __init__(self, length=1, name="probe", log=None):
        self.length = length
        self.name = name
        self.log = log
        self.progress = 0
        self.total_ticks = 0
        self.resets = 0
        self.done_queries = 0
        self._surface = Surface("pre")
        self._surface.set_content([name])

    def _record(self, event):
        if self.log is not None:
            self.log.append((self.name, event))

    def get_renderable_unit(self):
        return self._surface

    def tick(self):
        self._record("tick")
        self.progress += 1
        self.total_ticks += 1

    def is_done(self):
        self._record("is_done")
        self.done_queries += 1
        return self.progress >= self.length

    def reset(self):
        self._record("reset")
        self.progress = 0
        self.resets += 1


class ManualScheduler:
    """Scheduler stand-in: timers fire only when the test says so."""

    def __init__(self):
        self.pending = []  # (delay_ms, callback)
        self.now = 0

    def after(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))
        return None

    def run_next(self):
        delay_ms, callback = self.pending.pop(0)
        self.now += delay_ms
        callback()

    def run_all(self, limit=10_000):
        fired = 0
        while self.pending and fired < limit:
            self.run_next()
            fired += 1
        return fired


def run_to_done(widget, limit=1000):
    """Step like the driver does (tick, then is_done). Returns the tick count."""
    for steps in range(1, limit + 1):
        widget.tick()
        if widget.is_done():
            return steps
    raise AssertionError(f"{type(widget).__name__} not done after {limit} ticks")


@pytest.fixture
def probe():
    """The Probe widget class."""
    return Probe


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()


@pytest.fixture
def run():
    """Drive a widget to completion without timers."""
    return run_to_done


@pytest.fixture
def stickman_frames():
    return [
        [" o ", "-|-", "/ \\"],
        ["o  ", "|- ", "|\\ "],
        [" o ", "-|-", "/ \\"],
        ["  o", " -|", " /|"],
    ]


@pytest.fixture
def sprite_dir(tmp_path):
    """A sprite directory with one valid and one broken definition."""
    sprites = tmp_path / "sprites"
    sprites.mkdir()
    (sprites / "blink.yaml").write_text(
        "sequences:\n"
        "  close:\n"
        "    - [\"-\"]\n"
        "frames:\n"
        "  - [\"o\"]\n"
        "  - $close*2\n"
        "  - [\"o\"]\n"
    )
    (sprites / "broken.yaml").write_text("frames: [unclosed\n")
    return tmp_path

"""Timer-driven animation driver running on the asyncio event loop.

A widget is advanced by a chain of one-shot timers: each step ticks the
widget, checks whether it is done, and only then schedules the next step.
There is never more than one pending step per driven widget, so steps of
the same widget never overlap.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..widget.base import Widget
from ..widget.surface import Surface
from .errors import ConfigurationError, SequencingError

logger = logging.getLogger(__name__)


class Scheduler:
    """One-shot timers on an asyncio loop.

    Usage::

        scheduler = Scheduler(loop)
        scheduler.after(200, callback)   # fire once, 200 ms from now
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def after(self, delay_ms: float, callback: Callable[[], None]) -> Optional[asyncio.TimerHandle]:
        """Run *callback* once after *delay_ms* milliseconds.

        Thread-safe: when called off the loop thread the timer is created on
        the loop and no handle is returned.
        """
        delay = max(0.0, delay_ms / 1000.0)
        if self._on_loop_thread():
            return self._loop.call_later(delay, callback)
        self._loop.call_soon_threadsafe(self._loop.call_later, delay, callback)
        return None


class Driver:
    """Advances one widget every *period_ms* until it reports done.

    Args:
        widget: Widget (or composite tree) to animate.
        period_ms: Milliseconds between steps (> 0).
        scheduler: Timer source.
        on_step: Called with the widget after every tick, before is_done(),
            typically to repaint its surface.
        on_done: Called with the widget once it reports done.
        on_error: Called with the exception if a step raises. The error is
            logged either way and no further steps run.
    """

    def __init__(
        self,
        widget: Widget,
        period_ms: float,
        scheduler: Scheduler,
        on_step: Optional[Callable[[Widget], None]] = None,
        on_done: Optional[Callable[[Widget], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ):
        if isinstance(period_ms, bool) or not isinstance(period_ms, (int, float)) or period_ms <= 0:
            raise ConfigurationError(f"drive: period_ms must be > 0 (got {period_ms!r})")
        self.widget = widget
        self.period_ms = period_ms
        self._scheduler = scheduler
        self._on_step = on_step
        self._on_done = on_done
        self._on_error = on_error
        self.steps = 0
        self.finished = False
        self.handle: Optional[asyncio.TimerHandle] = None

    def start(self) -> Surface:
        """Schedule the first step and return the widget's surface immediately.

        The first step ticks before is_done() is asked for the first time.
        """
        logger.info("Driving %s every %s ms", type(self.widget).__name__, self.period_ms)
        self._schedule()
        return self.widget.get_renderable_unit()

    def step(self) -> bool:
        """Tick once and check for completion. Returns True when done.

        Raises:
            SequencingError: the widget already finished under this driver.
        """
        if self.finished:
            raise SequencingError(
                f"{type(self.widget).__name__} already finished; reset() it and drive it again"
            )
        self.widget.tick()
        self.steps += 1
        if self._on_step is not None:
            self._on_step(self.widget)

        if self.widget.is_done():
            self._finish()
            return True
        return False

    def _schedule(self) -> None:
        self.handle = self._scheduler.after(self.period_ms, self._fire)

    def _fire(self) -> None:
        """Timer callback - run one step and reschedule unless done."""
        self.handle = None
        try:
            done = self.step()
        except Exception as e:
            logger.exception("Animation step %d of %s failed", self.steps, type(self.widget).__name__)
            if self._on_error is not None:
                self._on_error(e)
            return

        if not done:
            self._schedule()

    def _finish(self) -> None:
        self.finished = True
        logger.info("Animation %s done after %d steps", type(self.widget).__name__, self.steps)
        if self._on_done is not None:
            self._on_done(self.widget)


def drive(
    widget: Widget,
    period_ms: float,
    scheduler: Optional[Scheduler] = None,
    on_step: Optional[Callable[[Widget], None]] = None,
    on_done: Optional[Callable[[Widget], None]] = None,
) -> Surface:
    """Animate *widget*, one step every *period_ms*, until it is done.

    Returns the widget's surface right away; the steps run on the event
    loop. Without an explicit *scheduler* this must be called from inside
    a running loop.
    """
    if scheduler is None:
        scheduler = Scheduler(asyncio.get_running_loop())
    return Driver(widget, period_ms, scheduler, on_step=on_step, on_done=on_done).start()


async def drive_until_done(
    widget: Widget,
    period_ms: float,
    on_step: Optional[Callable[[Widget], None]] = None,
) -> int:
    """Drive *widget* on the running loop and wait for it. Returns the step count."""
    loop = asyncio.get_running_loop()
    finished: asyncio.Future = loop.create_future()

    def _done(_widget: Widget) -> None:
        if not finished.done():
            finished.set_result(driver.steps)

    def _failed(error: BaseException) -> None:
        if not finished.done():
            finished.set_exception(error)

    driver = Driver(widget, period_ms, Scheduler(loop), on_step=on_step, on_done=_done, on_error=_failed)
    driver.start()
    return await finished

"""
Combinators - widgets built by wrapping other widgets.

Each combinator derives tick/is_done/reset for the composite from the
wrapped widgets without knowing their concrete type:

- Repeat / RepeatIndefinitely: replay a widget, resetting it inside is_done()
- Horizontal: play widgets side by side, all at once
- Sequence: play widgets one after another
- WithPadding: add a margin around a widget's surface
- ChangingPosition: move a widget along a path over time

The driver always calls tick() and then is_done(). Repeat transitions
happen at that boundary, inside is_done(), never in the middle of a tick.

Ticking a Horizontal, Sequence or ChangingPosition after it reported done,
with no reset() in between, raises SequencingError. Containers never do
that to their children: Horizontal skips children that reported done.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, NamedTuple, Union

from ..core.errors import ConfigurationError, SequencingError
from .base import Widget
from .surface import Surface, parse_length

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    left: int
    top: int


PositionLike = Union[Position, Mapping[str, int], tuple[int, int]]


def _coerce_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    if isinstance(value, Mapping):
        return Position(int(value.get("left", 0)), int(value.get("top", 0)))
    left, top = value
    return Position(int(left), int(top))


def _widget_list(name: str, widgets: Iterable[Widget]) -> list[Widget]:
    widgets = list(widgets)
    if not widgets:
        raise ConfigurationError(f"{name}: widgets must be a non-empty list")
    for widget in widgets:
        if not isinstance(widget, Widget):
            raise ConfigurationError(f"{name}: expected Widget, got {type(widget).__name__}")
    return widgets


def _check_count(name: str, field: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{name}: {field} must be an int >= {minimum} (got {value!r})")


# =============================================================================
# Repetition
# =============================================================================

class Repeat(Widget):
    """Play a widget a given number of times.

    is_done() is not a pure query here: when the wrapped widget finishes a
    run it counts the run and, if more runs remain, resets the wrapped
    widget and reports "not done" so the driver keeps ticking.
    """

    def __init__(self, widget: Widget, times: int):
        _check_count("Repeat", "times", times, 0)
        self._widget = widget
        self._times = times
        self._remaining = times

    @property
    def remaining(self) -> int:
        return self._remaining

    def get_renderable_unit(self) -> Surface:
        return self._widget.get_renderable_unit()

    def tick(self) -> None:
        if self._remaining > 0:
            self._widget.tick()

    def is_done(self) -> bool:
        if self._remaining <= 0:
            return True

        if self._widget.is_done():
            self._remaining -= 1
            if self._remaining <= 0:
                return True
            self._widget.reset()

        return False

    def reset(self) -> None:
        self._remaining = self._times
        self._widget.reset()


class RepeatIndefinitely(Widget):
    """Play a widget over and over again. Never done."""

    def __init__(self, widget: Widget):
        self._widget = widget
        self.runs = 0  # completed runs of the wrapped widget

    def get_renderable_unit(self) -> Surface:
        return self._widget.get_renderable_unit()

    def tick(self) -> None:
        self._widget.tick()

    def is_done(self) -> bool:
        if self._widget.is_done():
            self.runs += 1
            self._widget.reset()

        return False

    def reset(self) -> None:
        self.runs = 0
        self._widget.reset()


# =============================================================================
# Layout
# =============================================================================

class Horizontal(Widget):
    """Lay out widgets left to right and play them simultaneously.

    is_done() asks every child, left to right, so that repeating children
    get their chance to reset; the answer is the AND of all replies. A tick
    goes to every child that did not report done at the last is_done().
    """

    def __init__(self, widgets: Iterable[Widget]):
        self._widgets = _widget_list("Horizontal", widgets)
        self._span = Surface("span")
        for widget in self._widgets:
            self._span.attach(widget.get_renderable_unit())
        self._finished = [False] * len(self._widgets)

    @property
    def widgets(self) -> tuple[Widget, ...]:
        return tuple(self._widgets)

    def get_renderable_unit(self) -> Surface:
        return self._span

    def reset(self) -> None:
        for widget in self._widgets:
            widget.reset()
        self._finished = [False] * len(self._widgets)

    def tick(self) -> None:
        if all(self._finished):
            raise SequencingError("Horizontal: tick() after every child finished; reset() first")
        for widget, finished in zip(self._widgets, self._finished):
            if not finished:
                widget.tick()

    def is_done(self) -> bool:
        self._finished = [widget.is_done() for widget in self._widgets]
        return all(self._finished)


class Sequence(Widget):
    """Play widgets one after another, each starting when the prior one finishes.

    Only the current child is ticked. is_done() moves the cursor past every
    finished child, so a child is never ticked again once it reported done.
    Callers must ask is_done() before each tick(); the driver does.
    """

    def __init__(self, widgets: Iterable[Widget]):
        self._widgets = _widget_list("Sequence", widgets)
        self._span = Surface("span")
        self._span.attach(self._widgets[0].get_renderable_unit())
        self._shown = 0
        self._position = 0

    @property
    def position(self) -> int:
        """Index of the child currently playing (len(widgets) once finished)."""
        return self._position

    def _show(self, index: int) -> None:
        if index != self._shown:
            self._span.replace(0, self._widgets[index].get_renderable_unit())
            self._shown = index

    def get_renderable_unit(self) -> Surface:
        return self._span

    def reset(self) -> None:
        for widget in self._widgets:
            widget.reset()
        self._position = 0
        self._show(0)

    def tick(self) -> None:
        if self._position >= len(self._widgets):
            raise SequencingError("Sequence: tick() after the last child finished; reset() first")
        self._widgets[self._position].tick()

    def is_done(self) -> bool:
        while self._position < len(self._widgets) and self._widgets[self._position].is_done():
            self._position += 1
            logger.debug("Sequence advanced to child %d", self._position)

        if self._position < len(self._widgets):
            self._show(self._position)
            return False
        return True


def repeat_horizontal(make_widget: Callable[[], Widget], count: int) -> Horizontal:
    """Lay out *count* fresh widgets from *make_widget* side by side."""
    _check_count("repeat_horizontal", "count", count, 1)
    return Horizontal([make_widget() for _ in range(count)])


def repeat_horizontal_with_padding(
    make_widget: Callable[[], Widget], count: int, spacing: str = "10px"
) -> Horizontal:
    """Like repeat_horizontal(), with padding around each widget."""
    return repeat_horizontal(lambda: WithPadding(make_widget(), spacing), count)


# =============================================================================
# Decoration
# =============================================================================

class WithPadding(Widget):
    """Surround a widget with a margin; animation state is passed straight through."""

    def __init__(self, widget: Widget, spacing: Union[str, int] = "10px"):
        try:
            parse_length(spacing)
        except ValueError as e:
            raise ConfigurationError(f"WithPadding: {e}") from e
        self._widget = widget
        self._span = Surface("padding", display="inline-block", padding=spacing)
        self._span.attach(widget.get_renderable_unit())

    def get_renderable_unit(self) -> Surface:
        return self._span

    def tick(self) -> None:
        self._widget.tick()

    def is_done(self) -> bool:
        return self._widget.is_done()

    def reset(self) -> None:
        self._widget.reset()


class ChangingPosition(Widget):
    """Move a widget along ``position_at_time(elapsed)`` for *max_time* ticks.

    Done once *max_time* ticks have elapsed, whatever the wrapped widget is
    doing. Each tick moves first and then ticks the wrapped widget, if it
    still has something to play.

    Args:
        widget: Widget to move.
        max_time: Number of ticks the motion lasts (> 0).
        position_at_time: Pure function from elapsed ticks to a Position,
            a ``{"left": .., "top": ..}`` mapping or a ``(left, top)`` tuple.
        reset_elapsed: Restart the motion on reset(). When False only the
            wrapped widget is reset and the motion stays finished.
    """

    def __init__(
        self,
        widget: Widget,
        max_time: int,
        position_at_time: Callable[[int], PositionLike],
        reset_elapsed: bool = True,
    ):
        _check_count("ChangingPosition", "max_time", max_time, 1)
        if not callable(position_at_time):
            raise ConfigurationError("ChangingPosition: position_at_time must be callable")

        self._widget = widget
        self._max_time = max_time
        self._position_at_time = position_at_time
        self._reset_elapsed = reset_elapsed

        self._span = Surface("absolute", position="absolute")
        self._span.attach(widget.get_renderable_unit())
        self._elapsed = 0
        self._reported_done = False
        self._move_it()

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def position(self) -> Position:
        return self._position

    def _move_it(self) -> None:
        self._position = _coerce_position(self._position_at_time(self._elapsed))
        self._span.set_style(left=self._position.left, top=self._position.top)

    def get_renderable_unit(self) -> Surface:
        return self._span

    def tick(self) -> None:
        if self._reported_done:
            raise SequencingError("ChangingPosition: tick() after the motion finished; reset() first")
        if self._elapsed < self._max_time:
            self._elapsed += 1
            self._move_it()

            if not self._widget.is_done():
                self._widget.tick()

    def is_done(self) -> bool:
        done = self._elapsed >= self._max_time
        if done:
            self._reported_done = True
        return done

    def reset(self) -> None:
        self._widget.reset()
        self._reported_done = False
        if self._reset_elapsed:
            self._elapsed = 0
            self._move_it()

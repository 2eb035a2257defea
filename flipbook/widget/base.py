"""
Widget capability contract.

Every widget can:
- get_renderable_unit(): return the Surface standing for it
- tick(): advance the animation by one step
- is_done(): report whether the current run has finished
- reset(): return to the initial state
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from .surface import Surface

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .combinators import ChangingPosition, PositionLike, Repeat, WithPadding


class Widget(ABC):
    """
    Base class for everything that can be animated.

    State changes default to safe no-ops: a widget that never moves is
    always done, and ticking or resetting it does nothing. A static visual
    only needs to implement get_renderable_unit().
    """

    @abstractmethod
    def get_renderable_unit(self) -> Surface:
        """Return the Surface representing this widget. Same object every call."""
        ...

    def tick(self) -> None:
        """Advance animation state by one step. Override if needed."""
        pass

    def is_done(self) -> bool:
        """Whether the current run has completed. Override if needed."""
        return True

    def reset(self) -> None:
        """Return to the initial state. Override if needed."""
        pass

    # ------------------------------------------------------------------
    # Fluent wrappers
    # ------------------------------------------------------------------

    def changing_position(
        self,
        max_time: int,
        position_at_time: Callable[[int], "PositionLike"],
        reset_elapsed: bool = True,
    ) -> "ChangingPosition":
        """Move this widget along *position_at_time* for *max_time* ticks."""
        from .combinators import ChangingPosition

        return ChangingPosition(self, max_time, position_at_time, reset_elapsed=reset_elapsed)

    def with_padding(self, spacing: str = "10px") -> "WithPadding":
        from .combinators import WithPadding

        return WithPadding(self, spacing)

    def repeat(self, times: int) -> "Repeat":
        from .combinators import Repeat

        return Repeat(self, times)


class StaticWidget(Widget):
    """A widget with a fixed surface and no animation."""

    def __init__(self, surface: Surface):
        self._surface = surface

    def get_renderable_unit(self) -> Surface:
        return self._surface

"""flipbook - composable, timer-driven character-cell animations."""

from .core import ConfigurationError, FlipbookError, SequencingError, Scheduler, drive
from .widget import (
    AsciiAnimation,
    ChangingPosition,
    Circle,
    Horizontal,
    Repeat,
    RepeatIndefinitely,
    Sequence,
    Surface,
    Textbox,
    Widget,
    WithPadding,
    render_ansi,
    render_text,
)

__all__ = [
    "FlipbookError",
    "ConfigurationError",
    "SequencingError",
    "Scheduler",
    "drive",
    "Widget",
    "Surface",
    "render_text",
    "render_ansi",
    "AsciiAnimation",
    "Circle",
    "Textbox",
    "Repeat",
    "RepeatIndefinitely",
    "Horizontal",
    "Sequence",
    "WithPadding",
    "ChangingPosition",
]

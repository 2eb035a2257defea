"""Widgets - renderable units, leaf widgets, and combinators."""

from .surface import Surface, parse_length, render_ansi, render_layer, render_text
from .pipeline import Layer
from .canvas import Color, Cell, Canvas, Brush, Sprite
from .base import Widget, StaticWidget
from .leaves import AsciiAnimation, CanvasWidget, Circle, Textbox
from .combinators import (
    ChangingPosition,
    Horizontal,
    Position,
    Repeat,
    RepeatIndefinitely,
    Sequence,
    WithPadding,
    repeat_horizontal,
    repeat_horizontal_with_padding,
)

__all__ = [
    # Renderable units
    "Surface",
    "parse_length",
    "render_layer",
    "render_ansi",
    "render_text",
    "Layer",
    # Canvas system
    "Color",
    "Cell",
    "Canvas",
    "Brush",
    "Sprite",
    # Widgets
    "Widget",
    "StaticWidget",
    "AsciiAnimation",
    "CanvasWidget",
    "Circle",
    "Textbox",
    # Combinators
    "Repeat",
    "RepeatIndefinitely",
    "Horizontal",
    "Sequence",
    "WithPadding",
    "ChangingPosition",
    "Position",
    "repeat_horizontal",
    "repeat_horizontal_with_padding",
]

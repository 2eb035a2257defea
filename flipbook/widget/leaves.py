"""Leaf widgets: sprite animation, drawn shapes, and text boxes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union

from ..core.errors import ConfigurationError
from .base import StaticWidget, Widget
from .canvas import Brush, Canvas, Color, Sprite
from .surface import Surface, parse_length

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..elements.registry import SpriteRegistry

Frame = Union[str, Sequence[str]]


def _to_sprite(frame: Frame) -> Sprite:
    if isinstance(frame, str):
        return Sprite(frame.split("\n"))
    return Sprite([str(line) for line in frame])


class AsciiAnimation(Widget):
    """
    Monospaced text rotating through a sequence of sprites.

    Each frame is a list of lines (a multi-line string is split on newlines).
    Frame 0 is shown on construction; every tick moves one frame forward and
    the animation is done once it steps past the last frame. The last frame
    stays on screen after that.
    """

    def __init__(self, sprites: Sequence[Frame], color: Optional[Color] = None):
        if not sprites:
            raise ConfigurationError("AsciiAnimation: sprites must be a non-empty sequence")
        self._sprites = [_to_sprite(frame) for frame in sprites]
        self._color = color

        width = max(sprite.width for sprite in self._sprites)
        self._span = Surface("span", display="inline-block")
        self._pre = self._span.attach(Surface("pre", width=width))

        self._frame = 0
        self._use_sprite(0)

    @classmethod
    def from_registry(
        cls, registry: "SpriteRegistry", name: str, color: Optional[Color] = None
    ) -> "AsciiAnimation":
        """Build an animation from a sprite definition in *registry*."""
        frames = registry.frames(name)
        if not frames:
            raise ConfigurationError(f"AsciiAnimation: no frames for sprite '{name}'")
        return cls(frames, color=color)

    @property
    def frame_index(self) -> int:
        return self._frame

    @property
    def frame_count(self) -> int:
        return len(self._sprites)

    def _use_sprite(self, i: int) -> None:
        sprite = self._sprites[i]
        if self._color is None:
            self._pre.set_content(sprite.pattern)
        else:
            self._pre.set_content(sprite.to_canvas(self._color))

    def get_renderable_unit(self) -> Surface:
        return self._span

    def reset(self) -> None:
        self._frame = 0
        self._use_sprite(0)

    def tick(self) -> None:
        self._frame += 1
        if self._frame < len(self._sprites):
            self._use_sprite(self._frame)

    def is_done(self) -> bool:
        return self._frame >= len(self._sprites)


class CanvasWidget(StaticWidget):
    """A static picture drawn once onto a Canvas by *draw*."""

    def __init__(self, width: int, height: int, draw: Callable[[Canvas], None]):
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"CanvasWidget: width and height must be > 0 (got {width}x{height})"
            )
        self.canvas = Canvas(width, height)
        draw(self.canvas)
        surface = Surface("canvas", width=width, height=height)
        surface.set_content(self.canvas)
        super().__init__(surface)


class Circle(CanvasWidget):
    """A filled circle with an outline ring."""

    def __init__(self, radius: int, fill: Color = Color.GREEN, outline: Color = Color.DARK_GREEN):
        if radius <= 0:
            raise ConfigurationError(f"Circle: radius must be > 0 (got {radius})")
        size = radius * 2 + 1
        super().__init__(
            size, size, lambda canvas: Brush.circle(canvas, radius, radius, radius, fill, outline)
        )


class Textbox(StaticWidget):
    """Centered text on a solid background.

    *width* and *height* are CSS-style lengths or cell counts. The box
    grows to fit the text when *width* is too small.
    """

    def __init__(
        self,
        text: str,
        bgcolor: Union[Color, str],
        width: Union[str, int],
        height: Union[str, int],
        color: Color = Color.WHITE,
    ):
        try:
            bg = Color.parse(bgcolor)
            cols = max(parse_length(width), len(text))
            rows = max(parse_length(height), 1)
        except ValueError as e:
            raise ConfigurationError(f"Textbox: {e}") from e

        self.text = text
        canvas = Canvas(cols, rows)
        canvas.fill(0, 0, cols, rows, " ", color, bg)
        Brush.text_centered(canvas, rows // 2, text, color, bg)

        surface = Surface("box", width=cols, height=rows, bgcolor=bg, border_width=2)
        surface.set_content(canvas)
        super().__init__(surface)

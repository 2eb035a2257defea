"""
Canvas and brush system for character-cell drawing.

Core design:
- Canvas: 2D grid of (char, color) cells
- Brush: Functions that paint onto a canvas
- Sprite: Pre-built character patterns

Leaf widgets draw into a Canvas once, at construction, and hand it to a
Surface as its content.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from .pipeline import DEFAULT, Layer


# =============================================================================
# Colors
# =============================================================================

class Color(Enum):
    """ANSI 256-color numbers for canvas cells. RESET is the terminal default."""
    RESET = -1

    # Basic colors
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    # Bright colors
    GRAY = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    # Dark green, used for circle outlines
    DARK_GREEN = 22

    @classmethod
    def parse(cls, value: "Color | str") -> "Color":
        """Accept a Color or a case-insensitive name such as ``"blue"``."""
        if isinstance(value, Color):
            return value
        try:
            return cls[str(value).strip().upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown color: {value!r}") from None


# =============================================================================
# Cell and Canvas
# =============================================================================

@dataclass
class Cell:
    """A single canvas cell. RESET means the terminal default color."""
    char: str = " "
    fg: Color = Color.RESET
    bg: Optional[Color] = None


class Canvas:
    """2D grid of cells for drawing."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: list[list[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        x, y = pos
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y][x]
        return Cell()  # Out of bounds returns empty cell

    def put(self, x: int, y: int, char: str, fg: Color = Color.WHITE, bg: Optional[Color] = None):
        """Put a single character at position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y][x] = Cell(char, fg, bg)

    def fill(self, x: int, y: int, w: int, h: int, char: str = " ",
             fg: Color = Color.WHITE, bg: Optional[Color] = None):
        """Fill a rectangle with a character."""
        for dy in range(h):
            for dx in range(w):
                self.put(x + dx, y + dy, char, fg, bg)

    def to_layer(self) -> Layer:
        """Convert to a compositing layer carrying both color planes."""
        layer = Layer(self.width, self.height)
        if self.width and self.height:
            cells = [cell for row in self.cells for cell in row]
            shape = (self.height, self.width)
            chars = np.array([ord(c.char) for c in cells], dtype=np.uint32).reshape(shape)
            fg = np.array([c.fg.value for c in cells], dtype=np.int16).reshape(shape)
            bg = np.array(
                [c.bg.value if c.bg is not None else DEFAULT for c in cells], dtype=np.int16
            ).reshape(shape)
            layer.blit(0, 0, chars, fg, bg)
        return layer


# =============================================================================
# Brushes - Drawing Primitives
# =============================================================================

class Brush:
    """Collection of drawing primitives (static methods that paint onto canvas)."""

    FULL = "█"
    SHADE_DARK = "▓"

    @staticmethod
    def text(canvas: Canvas, x: int, y: int, text: str, color: Color = Color.WHITE,
             bg: Optional[Color] = None):
        """Draw text horizontally."""
        for i, char in enumerate(text):
            canvas.put(x + i, y, char, color, bg)

    @staticmethod
    def text_centered(canvas: Canvas, y: int, text: str, color: Color = Color.WHITE,
                      bg: Optional[Color] = None):
        """Draw text centered horizontally on the canvas."""
        x = (canvas.width - len(text)) // 2
        Brush.text(canvas, x, y, text, color, bg)

    @staticmethod
    def circle(canvas: Canvas, cx: int, cy: int, radius: int,
               fill: Color = Color.GREEN, outline: Color = Color.DARK_GREEN,
               fill_char: str = FULL, outline_char: str = SHADE_DARK):
        """Draw a filled circle with a one-cell outline ring."""
        for y in range(cy - radius, cy + radius + 1):
            for x in range(cx - radius, cx + radius + 1):
                dist = math.hypot(x - cx, y - cy)
                if dist <= radius - 0.5:
                    canvas.put(x, y, fill_char, fill)
                elif dist <= radius + 0.5:
                    canvas.put(x, y, outline_char, outline)


# =============================================================================
# Sprites - Pre-built Patterns
# =============================================================================

@dataclass
class Sprite:
    """A pre-built character pattern that can be stamped onto a canvas."""
    pattern: list[str]  # Lines of the sprite
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self):
        self.height = len(self.pattern)
        self.width = max(len(line) for line in self.pattern) if self.pattern else 0

    def to_canvas(self, color: Color = Color.WHITE) -> Canvas:
        """Convert sprite to a canvas."""
        c = Canvas(self.width, self.height)
        self.stamp(c, 0, 0, color)
        return c

    def stamp(self, canvas: Canvas, x: int, y: int, color: Color = Color.WHITE, transparent: str = " "):
        """Stamp sprite onto canvas at position."""
        for dy, line in enumerate(self.pattern):
            for dx, char in enumerate(line):
                if char != transparent:
                    canvas.put(x + dx, y + dy, char, color)

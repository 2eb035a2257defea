"""
Character-grid compositing with numpy.

A Layer is a fixed-size grid of char codes plus foreground and background
color planes. Surfaces are flattened into layers bottom-up: every child
layer is blitted into its parent at an offset, so the final layer holds the
whole tree. The result is read back either as plain text rows or as rows
carrying ANSI 256-color escape codes.
"""

from __future__ import annotations

import numpy as np

# Space character code - background fill
SPACE = ord(" ")

# Color plane value meaning "terminal default" (no escape code)
DEFAULT = -1

RESET = "\033[0m"


def sgr(fg: int, bg: int) -> str:
    """Escape sequence selecting *fg*/*bg* (256-color numbers, DEFAULT for none)."""
    codes = ["0"]
    if fg >= 0:
        codes.append(f"38;5;{fg}")
    if bg >= 0:
        codes.append(f"48;5;{bg}")
    return "\033[" + ";".join(codes) + "m"


class Layer:
    """A single rendering layer: chars, fg and bg arrays of shape (height, width)."""

    def __init__(self, width: int, height: int):
        self.width = max(0, width)
        self.height = max(0, height)

        self.chars = np.full((self.height, self.width), SPACE, dtype=np.uint32)
        self.fg = np.full((self.height, self.width), DEFAULT, dtype=np.int16)
        self.bg = np.full((self.height, self.width), DEFAULT, dtype=np.int16)

    @classmethod
    def from_lines(cls, lines: list[str], fg: int = DEFAULT, bg: int = DEFAULT) -> "Layer":
        """Build a layer exactly large enough to hold *lines*."""
        width = max((len(line) for line in lines), default=0)
        layer = cls(width, len(lines))
        for y, line in enumerate(lines):
            layer.put_text(0, y, line, fg, bg)
        return layer

    def put(self, x: int, y: int, char: str, fg: int = DEFAULT, bg: int = DEFAULT):
        """Put a single character at position; out-of-bounds is ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.chars[y, x] = ord(char)
            self.fg[y, x] = fg
            self.bg[y, x] = bg

    def put_text(self, x: int, y: int, text: str, fg: int = DEFAULT, bg: int = DEFAULT):
        """Put a string horizontally, clipped to the layer."""
        if not text or y < 0 or y >= self.height:
            return
        x1 = max(0, x)
        x2 = min(self.width, x + len(text))
        if x1 >= x2:
            return
        row = np.array([[ord(c) for c in text[x1 - x:x2 - x]]], dtype=np.uint32)
        self.blit(x1, y, row, fg, bg)

    def fill(self, x: int, y: int, w: int, h: int, char: str = " ",
             fg: int = DEFAULT, bg: int = DEFAULT):
        """Fill a rectangle."""
        x1, y1 = max(0, x), max(0, y)
        x2, y2 = min(self.width, x + w), min(self.height, y + h)
        if x1 < x2 and y1 < y2:
            self.chars[y1:y2, x1:x2] = ord(char)
            self.fg[y1:y2, x1:x2] = fg
            self.bg[y1:y2, x1:x2] = bg

    def blit(self, x: int, y: int, char_matrix: np.ndarray,
             fg: int | np.ndarray = DEFAULT, bg: int | np.ndarray = DEFAULT):
        """
        Blit a 2D character matrix to the layer at position.

        Args:
            x, y: Top-left position (may be negative; the source is clipped)
            char_matrix: 2D numpy array of uint32 char codes (shape: height, width)
            fg, bg: Single color number or 2D array matching char_matrix shape
        """
        src_h, src_w = char_matrix.shape

        src_x1 = max(0, -x)
        src_y1 = max(0, -y)
        src_x2 = min(src_w, self.width - x)
        src_y2 = min(src_h, self.height - y)

        dst_x1 = max(0, x)
        dst_y1 = max(0, y)
        dst_x2 = dst_x1 + (src_x2 - src_x1)
        dst_y2 = dst_y1 + (src_y2 - src_y1)

        if dst_x1 >= dst_x2 or dst_y1 >= dst_y2:
            return  # Completely off-screen

        dst = (slice(dst_y1, dst_y2), slice(dst_x1, dst_x2))
        src = (slice(src_y1, src_y2), slice(src_x1, src_x2))
        self.chars[dst] = char_matrix[src]
        for plane, value in ((self.fg, fg), (self.bg, bg)):
            plane[dst] = value[src] if isinstance(value, np.ndarray) else value

    def composite(self, other: "Layer", x: int, y: int) -> None:
        """Blit another layer (chars and both color planes) at position."""
        if other.width and other.height:
            self.blit(x, y, other.chars, other.fg, other.bg)

    def to_lines(self) -> list[str]:
        """Return the grid as plain text rows, trailing spaces stripped."""
        return ["".join(chr(c) for c in row).rstrip() for row in self.chars]

    def to_ansi(self) -> list[str]:
        """Return the grid as rows with color escapes, emitted only where colors change.

        Every row ends in the terminal default colors.
        """
        rows = []
        for y in range(self.height):
            parts = []
            current = (DEFAULT, DEFAULT)
            for x in range(self.width):
                colors = (int(self.fg[y, x]), int(self.bg[y, x]))
                if colors != current:
                    parts.append(sgr(*colors))
                    current = colors
                parts.append(chr(self.chars[y, x]))
            if current != (DEFAULT, DEFAULT):
                parts.append(RESET)
            rows.append("".join(parts))
        return rows

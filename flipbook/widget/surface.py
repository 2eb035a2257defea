"""
Renderable units.

A Surface is an opaque, mutable node in a tree of drawable regions: a kind,
a dict of attributes, optional content (text lines or a Canvas) and ordered
children. Widgets only ever construct surfaces, attach children to them and
set their content; turning a tree into characters is the job of
``render_layer``, ``render_text`` or ``render_ansi``, which the host calls
when it repaints.

Kinds understood by the renderer:
  span      children laid out left to right, top-aligned
  pre       preformatted text lines
  canvas    a Canvas drawn once by a leaf widget
  box       a Canvas holding a styled text box
  padding   children surrounded by a margin (``padding`` attribute)
  absolute  children offset by ``left``/``top`` attributes
"""

from __future__ import annotations

import re
from typing import Any, Optional, Union

from .canvas import Canvas
from .pipeline import Layer

Content = Union[list[str], Canvas, None]

KINDS = ("span", "pre", "canvas", "box", "padding", "absolute")

# Horizontal pixels per character cell when converting CSS lengths
PX_PER_CELL = 10

_LENGTH_RE = re.compile(r"^\s*(\d+)\s*(px|ch)?\s*$")


def parse_length(spacing: Union[str, int]) -> int:
    """Convert a CSS-style length (``"10px"``, ``"2ch"``, ``3``) to cells.

    Pixel lengths round up so that any non-zero padding is visible.
    """
    if isinstance(spacing, bool):
        raise ValueError(f"Invalid length: {spacing!r}")
    if isinstance(spacing, int):
        if spacing < 0:
            raise ValueError(f"Invalid length: {spacing!r}")
        return spacing
    match = _LENGTH_RE.match(str(spacing))
    if not match:
        raise ValueError(f"Invalid length: {spacing!r}")
    amount, unit = int(match.group(1)), match.group(2)
    if unit == "px":
        return -(-amount // PX_PER_CELL)
    return amount


class Surface:
    """A node in the renderable tree."""

    def __init__(self, kind: str, **attributes: Any):
        if kind not in KINDS:
            raise ValueError(f"Unknown surface kind: {kind!r}")
        self.kind = kind
        self.attributes: dict[str, Any] = dict(attributes)
        self.content: Content = None
        self._children: list[Surface] = []

    def __repr__(self) -> str:
        return f"Surface({self.kind!r}, children={len(self._children)})"

    @property
    def children(self) -> tuple["Surface", ...]:
        return tuple(self._children)

    def attach(self, child: "Surface", order: Optional[int] = None) -> "Surface":
        """Insert *child* at position *order* (append when None)."""
        if order is None:
            self._children.append(child)
        else:
            self._children.insert(order, child)
        return child

    def replace(self, index: int, child: "Surface") -> None:
        """Swap the child at *index* for another surface."""
        self._children[index] = child

    def set_content(self, payload: Union[str, list[str], Canvas, None]) -> None:
        """Set text lines (a string is split on newlines) or a Canvas."""
        if isinstance(payload, str):
            payload = payload.split("\n")
        elif payload is not None and not isinstance(payload, Canvas):
            payload = list(payload)
        self.content = payload

    def set_style(self, **attributes: Any) -> None:
        """Update attributes in place."""
        self.attributes.update(attributes)


# =============================================================================
# Rendering
# =============================================================================

def _row_of(layers: list[Layer]) -> Layer:
    """Place layers side by side, top-aligned."""
    width = sum(layer.width for layer in layers)
    height = max((layer.height for layer in layers), default=0)
    row = Layer(width, height)
    x = 0
    for layer in layers:
        row.composite(layer, x, 0)
        x += layer.width
    return row


def _content_layer(surface: Surface) -> Layer:
    if isinstance(surface.content, Canvas):
        return surface.content.to_layer()
    lines = surface.content or []
    width = surface.attributes.get("width")
    layer = Layer.from_lines(lines)
    if width is not None and width > layer.width:
        padded = Layer(width, layer.height)
        padded.composite(layer, 0, 0)
        return padded
    return layer


def render_layer(surface: Surface) -> Layer:
    """Flatten a surface tree into a single Layer."""
    if surface.content is not None:
        inner = _content_layer(surface)
    else:
        inner = _row_of([render_layer(child) for child in surface._children])

    if surface.kind == "padding":
        margin = parse_length(surface.attributes.get("padding", 0))
        out = Layer(inner.width + 2 * margin, inner.height + 2 * margin)
        out.composite(inner, margin, margin)
        return out

    if surface.kind == "absolute":
        left = int(surface.attributes.get("left", 0))
        top = int(surface.attributes.get("top", 0))
        out = Layer(max(0, inner.width + left), max(0, inner.height + top))
        out.composite(inner, left, top)
        return out

    return inner


def render_text(surface: Surface) -> list[str]:
    """Render a surface tree to plain text rows."""
    return render_layer(surface).to_lines()


def render_ansi(surface: Surface) -> list[str]:
    """Render a surface tree to rows carrying terminal color escapes."""
    return render_layer(surface).to_ansi()

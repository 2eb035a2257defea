"""Tests for renderable units and text rendering."""

import pytest

from flipbook.widget.canvas import Canvas, Color
from flipbook.widget.surface import Surface, parse_length, render_layer, render_text


def _pre(*lines, **attributes):
    surface = Surface("pre", **attributes)
    surface.set_content(list(lines))
    return surface


class TestParseLength:
    """Tests for CSS-style length parsing."""

    @pytest.mark.parametrize(
        "spacing,cells",
        [("10px", 1), ("15px", 2), ("0px", 0), ("3ch", 3), ("7", 7), (" 20px ", 2), (4, 4)],
    )
    def test_valid(self, spacing, cells):
        assert parse_length(spacing) == cells

    @pytest.mark.parametrize("spacing", ["abc", "-1px", "10em", -2, True, ""])
    def test_invalid(self, spacing):
        with pytest.raises(ValueError, match="Invalid length"):
            parse_length(spacing)


class TestSurface:
    """Tests for the Surface tree."""

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown surface kind"):
            Surface("div")

    def test_attributes(self):
        surface = Surface("span", display="inline-block")
        assert surface.kind == "span"
        assert surface.attributes == {"display": "inline-block"}

    def test_attach_appends_in_order(self):
        parent = Surface("span")
        a, b = Surface("pre"), Surface("pre")
        assert parent.attach(a) is a
        parent.attach(b)
        assert parent.children == (a, b)

    def test_attach_at_order(self):
        parent = Surface("span")
        a, b = Surface("pre"), Surface("pre")
        parent.attach(a)
        parent.attach(b, order=0)
        assert parent.children == (b, a)

    def test_replace(self):
        parent = Surface("span")
        a, b = Surface("pre"), Surface("pre")
        parent.attach(a)
        parent.replace(0, b)
        assert parent.children == (b,)

    def test_set_content_splits_strings(self):
        surface = Surface("pre")
        surface.set_content("a\nb")
        assert surface.content == ["a", "b"]

    def test_set_content_canvas(self):
        canvas = Canvas(2, 2)
        surface = Surface("canvas")
        surface.set_content(canvas)
        assert surface.content is canvas

    def test_set_style(self):
        surface = Surface("absolute", left=0)
        surface.set_style(left=4, top=2)
        assert surface.attributes == {"left": 4, "top": 2}


class TestRenderText:
    """Tests for flattening surface trees to text."""

    def test_pre(self):
        assert render_text(_pre("ab", "cd")) == ["ab", "cd"]

    def test_span_lays_out_left_to_right(self):
        span = Surface("span")
        span.attach(_pre("ab", "cd"))
        span.attach(_pre("X"))
        assert render_text(span) == ["abX", "cd"]

    def test_pre_width_reserves_columns(self):
        span = Surface("span")
        span.attach(_pre("a", width=4))
        span.attach(_pre("Z"))
        assert render_text(span) == ["a   Z"]

    def test_padding(self):
        padded = Surface("padding", padding="10px")
        padded.attach(_pre("x"))
        assert render_text(padded) == ["", " x", ""]

    def test_padding_in_characters(self):
        padded = Surface("padding", padding="2ch")
        padded.attach(_pre("x"))
        layer = render_layer(padded)
        assert (layer.width, layer.height) == (5, 5)

    def test_absolute_offset(self):
        moved = Surface("absolute", left=2, top=1)
        moved.attach(_pre("ab"))
        assert render_text(moved) == ["", "  ab"]

    def test_absolute_negative_offset_clips(self):
        moved = Surface("absolute", left=-1, top=0)
        moved.attach(_pre("ab"))
        assert render_text(moved) == ["b"]

    def test_canvas_content(self):
        canvas = Canvas(3, 1)
        canvas.put(0, 0, "@", Color.RED)
        surface = Surface("canvas")
        surface.set_content(canvas)
        layer = render_layer(surface)
        assert layer.to_lines() == ["@"]
        assert layer.fg[0, 0] == Color.RED.value
        assert layer.bg[0, 0] == -1

    def test_empty_span(self):
        assert render_text(Surface("span")) == []

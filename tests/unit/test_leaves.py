"""Tests for leaf widgets."""

import pytest

from flipbook.core.errors import ConfigurationError
from flipbook.elements.registry import SpriteRegistry
from flipbook.widget.canvas import Canvas, Color
from flipbook.widget.leaves import AsciiAnimation, CanvasWidget, Circle, Textbox
from flipbook.widget.pipeline import sgr
from flipbook.widget.surface import render_ansi, render_text


def _shown(animation):
    """Lines currently displayed by an AsciiAnimation."""
    return animation.get_renderable_unit().children[0].content


class TestAsciiAnimation:
    """Tests for frame-sequenced sprite animation."""

    def test_starts_on_first_frame(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        assert anim.frame_index == 0
        assert anim.frame_count == 4
        assert _shown(anim) == stickman_frames[0]
        assert not anim.is_done()

    def test_renders_to_text(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        assert render_text(anim.get_renderable_unit()) == [" o", "-|-", "/ \\"]

    def test_tick_advances_frames(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        for i in range(1, 4):
            anim.tick()
            assert anim.frame_index == i
            assert _shown(anim) == stickman_frames[i]
            assert not anim.is_done()

    def test_done_after_last_frame(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        for _ in range(4):
            anim.tick()
        assert anim.is_done()
        # Last frame stays on screen, no wraparound
        assert _shown(anim) == stickman_frames[3]

    def test_is_done_is_pure(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        anim.tick()
        assert [anim.is_done() for _ in range(3)] == [False, False, False]

    def test_extra_ticks_are_harmless(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        for _ in range(6):
            anim.tick()
        assert anim.is_done()
        assert _shown(anim) == stickman_frames[3]

    def test_reset(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        for _ in range(4):
            anim.tick()
        anim.reset()
        assert anim.frame_index == 0
        assert _shown(anim) == stickman_frames[0]
        assert not anim.is_done()

    def test_reset_reproduces_history(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)

        def history():
            seen = []
            for _ in range(5):
                anim.tick()
                seen.append((anim.frame_index, list(_shown(anim)), anim.is_done()))
            return seen

        first = history()
        anim.reset()
        assert history() == first

    def test_surface_identity_is_stable(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames)
        surface = anim.get_renderable_unit()
        anim.tick()
        anim.reset()
        assert anim.get_renderable_unit() is surface

    def test_multiline_string_frames(self):
        anim = AsciiAnimation(["ab\ncd", "ef"])
        assert _shown(anim) == ["ab", "cd"]

    def test_colored_frames_use_canvas(self, stickman_frames):
        anim = AsciiAnimation(stickman_frames, color=Color.RED)
        content = _shown(anim)
        assert isinstance(content, Canvas)
        assert content[1, 0].fg == Color.RED

    def test_empty_sprites_rejected(self):
        with pytest.raises(ConfigurationError, match="non-empty"):
            AsciiAnimation([])

    def test_from_registry(self):
        registry = SpriteRegistry()
        registry.load_all()
        anim = AsciiAnimation.from_registry(registry, "stickman")
        assert anim.frame_count == 4

    def test_from_registry_unknown(self):
        registry = SpriteRegistry()
        registry.load_all()
        with pytest.raises(ConfigurationError, match="nope"):
            AsciiAnimation.from_registry(registry, "nope")


class TestStaticLeaves:
    """Shapes and text boxes never animate."""

    def test_canvas_widget_draws_once(self):
        calls = []

        def draw(canvas):
            calls.append((canvas.width, canvas.height))
            canvas.put(0, 0, "*")

        widget = CanvasWidget(4, 2, draw)
        assert calls == [(4, 2)]
        assert widget.get_renderable_unit().kind == "canvas"
        assert render_text(widget.get_renderable_unit()) == ["*", ""]

    def test_canvas_widget_rejects_empty_size(self):
        with pytest.raises(ConfigurationError):
            CanvasWidget(0, 2, lambda canvas: None)

    def test_static_lifecycle(self):
        circle = Circle(2)
        surface = circle.get_renderable_unit()
        assert circle.is_done()
        circle.tick()
        circle.reset()
        assert circle.is_done()
        assert circle.get_renderable_unit() is surface

    def test_circle_shape(self):
        lines = render_text(Circle(2).get_renderable_unit())
        assert len(lines) == 5
        assert "█" in lines[2]

    def test_circle_rejects_bad_radius(self):
        with pytest.raises(ConfigurationError, match="radius"):
            Circle(0)

    def test_textbox(self):
        box = Textbox(":-)", "blue", "50px", "10px")
        surface = box.get_renderable_unit()
        assert surface.kind == "box"
        assert surface.attributes["bgcolor"] is Color.BLUE
        assert surface.content.to_layer().to_lines() == [" :-)"]
        assert surface.content[0, 0].bg is Color.BLUE
        assert box.is_done()

    def test_textbox_grows_to_fit_text(self):
        box = Textbox("hello", Color.RED, 2, 3)
        canvas = box.get_renderable_unit().content
        assert (canvas.width, canvas.height) == (5, 3)
        assert canvas.to_layer().to_lines()[1] == "hello"

    def test_textbox_rejects_unknown_color(self):
        with pytest.raises(ConfigurationError, match="Unknown color"):
            Textbox("x", "mauve-ish", 5, 1)

    def test_textbox_rejects_bad_length(self):
        with pytest.raises(ConfigurationError, match="Invalid length"):
            Textbox("x", "blue", "wide", 1)


class TestColorsReachTheTerminal:
    """Leaf colors survive rendering to ANSI rows."""

    def test_plain_animation_has_no_escapes(self):
        assert render_ansi(AsciiAnimation([["x"]]).get_renderable_unit()) == ["x"]

    def test_colored_animation(self):
        rows = render_ansi(AsciiAnimation([["x"]], color=Color.RED).get_renderable_unit())
        assert rows == [sgr(Color.RED.value, -1) + "x\033[0m"]

    def test_colored_and_plain_render_the_same_text(self):
        plain = AsciiAnimation([["x"]]).get_renderable_unit()
        colored = AsciiAnimation([["x"]], color=Color.RED).get_renderable_unit()
        assert render_text(plain) == render_text(colored) == ["x"]
        assert render_ansi(plain) != render_ansi(colored)

    def test_textbox_background(self):
        rows = render_ansi(Textbox("x", "blue", 1, 1).get_renderable_unit())
        assert rows == [sgr(Color.WHITE.value, Color.BLUE.value) + "x\033[0m"]

    def test_circle_fill_and_outline(self):
        middle = render_ansi(Circle(2).get_renderable_unit())[2]
        assert sgr(Color.DARK_GREEN.value, -1) + "▓" in middle
        assert sgr(Color.GREEN.value, -1) + "███" in middle

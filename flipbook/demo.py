#!/usr/bin/env python3
"""Terminal demo: a dancing stick figure next to a drifting text box.

Run with ``python -m flipbook [config.json]``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .core.scheduler import drive_until_done
from .elements.registry import SpriteRegistry
from .widget.base import Widget
from .widget.canvas import Color
from .widget.combinators import Horizontal, Position, Repeat, Sequence
from .widget.config import AnimationConfig, get_config
from .widget.leaves import AsciiAnimation, Circle, Textbox
from .widget.surface import render_ansi

logger = logging.getLogger(__name__)

CLEAR = "\033[2J\033[H"


def build_demo(registry: SpriteRegistry, config: AnimationConfig) -> Widget:
    """The stick figure dances five times while a smiley drifts down and right."""
    stickman = AsciiAnimation.from_registry(registry, "stickman")
    waver = AsciiAnimation.from_registry(registry, "waver", color=Color.BRIGHT_YELLOW)

    smiley = Textbox(
        ":-)", "blue", config.layout.textbox_width, config.layout.textbox_height
    ).changing_position(
        10,
        lambda t: Position(left=t * 2, top=t // 3),
        reset_elapsed=config.motion.reset_elapsed,
    )

    return Horizontal([
        Sequence([Repeat(stickman, 5), waver]).with_padding(config.layout.padding),
        smiley,
        Circle(2).with_padding(config.layout.padding),
    ])


def paint(widget: Widget) -> None:
    print(CLEAR + "\n".join(render_ansi(widget.get_renderable_unit())), flush=True)


async def run(widget: Widget, period_ms: float) -> int:
    paint(widget)
    return await drive_until_done(widget, period_ms, on_step=paint)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="flipbook", description=__doc__.splitlines()[0])
    parser.add_argument("config", nargs="?", help="path to a JSON config file")
    parser.add_argument("--period", type=int, help="milliseconds between frames")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, stream=sys.stderr, format="%(name)s %(levelname)s: %(message)s")

    config = AnimationConfig.load(Path(args.config)) if args.config else get_config()
    period_ms = args.period or config.period_ms

    registry = SpriteRegistry(config.sprites.paths or None)
    registry.load_all()
    if config.sprites.watch:
        registry.start_watching()

    try:
        steps = asyncio.run(run(build_demo(registry, config), period_ms))
        logger.info("Demo finished after %d frames", steps)
    except KeyboardInterrupt:
        pass
    finally:
        registry.stop_watching()


if __name__ == "__main__":
    main()

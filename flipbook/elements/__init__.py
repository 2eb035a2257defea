"""
Sprite library.

Sprite animations are loaded from YAML files and can be hot-reloaded without restart.
"""

from .registry import SpriteRegistry

__all__ = ["SpriteRegistry"]

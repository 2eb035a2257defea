"""Animation configuration with clean, readable structure."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "flipbook.json"


@dataclass
class DriverConfig:
    """Timing for the animation driver."""
    period_ms: int = 200


@dataclass
class LayoutConfig:
    """Defaults for padding and text boxes."""
    padding: str = "10px"
    textbox_width: str = "50px"
    textbox_height: str = "10px"


@dataclass
class MotionConfig:
    """ChangingPosition behavior."""
    # Restart the motion when a moving widget is reset (e.g. inside Repeat)
    reset_elapsed: bool = True


@dataclass
class SpriteConfig:
    """Where sprite definitions come from."""
    paths: list[str] = field(default_factory=list)  # empty = bundled sprites
    watch: bool = False

    def to_dict(self) -> dict:
        return {"paths": list(self.paths), "watch": self.watch}

    @staticmethod
    def from_dict(d: dict) -> "SpriteConfig":
        if not isinstance(d, dict):
            return SpriteConfig()
        paths = d.get("paths", [])
        if isinstance(paths, str):
            paths = [paths]
        return SpriteConfig(paths=[str(p) for p in paths], watch=bool(d.get("watch", False)))


def _known(cls, d) -> dict:
    if not isinstance(d, dict):
        return {}
    names = {f.name for f in cls.__dataclass_fields__.values()}
    return {k: v for k, v in d.items() if k in names}


@dataclass
class AnimationConfig:
    """Main configuration combining all sections."""
    driver: DriverConfig = field(default_factory=DriverConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    motion: MotionConfig = field(default_factory=MotionConfig)
    sprites: SpriteConfig = field(default_factory=SpriteConfig)

    def to_dict(self) -> dict:
        return {
            "driver": asdict(self.driver),
            "layout": asdict(self.layout),
            "motion": asdict(self.motion),
            "sprites": self.sprites.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "AnimationConfig":
        return cls(
            driver=DriverConfig(**_known(DriverConfig, d.get("driver", {}))),
            layout=LayoutConfig(**_known(LayoutConfig, d.get("layout", {}))),
            motion=MotionConfig(**_known(MotionConfig, d.get("motion", {}))),
            sprites=SpriteConfig.from_dict(d.get("sprites", {})),
        )

    def save(self, path: Path = CONFIG_PATH):
        temp = path.with_suffix(".tmp")
        temp.write_text(json.dumps(self.to_dict(), indent=2))
        temp.rename(path)

    @classmethod
    def load(cls, path: Path = CONFIG_PATH) -> "AnimationConfig":
        try:
            if path.exists():
                raw_data = json.loads(path.read_text())
                if isinstance(raw_data, dict):
                    return cls.from_dict(raw_data)
                logger.warning("Ignoring config %s: top level is not an object", path)
        except (json.JSONDecodeError, TypeError, IOError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
        return cls()

    # Convenience accessors
    @property
    def period_ms(self) -> int:
        return self.driver.period_ms


# Global instance
_config: Optional[AnimationConfig] = None


def get_config() -> AnimationConfig:
    """Get current config."""
    global _config
    if _config is None:
        _config = AnimationConfig.load()
    return _config


def set_config(config: AnimationConfig, path: Path = CONFIG_PATH):
    """Set and save config."""
    global _config
    _config = config
    config.save(path)

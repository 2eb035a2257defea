"""
Sprite registry - discovers, loads, caches, and hot-reloads YAML sprite definitions.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class SpriteChangeHandler(FileSystemEventHandler):
    """Watchdog handler that triggers registry reload on file changes."""

    def __init__(self, registry: "SpriteRegistry"):
        self.registry = registry

    def on_modified(self, event):
        if event.is_directory:
            return
        if str(event.src_path).endswith(('.yaml', '.yml')):
            self.registry.reload(event.src_path)

    def on_created(self, event):
        self.on_modified(event)


class SpriteRegistry:
    """
    Central registry for sprite animation definitions.

    Files live at ``<path>/<kind>/<name>.yaml``; the bundled sprites are
    ``kind='sprites'``. A definition has a ``frames`` list, each frame a list
    of lines or a block string.

    Usage:
        registry = SpriteRegistry()
        registry.load_all()
        registry.start_watching()

        frames = registry.frames('stickman')
    """

    def __init__(self, paths: Optional[list[str]] = None):
        """
        Initialize registry with sprite directory paths.

        Args:
            paths: List of directory paths to search for sprites.
                   Defaults to the package's elements directory.
        """
        if not paths:
            paths = [str(Path(__file__).parent)]

        self.paths = [Path(p) for p in paths]
        self._elements: dict[str, dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._listeners: list[Callable[[str, str], None]] = []
        self._observers: list[Observer] = []
        self._watching = False

    def load_all(self) -> None:
        """Discover and load all YAML files from sprite paths."""
        with self._lock:
            self._elements.clear()
            for base_path in self.paths:
                if not base_path.exists():
                    logger.warning("Sprite path %s does not exist", base_path)
                    continue
                for yaml_file in sorted(base_path.rglob('*.yaml')) + sorted(base_path.rglob('*.yml')):
                    self._load_file(yaml_file)
        logger.info("Loaded %d sprite kinds from %d paths", len(self._elements), len(self.paths))

    def _load_file(self, file_path: Path) -> Optional[dict]:
        """Load a single YAML file and register its contents."""
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, IOError) as e:
            # Log but don't crash on bad files
            logger.warning("Failed to load %s: %s", file_path, e)
            return None

        if not isinstance(data, dict):
            return None

        # e.g., sprites/stickman.yaml -> kind='sprites', name='stickman'
        kind, name = self._parse_path(file_path)

        if 'frames' in data:
            data = self._expand_sequences(data)

        self._elements.setdefault(kind, {})[name] = data
        return data

    def _expand_sequences(self, data: dict) -> dict:
        """
        Expand sequence references in sprite frames.

        Supports:
        - sequences: Define reusable frame snippets
        - $sequence_name: Reference to expand inline
        - $sequence_name*N: Repeat sequence N times

        Example YAML:
            sequences:
              wave:
                - [" o/", "/| ", "/ \\"]
                - [" o ", "/|\\", "/ \\"]

            frames:
              - [" o ", "-|-", "/ \\"]
              - $wave*2
        """
        sequences = data.get('sequences')
        frames = data.get('frames')

        if not isinstance(frames, list):
            return data
        if not isinstance(sequences, dict):
            # No sequences defined: every $ref is unknown
            sequences = {}

        expanded_frames = []
        for frame in frames:
            if isinstance(frame, str) and frame.startswith('$'):
                # Parse sequence reference: $name or $name*N
                ref = frame[1:]
                repeat = 1
                if '*' in ref:
                    ref, repeat_str = ref.split('*', 1)
                    repeat = int(repeat_str) if repeat_str.isdigit() else 1

                if ref in sequences:
                    for _ in range(repeat):
                        expanded_frames.extend(sequences[ref])
                else:
                    logger.warning("Unknown sequence reference %s", frame)
            else:
                expanded_frames.append(frame)

        result = dict(data)
        result['frames'] = expanded_frames
        return result

    def _parse_path(self, file_path: Path) -> tuple[str, str]:
        """
        Parse file path to extract kind and name.

        Args:
            file_path: Path like /path/to/elements/sprites/stickman.yaml

        Returns:
            Tuple of (kind, name) e.g., ('sprites', 'stickman')
        """
        for base_path in self.paths:
            try:
                rel_path = file_path.relative_to(base_path)
            except ValueError:
                continue
            parts = rel_path.parts
            if len(parts) >= 2:
                return parts[0], rel_path.stem
            # File directly in the base path, use 'root' as kind
            return 'root', rel_path.stem

        # Fallback: use parent dir name and stem
        return file_path.parent.name, file_path.stem

    def get(self, kind: str, name: str) -> Optional[dict]:
        """Retrieve a definition by kind and name, or None if not found."""
        with self._lock:
            return self._elements.get(kind, {}).get(name)

    def frames(self, name: str, kind: str = 'sprites') -> list:
        """Frames of a sprite definition (empty list if unknown)."""
        definition = self.get(kind, name) or {}
        return list(definition.get('frames', []))

    def list_kinds(self) -> list[str]:
        """List all available kinds."""
        with self._lock:
            return list(self._elements.keys())

    def list_names(self, kind: str = 'sprites') -> list[str]:
        """List all names for a given kind."""
        with self._lock:
            return list(self._elements.get(kind, {}).keys())

    def reload(self, file_path: str) -> None:
        """
        Reload a single sprite file and notify listeners.

        Args:
            file_path: Path to the changed YAML file
        """
        path = Path(file_path)
        kind, name = self._parse_path(path)

        with self._lock:
            self._load_file(path)
        logger.debug("Reloaded %s/%s", kind, name)

        # Notify listeners outside the lock
        self._notify_listeners(kind, name)

    def on_change(self, callback: Callable[[str, str], None]) -> None:
        """Register a callback called with (kind, name) when a definition changes."""
        self._listeners.append(callback)

    def _notify_listeners(self, kind: str, name: str) -> None:
        for listener in self._listeners:
            try:
                listener(kind, name)
            except Exception:
                logger.exception("Sprite listener failed on %s/%s", kind, name)

    def start_watching(self) -> None:
        """Start watching sprite directories for changes."""
        if self._watching:
            return

        for base_path in self.paths:
            if not base_path.exists():
                continue
            observer = Observer()
            observer.schedule(SpriteChangeHandler(self), str(base_path), recursive=True)
            observer.start()
            self._observers.append(observer)

        self._watching = True
        logger.info("Watching %d sprite paths", len(self._observers))

    def stop_watching(self) -> None:
        """Stop watching sprite directories."""
        for observer in self._observers:
            observer.stop()
            observer.join()
        self._observers.clear()
        self._watching = False

    def __contains__(self, key: tuple[str, str]) -> bool:
        """Check if a definition exists: ('sprites', 'stickman') in registry"""
        kind, name = key
        return self.get(kind, name) is not None

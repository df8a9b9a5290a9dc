"""
Storage Manager for ytviewer
Config directory layout and the JSON-backed watched store.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from ...errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "ytviewer"


class StorageManager:
    """
    Service responsible for the on-disk layout of ytviewer.

    Responsibilities:
    - Create and validate the config directory structure.
    - Provide canonical paths for the config file, watched store and logs.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the StorageManager.

        Args:
            config_dir (str): Base directory; defaults to ~/.config/ytviewer.
        """
        self._root = Path(config_dir).expanduser().resolve() if config_dir else DEFAULT_CONFIG_DIR
        self._logs_dir = self._root / "logs"

        self._ensure_directories()

    def _ensure_directories(self):
        """Ensures that all required storage directories exist."""
        for d in (self._root, self._logs_dir):
            d.mkdir(parents=True, exist_ok=True)

    @property
    def config_path(self) -> Path:
        return self._root / "config.yaml"

    @property
    def watched_path(self) -> Path:
        return self._root / "watched.json"

    @property
    def logs_path(self) -> Path:
        return self._logs_dir

    def __repr__(self):
        return f"StorageManager(root={self._root})"


class WatchedStore:
    """
    JSON file mapping video ID -> true.

    Writes go to a temporary sibling first and are renamed over the
    original so a failed write never truncates the store.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dict[str, bool]:
        """
        Reads the store. A file that is not a JSON object is moved aside
        to a ``.bak`` sibling so the next save cannot overwrite it.

        Raises:
            PersistenceError: If the file exists but cannot be read or moved aside.
        """
        if not self._path.exists():
            return {}

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            self._move_aside(f"not valid JSON ({e})")
            return {}
        except OSError as e:
            raise PersistenceError(f"Could not read watched store {self._path}: {e}") from e

        if not isinstance(data, dict):
            self._move_aside(f"expected an object, found {type(data).__name__}")
            return {}
        return {str(k): True for k, v in data.items() if v}

    def _move_aside(self, problem: str) -> Path:
        backup = self._path.with_suffix(self._path.suffix + ".bak")
        n = 1
        while backup.exists():
            backup = self._path.with_suffix(f"{self._path.suffix}.bak.{n}")
            n += 1

        try:
            self._path.replace(backup)
        except OSError as e:
            raise PersistenceError(f"Malformed watched store {self._path} could not be moved aside: {e}") from e

        logger.warning(f"Malformed watched store {self._path}: {problem}. Kept as {backup}, starting empty")
        return backup

    def save(self, watched: Dict[str, bool]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(watched, f, indent=2, sort_keys=True)
            tmp_path.replace(self._path)
        except OSError as e:
            raise PersistenceError(f"Error writing watched store {self._path}: {e}") from e

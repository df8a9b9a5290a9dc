"""
Configuration Loader
Loads, validates and saves the YAML configuration file
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .app_config import AppConfig, MpvOptions
from ...errors import PersistenceError

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_YOUTUBE_API_KEY"

DEFAULT_CONFIG = {
    "api_key": PLACEHOLDER_API_KEY,
    "subscriptions": [],
    "max_videos": 5,
    "cache_duration": 30,
    "mpv_options": {
        "max_resolution": "1080",
        "mark_as_watched": True,
    },
}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates configuration from YAML files.

    Responsibilities:
    - Create a default configuration file on first run
    - Validate all fields, their types and value ranges
    - Return validated AppConfig instance
    - Rewrite the subscription list when it changes
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = Path(config_path)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> AppConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            AppConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid or the API key
                is still the placeholder written on first run
        """
        if not self._config_path.exists():
            self.create_default()

        config_data = self._load_yaml()

        return AppConfig(
            api_key=self._validate_api_key(config_data),
            subscriptions=self._validate_subscriptions(config_data),
            max_videos=self._validate_max_videos(config_data),
            cache_duration=self._validate_cache_duration(config_data),
            mpv_options=self._validate_mpv_options(config_data)
        )

    def create_default(self) -> None:
        """Writes a default configuration file with a placeholder API key."""
        self._write_yaml(DEFAULT_CONFIG)
        logger.warning(
            f"Created default config at {self._config_path}. "
            "Please edit it to add your YouTube API key."
        )

    def save_subscriptions(self, channel_ids: List[str]) -> None:
        """
        Persists the subscription list, keeping every other key as is.

        Raises:
            PersistenceError: If the file cannot be read or written
        """
        try:
            data = self._load_yaml() if self._config_path.exists() else dict(DEFAULT_CONFIG)
        except (ConfigValidationError, OSError) as e:
            raise PersistenceError(f"Error reading config file: {e}") from e

        data["subscriptions"] = list(channel_ids)
        self._write_yaml(data)
        logger.info(f"Saved {len(channel_ids)} subscriptions to {self._config_path}")

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

        if data is None:
            raise ConfigValidationError("Configuration file is empty")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration must be a YAML mapping/dictionary"
            )

        return data

    def _write_yaml(self, data: Dict[str, Any]) -> None:
        tmp_path = self._config_path.with_suffix(self._config_path.suffix + ".tmp")
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
            tmp_path.replace(self._config_path)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Error writing config file {self._config_path}: {e}") from e

    def _validate_api_key(self, config: Dict[str, Any]) -> str:
        """Validate api_key field."""
        if "api_key" not in config:
            raise ConfigValidationError("Missing required field: 'api_key'")

        api_key = config["api_key"]

        if not isinstance(api_key, str):
            raise ConfigValidationError(
                f"Field 'api_key' must be a string, got {type(api_key).__name__}"
            )

        if not api_key.strip():
            raise ConfigValidationError("Field 'api_key' cannot be empty")

        if api_key.strip() == PLACEHOLDER_API_KEY:
            raise ConfigValidationError(
                f"Please set your YouTube API key in {self._config_path}"
            )

        return api_key.strip()

    def _validate_subscriptions(self, config: Dict[str, Any]) -> List[str]:
        """Validate subscriptions field (optional)."""
        subscriptions = config.get("subscriptions")
        if subscriptions is None:
            return []

        if not isinstance(subscriptions, list):
            raise ConfigValidationError(
                f"Field 'subscriptions' must be a list, got {type(subscriptions).__name__}"
            )

        channel_ids = []
        for entry in subscriptions:
            if not isinstance(entry, str) or not entry.strip():
                raise ConfigValidationError(
                    f"Field 'subscriptions' must contain non-empty strings, got {entry!r}"
                )
            if entry.strip() not in channel_ids:
                channel_ids.append(entry.strip())

        return channel_ids

    def _validate_max_videos(self, config: Dict[str, Any]) -> int:
        """Validate max_videos field (optional)."""
        max_videos = config.get("max_videos", DEFAULT_CONFIG["max_videos"])

        # bool is an int subclass
        if not isinstance(max_videos, int) or isinstance(max_videos, bool):
            raise ConfigValidationError(
                f"Field 'max_videos' must be an integer, got {type(max_videos).__name__}"
            )

        if not (1 <= max_videos <= 50):
            raise ConfigValidationError(
                f"Field 'max_videos' must be between 1 and 50, got {max_videos}"
            )

        return max_videos

    def _validate_cache_duration(self, config: Dict[str, Any]) -> int:
        """Validate cache_duration field (optional, minutes)."""
        cache_duration = config.get("cache_duration", DEFAULT_CONFIG["cache_duration"])

        if not isinstance(cache_duration, int) or isinstance(cache_duration, bool):
            raise ConfigValidationError(
                f"Field 'cache_duration' must be an integer, got {type(cache_duration).__name__}"
            )

        if cache_duration < 0:
            raise ConfigValidationError(
                f"Field 'cache_duration' must be 0 or greater, got {cache_duration}"
            )

        return cache_duration

    def _validate_mpv_options(self, config: Dict[str, Any]) -> MpvOptions:
        """Validate mpv_options section."""
        defaults = DEFAULT_CONFIG["mpv_options"]

        options = config.get("mpv_options")
        if not isinstance(options, dict):
            return MpvOptions(**defaults)

        max_resolution = str(options.get("max_resolution", defaults["max_resolution"])).strip()
        mark_as_watched = options.get("mark_as_watched", defaults["mark_as_watched"])

        if not max_resolution.isdigit():
            raise ConfigValidationError(
                f"mpv_options.max_resolution must be a number of lines, got {max_resolution!r}"
            )
        if not isinstance(mark_as_watched, bool):
            raise ConfigValidationError("mpv_options.mark_as_watched must be boolean")

        return MpvOptions(
            max_resolution=max_resolution,
            mark_as_watched=mark_as_watched
        )

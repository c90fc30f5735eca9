"""
Configuration management for the pie chart application.

Defaults are merged with an optional YAML file and then with environment
variable overrides. Values are read with dot notation (``chart.show_labels``).
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .exceptions import ConfigurationError
from .logger import get_logger
from ..core.loader import segments_from_config
from ..core.models import DisplayOptions, FontSpec, Segment

logger = get_logger("config")

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"Expected a boolean for {key}, got {value!r}", key)


def _as_positive_number(value: Any, key: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Expected a number for {key}, got {value!r}", key
        ) from None
    if number <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value!r}", key)
    return number


class Config:
    """
    Configuration manager with dot-notation access.

    Thread-safe singleton; use ``init_config`` to load a specific file.
    """

    _instance: Optional[Config] = None
    _lock: threading.Lock = threading.Lock()

    DEFAULTS: Dict[str, Any] = {
        "chart": {
            "show_labels": True,
            "show_value_in_label": False,
            "label_font": {
                "family": "",
                "size": 20,
                "bold": False,
            },
            "segments": [],
        },
        "window": {
            "width": 400,
            "height": 400,
            "title": "Pie Chart",
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "format": "pretty",
        },
    }

    ENV_OVERRIDES: Dict[str, str] = {
        "PIECHART_LOG_LEVEL": "logging.level",
        "PIECHART_LOG_FILE": "logging.file",
        "PIECHART_FONT_FAMILY": "chart.label_font.family",
        "PIECHART_FONT_SIZE": "chart.label_font.size",
    }

    def __new__(cls, config_path: Optional[Path] = None) -> Config:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._config = {}
                    instance._config_path = None
                    instance._initialized = False
                    cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: YAML file to load. If None, standard locations are
                searched and defaults are used when none exists.

        Raises:
            ConfigurationError: If an explicit file is missing or invalid
        """
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            self._config = self._deep_copy_dict(self.DEFAULTS)

            if config_path is not None:
                config_path = Path(config_path).expanduser()
                if not config_path.is_file():
                    raise ConfigurationError(
                        f"Config file not found: {config_path}"
                    )
                self._config_path = config_path
            else:
                self._config_path = self._find_config_file()

            if self._config_path:
                self._load_config()

            self._apply_env_overrides()
            self._initialized = True

    def _deep_copy_dict(self, d: Dict[str, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in d.items():
            if isinstance(value, dict):
                result[key] = self._deep_copy_dict(value)
            elif isinstance(value, list):
                result[key] = list(value)
            else:
                result[key] = value
        return result

    def _find_config_file(self) -> Optional[Path]:
        search_paths = [
            Path.cwd() / "piechart.yaml",
            Path.home() / ".piechart" / "config.yaml",
        ]

        for path in search_paths:
            try:
                if path.is_file():
                    return path
            except OSError:
                continue

        return None

    def _load_config(self) -> None:
        """Load and merge the YAML file at ``self._config_path``."""
        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file: {e}")

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {self._config_path}"
            )

        self._merge_config(self._config, loaded)
        logger.info(f"Configuration loaded from: {self._config_path}")

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        for env_var, config_key in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value:
                self.set(config_key, value)
                logger.debug(f"Config override from env: {config_key}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "chart.label_font.size")
            default: Returned when the key is missing or None
        """
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        return self.get(section, {})

    def display_options(self) -> DisplayOptions:
        """
        Build label options from the ``chart`` section.

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        font = FontSpec(
            family=str(self.get("chart.label_font.family", "")),
            point_size=_as_positive_number(
                self.get("chart.label_font.size", 20), "chart.label_font.size"
            ),
            bold=_as_bool(
                self.get("chart.label_font.bold", False), "chart.label_font.bold"
            ),
        )
        return DisplayOptions(
            show_labels=_as_bool(
                self.get("chart.show_labels", True), "chart.show_labels"
            ),
            show_value_in_label=_as_bool(
                self.get("chart.show_value_in_label", False),
                "chart.show_value_in_label",
            ),
            label_font=font,
        )

    def segments(self) -> List[Segment]:
        """Segments listed under ``chart.segments``."""
        entries = self.get("chart.segments", [])
        if not isinstance(entries, list):
            raise ConfigurationError(
                "chart.segments must be a list", "chart.segments"
            )
        return segments_from_config(entries)

    def window_size(self) -> Tuple[int, int]:
        return (
            int(_as_positive_number(self.get("window.width", 400), "window.width")),
            int(_as_positive_number(self.get("window.height", 400), "window.height")),
        )

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def to_dict(self) -> Dict[str, Any]:
        return self._deep_copy_dict(self._config)

    def reload(self) -> None:
        """Reload configuration from file."""
        with self._lock:
            self._config = self._deep_copy_dict(self.DEFAULTS)
            if self._config_path and self._config_path.exists():
                self._load_config()
            self._apply_env_overrides()


_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = Config()
    return _config


def init_config(config_path: Optional[Path] = None) -> Config:
    """
    (Re)initialize global configuration, optionally from a specific file.

    Raises:
        ConfigurationError: If ``config_path`` is missing or invalid
    """
    global _config
    with _config_lock:
        Config._instance = None
        _config = Config(config_path)
    return _config

"""Utility modules for the pie chart application."""

from .logger import get_logger, setup_logging
from .exceptions import (
    PieChartError,
    ConfigurationError,
    SegmentParseError,
    RenderExportError,
)
from .config import Config, get_config, init_config

__all__ = [
    "get_logger",
    "setup_logging",
    "PieChartError",
    "ConfigurationError",
    "SegmentParseError",
    "RenderExportError",
    "Config",
    "get_config",
    "init_config",
]

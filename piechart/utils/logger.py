"""
Logging for the pie chart renderer and its Qt host.

Two output styles are supported:
- "pretty": colorized single-line console output for interactive use
- "json": one JSON object per record, always used for the log file

Call sites attach structured fields through ``extra_data``::

    logger.warning("Label skipped", extra_data={"segment": "A"})
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Tuple

ROOT_LOGGER_NAME = "piechart"


class StructuredFormatter(logging.Formatter):
    """JSON formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload.update(extra_data)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    """Colorized formatter for console output."""

    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    GREY = "\033[90m"

    NAME_WIDTH = 18

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]

        # "piechart.ui.painter" -> "ui.painter"
        name = record.name
        if name.startswith(ROOT_LOGGER_NAME + "."):
            name = name[len(ROOT_LOGGER_NAME) + 1:]
        if len(name) > self.NAME_WIDTH:
            name = name[: self.NAME_WIDTH - 3] + "..."

        line = (
            f"[{timestamp}] "
            f"{color}{record.levelname:8}{self.RESET} "
            f"{self.GREY}{name:{self.NAME_WIDTH}}{self.RESET} "
            f"{record.getMessage()}"
        )

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            line += " | " + ", ".join(f"{k}={v}" for k, v in extra_data.items())

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges bound context with per-call ``extra_data``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra_data = kwargs.pop("extra_data", None)
        call_extra = kwargs.get("extra") or {}

        merged = {**(self.extra or {}), **call_extra}
        if extra_data:
            merged.update(extra_data)

        kwargs["extra"] = {"extra_data": merged}
        return msg, kwargs


class LoggerManager:
    """
    Owns handler configuration for the ``piechart`` logger tree.

    Thread-safe singleton; ``setup`` only takes effect once until ``reset``.
    """

    _instance: Optional[LoggerManager] = None
    _lock: threading.Lock = threading.Lock()

    def __new__(cls) -> LoggerManager:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._initialized = False
                    cls._instance = instance
        return cls._instance

    def setup(
        self,
        level: str = "INFO",
        log_file: Optional[str] = None,
        format_type: str = "pretty",
        max_size_mb: int = 5,
        backup_count: int = 3,
    ) -> None:
        """
        Configure console and optional file logging.

        Args:
            level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to a rotating JSON log file, or None for console only
            format_type: "json" or "pretty" for the console handler
            max_size_mb: Size at which the log file is rotated
            backup_count: Number of rotated files to keep
        """
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            root = logging.getLogger(ROOT_LOGGER_NAME)
            root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
            root.handlers.clear()
            root.propagate = False

            console = logging.StreamHandler(sys.stderr)
            if format_type == "json":
                console.setFormatter(StructuredFormatter())
            else:
                console.setFormatter(PrettyFormatter())
            root.addHandler(console)

            if log_file:
                try:
                    path = Path(log_file)
                    path.parent.mkdir(parents=True, exist_ok=True)
                    file_handler = RotatingFileHandler(
                        path,
                        maxBytes=max_size_mb * 1024 * 1024,
                        backupCount=backup_count,
                        encoding="utf-8",
                    )
                    file_handler.setFormatter(StructuredFormatter())
                    root.addHandler(file_handler)
                except OSError as e:
                    root.warning(f"Failed to open log file {log_file}: {e}")

            self._initialized = True

    def get_logger(
        self,
        name: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ContextLogger:
        """Return a ``ContextLogger`` under the ``piechart`` namespace."""
        return ContextLogger(
            logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"),
            context or {},
        )

    def reset(self) -> None:
        """Drop all handlers so ``setup`` can be called again."""
        with self._lock:
            self._initialized = False
            logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()


_manager = LoggerManager()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "pretty",
) -> None:
    """Configure the global logging system."""
    _manager.setup(level=level, log_file=log_file, format_type=format_type)


def get_logger(
    name: str,
    context: Optional[Dict[str, Any]] = None,
) -> ContextLogger:
    """Get a logger instance."""
    return _manager.get_logger(name, context)


def reset_logging() -> None:
    """Reset the logging system (used by tests)."""
    _manager.reset()

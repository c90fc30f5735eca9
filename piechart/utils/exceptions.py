"""
Exceptions raised by the pie chart application layers.

The renderer itself never raises for bad data; these are used by the
configuration, input parsing and export code around it.
"""

from typing import Optional


class PieChartError(Exception):
    """Base exception for all pie chart errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "UNKNOWN_ERROR"
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PieChartError):
    """Raised when the configuration file or a config value is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            code="CONFIG_ERROR",
            details={"config_key": config_key} if config_key else {},
        )


class SegmentParseError(PieChartError):
    """Raised when a segment definition cannot be parsed."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(
            message,
            code="SEGMENT_PARSE_ERROR",
            details={
                "source": source,
                "field": field,
            },
        )


class RenderExportError(PieChartError):
    """Raised when a rendered chart cannot be written to disk."""

    def __init__(self, output_path: str, reason: str):
        super().__init__(
            f"Failed to export chart to '{output_path}': {reason}",
            code="EXPORT_ERROR",
            details={"output_path": output_path},
        )

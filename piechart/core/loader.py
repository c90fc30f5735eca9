"""
Build segment lists from command-line strings and configuration entries.

Command-line form: ``NAME=VALUE[:COLOR]``, for example ``Rent=950:#f85149``.
Segments without a color take the next entry of ``DEFAULT_PALETTE``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import Segment
from .services import color_components
from ..utils.exceptions import SegmentParseError
from ..utils.logger import get_logger

logger = get_logger("loader")

DEFAULT_PALETTE: List[str] = [
    "#58a6ff",
    "#3fb950",
    "#d29922",
    "#f85149",
    "#bc8cff",
    "#39c5cf",
]


def _palette_color(index: int) -> str:
    return DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)]


def _resolve_color(color: Any, index: int) -> Any:
    """Use RGB when the color resolves, otherwise pass the raw value through."""
    if color is None or color == "":
        color = _palette_color(index)

    rgb = color_components(color)
    if rgb is None:
        logger.debug(f"Color {color!r} has no RGB form; keeping it as given")
        return color
    return rgb


def _parse_value(raw: Any, source: str) -> float:
    if isinstance(raw, bool):
        raise SegmentParseError(f"Invalid segment value: {raw!r}", source, "value")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise SegmentParseError(
            f"Invalid segment value: {raw!r}", source, "value"
        ) from None


def parse_segment_arg(text: str, index: int = 0) -> Segment:
    """
    Parse one ``NAME=VALUE[:COLOR]`` argument.

    Args:
        text: The argument as typed
        index: Position in the chart, used to pick a palette color

    Raises:
        SegmentParseError: If the name or value is missing or malformed
    """
    name, sep, rest = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise SegmentParseError(
            f"Expected NAME=VALUE[:COLOR], got {text!r}", text, "name"
        )

    raw_value, _, color = rest.partition(":")
    value = _parse_value(raw_value.strip(), text)
    return Segment(
        color=_resolve_color(color.strip() or None, index),
        name=name,
        value=value,
    )


def parse_segment_args(args: Iterable[str]) -> List[Segment]:
    return [parse_segment_arg(arg, i) for i, arg in enumerate(args)]


def segment_from_mapping(entry: Dict[str, Any], index: int = 0) -> Segment:
    """Build a segment from a ``{name, value, color}`` config entry."""
    source = f"segments[{index}]"
    if not isinstance(entry, dict):
        raise SegmentParseError(f"Segment entry must be a mapping: {entry!r}", source)

    name = entry.get("name")
    if name is None or str(name).strip() == "":
        raise SegmentParseError("Segment entry has no name", source, "name")
    if "value" not in entry:
        raise SegmentParseError(f"Segment '{name}' has no value", source, "value")

    color = entry.get("color")
    if isinstance(color, list):
        color = tuple(color)

    return Segment(
        color=_resolve_color(color, index),
        name=str(name),
        value=_parse_value(entry["value"], source),
    )


def segments_from_config(entries: Optional[Iterable[Dict[str, Any]]]) -> List[Segment]:
    """Build segments from the ``chart.segments`` config list."""
    if not entries:
        return []
    return [segment_from_mapping(entry, i) for i, entry in enumerate(entries)]

"""
Capability interfaces the renderer depends on, plus toolkit-free defaults.

The renderer only talks to text measurement, number formatting and color
resolution through these seams; drawing backends implement ``CanvasSurface``
and ``TextDrawer`` to replay the commands it produces.
"""

from __future__ import annotations

import locale
import math
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Dict, Iterable, Optional, Tuple

from .models import (
    RGB,
    DrawCommand,
    FontSpec,
    LabelDraw,
    ParagraphStyle,
    Point,
    Rect,
    WedgeFill,
)


class CanvasSurface(ABC):
    """Path-based drawing surface used to fill wedges."""

    @abstractmethod
    def set_fill_color(self, color: Any) -> None:
        ...

    @abstractmethod
    def move_to(self, point: Point) -> None:
        ...

    @abstractmethod
    def add_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool,
    ) -> None:
        """
        Append an arc to the current path.

        Angles are radians in a y-down coordinate system, so an increasing
        angle sweeps clockwise on screen.
        """

    @abstractmethod
    def fill_path(self) -> None:
        """Close the current path, fill it and start a new one."""


class TextMeasurer(ABC):

    @abstractmethod
    def measure(
        self, text: str, font: FontSpec, paragraph_style: ParagraphStyle
    ) -> Tuple[float, float]:
        """Return the (width, height) ``text`` occupies when drawn."""


class TextDrawer(ABC):

    @abstractmethod
    def draw(
        self,
        text: str,
        rect: Rect,
        font: FontSpec,
        color: RGB,
        alignment: str,
    ) -> None:
        ...


class NumberFormatter(ABC):

    @abstractmethod
    def format(self, value: float) -> str:
        ...


def strip_zero_fraction(text: str, decimal_point: str) -> str:
    """Drop trailing fractional zeros: ``"2.50" -> "2.5"``, ``"-0.0" -> "0"``."""
    if decimal_point and decimal_point in text:
        text = text.rstrip("0").rstrip(decimal_point)
    if text == "-0":
        text = "0"
    return text


class DecimalNumberFormatter(NumberFormatter):
    """
    Decimal style with 0 to 1 fractional digits.

    Grouping and the decimal separator come from the process LC_NUMERIC
    locale, so they only apply once the host has called ``locale.setlocale``;
    the default C locale has no grouping. A trailing zero fraction is
    stripped: ``2.0 -> "2"``, and ``1234.5 -> "1,234.5"`` under en_US.
    Qt hosts use ``ui.painter.QtNumberFormatter``, which reads ``QLocale``.
    """

    def __init__(self, max_fraction_digits: int = 1) -> None:
        self._pattern = f"%.{max_fraction_digits}f"

    def format(self, value: float) -> str:
        text = locale.format_string(self._pattern, value, grouping=True)
        return strip_zero_fraction(text, locale.localeconv()["decimal_point"])


# Small table of CSS names; anything else must be given as hex or channels.
NAMED_COLORS: Dict[str, RGB] = {
    "black": RGB(0.0, 0.0, 0.0),
    "white": RGB(1.0, 1.0, 1.0),
    "red": RGB(1.0, 0.0, 0.0),
    "green": RGB(0.0, 128 / 255, 0.0),
    "lime": RGB(0.0, 1.0, 0.0),
    "blue": RGB(0.0, 0.0, 1.0),
    "yellow": RGB(1.0, 1.0, 0.0),
    "cyan": RGB(0.0, 1.0, 1.0),
    "magenta": RGB(1.0, 0.0, 1.0),
    "orange": RGB(1.0, 165 / 255, 0.0),
    "purple": RGB(128 / 255, 0.0, 128 / 255),
    "gray": RGB(128 / 255, 128 / 255, 128 / 255),
    "grey": RGB(128 / 255, 128 / 255, 128 / 255),
}


def _parse_hex(text: str) -> Optional[RGB]:
    digits = text[1:]
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits)
    if len(digits) not in (6, 8):
        return None
    try:
        channels = [int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4)]
    except ValueError:
        return None
    return RGB(*channels)


def _is_channel(value: Any) -> bool:
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and 0.0 <= value <= 1.0
    )


def color_components(color: Any) -> Optional[RGB]:
    """
    Resolve ``color`` to RGB channels, or None when it has no RGB form.

    Accepts ``RGB``, ``"#rgb"``/``"#rrggbb"`` (optionally with alpha),
    a few CSS names, ``(r, g, b[, a])`` channel tuples and ``(white, alpha)``
    grayscale pairs. Alpha is ignored.
    """
    if isinstance(color, RGB):
        return color if all(_is_channel(c) for c in color.as_tuple()) else None

    if isinstance(color, str):
        text = color.strip().lower()
        if text.startswith("#"):
            return _parse_hex(text)
        return NAMED_COLORS.get(text)

    if isinstance(color, (tuple, list)):
        if not all(_is_channel(c) for c in color):
            return None
        if len(color) == 2:
            return RGB(color[0], color[0], color[0])
        if len(color) in (3, 4):
            return RGB(color[0], color[1], color[2])

    return None


def execute_commands(
    commands: Iterable[DrawCommand],
    surface: CanvasSurface,
    drawer: TextDrawer,
) -> None:
    """Replay draw commands, in order, onto a surface and text drawer."""
    for command in commands:
        if isinstance(command, WedgeFill):
            surface.set_fill_color(command.color)
            surface.move_to(command.center)
            surface.add_arc(
                command.center,
                command.radius,
                command.start_angle,
                command.end_angle,
                clockwise=True,
            )
            surface.fill_path()
        elif isinstance(command, LabelDraw):
            drawer.draw(
                command.text,
                command.anchor_rect,
                command.font,
                command.color,
                command.alignment,
            )

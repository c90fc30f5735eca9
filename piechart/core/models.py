"""
Value types for pie chart rendering.

Inputs (``Segment``, ``DisplayOptions``, ``Viewport``) are frozen so a render
pass always sees a consistent snapshot. Everything else here is derived per
render call and never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class RGB:
    """Color with each channel in [0, 1]."""

    red: float
    green: float
    blue: float

    @property
    def average(self) -> float:
        """Plain mean of the three channels."""
        return (self.red + self.green + self.blue) / 3.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = RGB(0.0, 0.0, 0.0)
WHITE = RGB(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Segment:
    """
    One named, weighted slice of the pie.

    ``color`` is normally an ``RGB`` but may be any value understood by
    ``services.color_components`` (hex string, channel tuple).
    """

    color: Any
    name: str
    value: float


@dataclass(frozen=True)
class FontSpec:
    """Font descriptor. An empty family selects the platform default font."""

    family: str = ""
    point_size: float = 20.0
    bold: bool = False


@dataclass(frozen=True)
class DisplayOptions:
    """Label settings for a render pass."""

    show_labels: bool = True
    show_value_in_label: bool = False
    label_font: FontSpec = field(default_factory=FontSpec)


@dataclass(frozen=True)
class ParagraphStyle:
    """Text layout attributes handed to the text measurer."""

    font: FontSpec
    alignment: str = "center"


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with its origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered_at(cls, center: Point, width: float, height: float) -> Rect:
        return cls(center.x - width * 0.5, center.y - height * 0.5, width, height)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.y + self.height * 0.5)


@dataclass(frozen=True)
class WedgeGeometry:
    """Angular extent of one wedge, in radians, and the weight that produced it."""

    start_angle: float
    end_angle: float
    center: Point
    radius: float
    value: float = 0.0

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return self.start_angle + (self.end_angle - self.start_angle) * 0.5


@dataclass(frozen=True)
class LabelPlacement:
    text: str
    anchor_rect: Rect
    foreground_color: RGB


@dataclass(frozen=True)
class WedgeFill:
    """Move to center, arc from start to end angle, close and fill."""

    color: Any
    center: Point
    radius: float
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class LabelDraw:
    """Draw ``text`` centered inside ``anchor_rect``."""

    text: str
    anchor_rect: Rect
    font: FontSpec
    color: RGB
    alignment: str = "center"


DrawCommand = Union[WedgeFill, LabelDraw]

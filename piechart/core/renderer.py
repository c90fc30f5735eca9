"""
Pie chart renderer.

Turns an ordered list of segments into draw commands: one ``WedgeFill`` per
segment, each optionally followed by the ``LabelDraw`` for that wedge.
The renderer keeps no state between calls; hosts call ``render`` again
whenever the segments, options or viewport change.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .models import (
    BLACK,
    RGB,
    WHITE,
    DisplayOptions,
    DrawCommand,
    LabelDraw,
    LabelPlacement,
    ParagraphStyle,
    Point,
    Rect,
    Segment,
    Viewport,
    WedgeFill,
    WedgeGeometry,
)
from .services import (
    DecimalNumberFormatter,
    NumberFormatter,
    TextMeasurer,
    color_components,
)
from ..utils.logger import get_logger

logger = get_logger("renderer")

# 12 o'clock; the drawing space is y-down so angles grow clockwise on screen.
INITIAL_ANGLE = -math.pi * 0.5
FULL_TURN = math.pi * 2.0

# Fraction of the radius where labels sit, biased toward the wider outer part.
LABEL_RADIUS_RATIO = 0.67

# Average channel value above which labels switch from white to black.
CONTRAST_THRESHOLD = 0.7


def contrast_color(color: RGB) -> RGB:
    """Black on light fills, white on dark ones (strictly above 0.7 is light)."""
    return BLACK if color.average > CONTRAST_THRESHOLD else WHITE


def effective_value(segment: Segment) -> float:
    """
    Weight used for geometry.

    Negative and non-finite values count as zero so one bad entry cannot
    produce a backwards wedge or poison the total.
    """
    value = segment.value
    try:
        value = float(value)
    except (TypeError, ValueError):
        value = math.nan

    if not math.isfinite(value) or value < 0:
        logger.warning(
            "Segment value treated as zero",
            extra_data={"segment": segment.name, "value": segment.value},
        )
        return 0.0
    return value


def chart_radius(viewport: Viewport) -> float:
    return max(0.0, 0.5 * min(viewport.width, viewport.height))


def chart_center(viewport: Viewport) -> Point:
    return Point(viewport.width * 0.5, viewport.height * 0.5)


def wedge_geometries(
    segments: Sequence[Segment],
    viewport: Viewport,
) -> List[WedgeGeometry]:
    """
    Compute the angular sweep for every segment, in input order.

    Returns an empty list when there is nothing to draw: no positive total
    weight, or a viewport too small to give a positive radius.
    """
    values = [effective_value(segment) for segment in segments]
    total = sum(values)
    radius = chart_radius(viewport)
    if total <= 0 or radius <= 0:
        return []

    center = chart_center(viewport)
    geometries: List[WedgeGeometry] = []
    angle = INITIAL_ANGLE
    for value in values:
        end_angle = angle + FULL_TURN * (value / total)
        geometries.append(WedgeGeometry(angle, end_angle, center, radius, value))
        angle = end_angle

    return geometries


class ChartRenderer:
    """
    Computes wedge and label draw commands for a pie chart.

    Text measurement and number formatting are injected so the renderer
    stays independent of any UI toolkit.
    """

    def __init__(
        self,
        text_measurer: TextMeasurer,
        number_formatter: Optional[NumberFormatter] = None,
    ) -> None:
        self._measurer = text_measurer
        self._formatter = number_formatter or DecimalNumberFormatter()

    def label_text(
        self, segment: Segment, options: DisplayOptions, value: float
    ) -> str:
        """``value`` is the sanitized weight carried on the wedge geometry."""
        if options.show_value_in_label:
            return f"{segment.name} ({self._formatter.format(value)})"
        return segment.name

    def label_placement(
        self,
        segment: Segment,
        geometry: WedgeGeometry,
        options: DisplayOptions,
        paragraph_style: Optional[ParagraphStyle] = None,
    ) -> Optional[LabelPlacement]:
        """
        Position and color the label for one wedge.

        Returns None when the segment color has no RGB components; the
        caller then draws the wedge without a label.
        """
        components = color_components(segment.color)
        if components is None:
            logger.warning(
                "Skipping label: segment color has no RGB components",
                extra_data={"segment": segment.name, "color": repr(segment.color)},
            )
            return None

        if paragraph_style is None:
            paragraph_style = ParagraphStyle(font=options.label_font)

        mid_angle = geometry.mid_angle
        label_radius = geometry.radius * LABEL_RADIUS_RATIO
        anchor = Point(
            geometry.center.x + label_radius * math.cos(mid_angle),
            geometry.center.y + label_radius * math.sin(mid_angle),
        )

        text = self.label_text(segment, options, geometry.value)
        width, height = self._measurer.measure(
            text, options.label_font, paragraph_style
        )

        return LabelPlacement(
            text=text,
            anchor_rect=Rect.centered_at(anchor, width, height),
            foreground_color=contrast_color(components),
        )

    def render(
        self,
        segments: Iterable[Segment],
        options: DisplayOptions,
        viewport: Viewport,
    ) -> List[DrawCommand]:
        """
        Produce the ordered draw commands for one render pass.

        Order is wedge, then its label (when enabled), then the next wedge.
        """
        segments = list(segments)
        geometries = wedge_geometries(segments, viewport)
        if not geometries:
            return []

        paragraph_style = ParagraphStyle(font=options.label_font)
        commands: List[DrawCommand] = []

        for segment, geometry in zip(segments, geometries):
            fill = color_components(segment.color)
            commands.append(
                WedgeFill(
                    color=fill if fill is not None else segment.color,
                    center=geometry.center,
                    radius=geometry.radius,
                    start_angle=geometry.start_angle,
                    end_angle=geometry.end_angle,
                )
            )

            if not options.show_labels:
                continue

            placement = self.label_placement(
                segment, geometry, options, paragraph_style
            )
            if placement is None:
                continue

            commands.append(
                LabelDraw(
                    text=placement.text,
                    anchor_rect=placement.anchor_rect,
                    font=options.label_font,
                    color=placement.foreground_color,
                    alignment=paragraph_style.alignment,
                )
            )

        logger.debug(
            "Rendered pie chart",
            extra_data={"segments": len(segments), "commands": len(commands)},
        )
        return commands

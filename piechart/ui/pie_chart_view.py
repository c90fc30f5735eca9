"""
Pie chart widget.

Holds the chart inputs and repaints whenever one of them changes; all
geometry comes from ``ChartRenderer`` on each paint.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional

from PyQt6.QtGui import QImage, QPainter
from PyQt6.QtWidgets import QWidget

from .painter import (
    QtNumberFormatter,
    QtTextMeasurer,
    paint_chart,
    render_chart_image,
)
from ..core.models import DisplayOptions, FontSpec, Segment, Viewport
from ..core.renderer import ChartRenderer
from ..core.services import NumberFormatter
from ..utils.logger import get_logger

logger = get_logger("pie_chart_view")


class PieChartView(QWidget):
    """
    Widget that draws a pie chart with optional in-wedge labels.

    Every setter (property assignment or ``set_*`` call) schedules a
    repaint; nothing is cached between paints. Values in labels are
    formatted in the widget's QLocale unless a formatter is given.
    """

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        number_formatter: Optional[NumberFormatter] = None,
    ):
        super().__init__(parent)

        self._segments: List[Segment] = []
        self._options = DisplayOptions()
        self._number_formatter = number_formatter or QtNumberFormatter()
        self._renderer = ChartRenderer(QtTextMeasurer(), self._number_formatter)

        self.setMinimumSize(100, 100)

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @segments.setter
    def segments(self, segments: Iterable[Segment]) -> None:
        self.set_segments(segments)

    @property
    def display_options(self) -> DisplayOptions:
        return self._options

    @display_options.setter
    def display_options(self, options: DisplayOptions) -> None:
        self.set_display_options(options)

    @property
    def show_labels(self) -> bool:
        return self._options.show_labels

    @show_labels.setter
    def show_labels(self, show: bool) -> None:
        self.set_show_labels(show)

    @property
    def show_value_in_label(self) -> bool:
        return self._options.show_value_in_label

    @show_value_in_label.setter
    def show_value_in_label(self, show: bool) -> None:
        self.set_show_value_in_label(show)

    @property
    def label_font(self) -> FontSpec:
        return self._options.label_font

    @label_font.setter
    def label_font(self, font: FontSpec) -> None:
        self.set_label_font(font)

    def set_segments(self, segments: Iterable[Segment]) -> None:
        """Replace the chart data."""
        self._segments = list(segments)
        logger.debug(f"Segments updated: {len(self._segments)}")
        self.update()

    def set_display_options(self, options: DisplayOptions) -> None:
        self._options = options
        self.update()

    def set_show_labels(self, show: bool) -> None:
        self.set_display_options(replace(self._options, show_labels=show))

    def set_show_value_in_label(self, show: bool) -> None:
        self.set_display_options(replace(self._options, show_value_in_label=show))

    def set_label_font(self, font: FontSpec) -> None:
        self.set_display_options(replace(self._options, label_font=font))

    def paintEvent(self, event) -> None:
        """Paint the pie chart."""
        painter = QPainter(self)
        try:
            paint_chart(
                painter,
                self._renderer,
                self._segments,
                self._options,
                Viewport(self.width(), self.height()),
            )
        finally:
            painter.end()

    def render_to_image(self, width: int, height: int) -> QImage:
        """Render the current chart offscreen at the given size."""
        return render_chart_image(
            self._segments,
            self._options,
            width,
            height,
            self._number_formatter,
        )

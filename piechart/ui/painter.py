"""
QPainter implementations of the renderer's drawing and measuring interfaces.

The renderer works in radians on a y-down canvas (angles grow clockwise on
screen). Qt arcs take degrees that grow counter-clockwise, so both the start
angle and the sweep are negated on the way in.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence, Tuple

from PyQt6.QtCore import QLocale, QPointF, QRectF, Qt
from PyQt6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QImage,
    QPainter,
    QPainterPath,
)

from ..core.models import (
    RGB,
    DisplayOptions,
    FontSpec,
    ParagraphStyle,
    Point,
    Rect,
    Segment,
    Viewport,
)
from ..core.renderer import FULL_TURN, ChartRenderer
from ..core.services import (
    CanvasSurface,
    NumberFormatter,
    TextDrawer,
    TextMeasurer,
    color_components,
    execute_commands,
    strip_zero_fraction,
)
from ..utils.logger import get_logger

logger = get_logger("painter")

ALIGNMENTS: Dict[str, Qt.AlignmentFlag] = {
    "center": Qt.AlignmentFlag.AlignCenter,
    "left": Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
    "right": Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter,
}


def qfont_from_spec(spec: FontSpec) -> QFont:
    """Build a QFont; an empty family keeps the application default."""
    font = QFont(spec.family) if spec.family else QFont()
    font.setPointSizeF(float(spec.point_size))
    font.setBold(spec.bold)
    return font


def to_qcolor(color: Any) -> QColor:
    """
    Convert a segment or label color to QColor.

    Colors the core cannot resolve (e.g. SVG names such as "teal") are handed
    to QColor's own parser; anything Qt rejects becomes transparent.
    """
    rgb = color_components(color)
    if rgb is not None:
        return QColor.fromRgbF(rgb.red, rgb.green, rgb.blue)

    if isinstance(color, str):
        qcolor = QColor(color)
        if qcolor.isValid():
            return qcolor

    logger.warning(f"Unpaintable color {color!r}; using transparent")
    return QColor(Qt.GlobalColor.transparent)


class QtNumberFormatter(NumberFormatter):
    """
    Decimal style with 0 to 1 fractional digits in the user's ``QLocale``.

    Grouping and the decimal separator follow the locale, e.g. ``1234.5`` is
    ``"1,234.5"`` in en_US and ``"1.234,5"`` in de_DE.
    """

    def __init__(
        self,
        qlocale: Optional[QLocale] = None,
        max_fraction_digits: int = 1,
    ) -> None:
        self._locale = qlocale if qlocale is not None else QLocale()
        self._digits = max_fraction_digits

    def format(self, value: float) -> str:
        text = self._locale.toString(float(value), "f", self._digits)
        return strip_zero_fraction(text, self._locale.decimalPoint())


class QtCanvasSurface(CanvasSurface):
    """Builds one QPainterPath per wedge and fills it with the current color."""

    def __init__(self, painter: QPainter) -> None:
        self._painter = painter
        self._path = QPainterPath()
        self._fill = QColor(Qt.GlobalColor.transparent)

    def set_fill_color(self, color: Any) -> None:
        self._fill = to_qcolor(color)

    def move_to(self, point: Point) -> None:
        self._path.moveTo(QPointF(point.x, point.y))

    def add_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool,
    ) -> None:
        bounds = QRectF(
            center.x - radius, center.y - radius, radius * 2.0, radius * 2.0
        )
        sweep = end_angle - start_angle
        if not clockwise and sweep > 0:
            sweep -= FULL_TURN
        self._path.arcTo(bounds, -math.degrees(start_angle), -math.degrees(sweep))

    def fill_path(self) -> None:
        self._path.closeSubpath()
        self._painter.fillPath(self._path, QBrush(self._fill))
        self._path = QPainterPath()


class QtTextMeasurer(TextMeasurer):

    def measure(
        self, text: str, font: FontSpec, paragraph_style: ParagraphStyle
    ) -> Tuple[float, float]:
        metrics = QFontMetricsF(qfont_from_spec(font))
        size = metrics.size(0, text)
        return size.width(), size.height()


class QtTextDrawer(TextDrawer):

    def __init__(self, painter: QPainter) -> None:
        self._painter = painter

    def draw(
        self,
        text: str,
        rect: Rect,
        font: FontSpec,
        color: RGB,
        alignment: str,
    ) -> None:
        self._painter.setFont(qfont_from_spec(font))
        self._painter.setPen(to_qcolor(color))
        self._painter.drawText(
            QRectF(rect.x, rect.y, rect.width, rect.height),
            ALIGNMENTS.get(alignment, Qt.AlignmentFlag.AlignCenter),
            text,
        )


def paint_chart(
    painter: QPainter,
    renderer: ChartRenderer,
    segments: Sequence[Segment],
    options: DisplayOptions,
    viewport: Viewport,
) -> int:
    """Render and replay a chart onto ``painter``. Returns the command count."""
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)

    commands = renderer.render(segments, options, viewport)
    execute_commands(commands, QtCanvasSurface(painter), QtTextDrawer(painter))
    return len(commands)


def render_chart_image(
    segments: Sequence[Segment],
    options: DisplayOptions,
    width: int,
    height: int,
    number_formatter: Optional[NumberFormatter] = None,
) -> QImage:
    """
    Paint a chart into a transparent ARGB image.

    Needs a QGuiApplication (the offscreen platform is enough).
    """
    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)

    renderer = ChartRenderer(
        QtTextMeasurer(), number_formatter or QtNumberFormatter()
    )
    painter = QPainter(image)
    try:
        count = paint_chart(
            painter, renderer, segments, options, Viewport(width, height)
        )
    finally:
        painter.end()

    logger.debug(f"Rendered {count} commands into {width}x{height} image")
    return image

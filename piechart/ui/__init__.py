"""PyQt6 host for the pie chart renderer."""

from .painter import (
    QtCanvasSurface,
    QtNumberFormatter,
    QtTextMeasurer,
    QtTextDrawer,
    paint_chart,
    render_chart_image,
)
from .pie_chart_view import PieChartView
from .app import PieChartApp, create_application

__all__ = [
    "QtCanvasSurface",
    "QtNumberFormatter",
    "QtTextMeasurer",
    "QtTextDrawer",
    "paint_chart",
    "render_chart_image",
    "PieChartView",
    "PieChartApp",
    "create_application",
]

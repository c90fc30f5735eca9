"""Toolkit-independent pie chart geometry and draw commands."""

from .models import (
    RGB,
    BLACK,
    WHITE,
    Segment,
    FontSpec,
    DisplayOptions,
    ParagraphStyle,
    Viewport,
    Point,
    Rect,
    WedgeGeometry,
    LabelPlacement,
    WedgeFill,
    LabelDraw,
    DrawCommand,
)
from .services import (
    CanvasSurface,
    TextMeasurer,
    TextDrawer,
    NumberFormatter,
    DecimalNumberFormatter,
    color_components,
    execute_commands,
)
from .renderer import ChartRenderer, contrast_color, wedge_geometries

__all__ = [
    # Models
    "RGB",
    "BLACK",
    "WHITE",
    "Segment",
    "FontSpec",
    "DisplayOptions",
    "ParagraphStyle",
    "Viewport",
    "Point",
    "Rect",
    "WedgeGeometry",
    "LabelPlacement",
    "WedgeFill",
    "LabelDraw",
    "DrawCommand",
    # Services
    "CanvasSurface",
    "TextMeasurer",
    "TextDrawer",
    "NumberFormatter",
    "DecimalNumberFormatter",
    "color_components",
    "execute_commands",
    # Renderer
    "ChartRenderer",
    "contrast_color",
    "wedge_geometries",
]

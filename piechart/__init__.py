"""
Pie Chart View
==============

Pie chart rendering with in-wedge labels:
- Pure wedge geometry and label placement (``piechart.core``)
- Contrast-aware label colors
- PyQt6 widget and offscreen PNG export (``piechart.ui``)
"""

__version__ = "1.0.0"

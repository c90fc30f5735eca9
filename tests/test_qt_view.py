import pytest

pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import QLocale, Qt
from PyQt6.QtGui import QColor, QImage, QPainter

from piechart.core.models import RGB, DisplayOptions, FontSpec, ParagraphStyle, Point, Segment
from piechart.ui.painter import (
    QtCanvasSurface,
    QtNumberFormatter,
    QtTextMeasurer,
    qfont_from_spec,
    render_chart_image,
    to_qcolor,
)
from piechart.ui.pie_chart_view import PieChartView

RED = RGB(1.0, 0.0, 0.0)
BLUE = RGB(0.0, 0.0, 1.0)
NO_LABELS = DisplayOptions(show_labels=False)


def rgb_at(image: QImage, x: int, y: int):
    color = image.pixelColor(x, y)
    return color.red(), color.green(), color.blue(), color.alpha()


def test_first_wedge_sweeps_clockwise_from_twelve(qapp):
    image = render_chart_image(
        [Segment(RED, "A", 1), Segment(BLUE, "B", 3)], NO_LABELS, 200, 200
    )

    # A covers the top-right quadrant, B the other three.
    assert rgb_at(image, 150, 50) == (255, 0, 0, 255)
    assert rgb_at(image, 50, 50) == (0, 0, 255, 255)
    assert rgb_at(image, 50, 150) == (0, 0, 255, 255)
    assert rgb_at(image, 150, 150) == (0, 0, 255, 255)


def test_outside_circle_stays_transparent(qapp):
    image = render_chart_image([Segment(RED, "A", 1)], NO_LABELS, 200, 200)

    assert rgb_at(image, 2, 2)[3] == 0
    assert rgb_at(image, 100, 100) == (255, 0, 0, 255)


def test_empty_chart_is_fully_transparent(qapp):
    image = render_chart_image([], DisplayOptions(), 50, 50)

    assert all(
        image.pixelColor(x, y).alpha() == 0 for x in range(0, 50, 7) for y in range(0, 50, 7)
    )


def test_labels_draw_on_top_of_wedge(qapp):
    options = DisplayOptions(label_font=FontSpec(point_size=40, bold=True))
    image = render_chart_image([Segment(BLUE, "WWWW", 1)], options, 300, 300)

    # White glyphs somewhere around the label anchor at 6 o'clock.
    anchor_y = 150 + int(150 * 0.67)
    found_white = any(
        min(rgb_at(image, x, y)[:3]) > 200
        for x in range(100, 200)
        for y in range(anchor_y - 15, anchor_y + 15)
    )
    assert found_white


def test_measurer_returns_positive_size(qapp):
    width, height = QtTextMeasurer().measure(
        "Hello", FontSpec(point_size=12), ParagraphStyle(FontSpec(point_size=12))
    )
    wider, _ = QtTextMeasurer().measure(
        "Hello, world", FontSpec(point_size=12), ParagraphStyle(FontSpec(point_size=12))
    )

    assert width > 0 and height > 0
    assert wider > width


def test_qfont_from_spec(qapp):
    font = qfont_from_spec(FontSpec("Serif", 13.5, bold=True))

    assert font.family() == "Serif"
    assert font.pointSizeF() == 13.5
    assert font.bold()


def test_to_qcolor(qapp):
    assert to_qcolor(RED) == QColor.fromRgbF(1.0, 0.0, 0.0)
    assert to_qcolor("#00ff00") == QColor(0, 255, 0)
    assert to_qcolor("teal").isValid()
    assert to_qcolor("teal").alpha() == 255
    assert to_qcolor("definitely not a color").alpha() == 0


def test_counter_clockwise_arc_takes_the_long_way(qapp):
    image = QImage(200, 200, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    surface = QtCanvasSurface(painter)
    surface.set_fill_color(RED)
    surface.move_to(Point(100, 100))
    surface.add_arc(Point(100, 100), 100, -1.5707963267948966, 0.0, clockwise=False)
    surface.fill_path()
    painter.end()

    assert rgb_at(image, 150, 50)[3] == 0
    assert rgb_at(image, 50, 150) == (255, 0, 0, 255)


class TestQtNumberFormatter:
    def test_grouping_and_decimal_point_follow_locale(self, qapp):
        us = QtNumberFormatter(QLocale("en_US"))
        de = QtNumberFormatter(QLocale("de_DE"))

        assert us.format(1234.5) == "1,234.5"
        assert de.format(1234.5) == "1.234,5"
        assert de.format(1000.0) == "1.000"

    def test_trailing_zero_fraction_dropped(self, qapp):
        formatter = QtNumberFormatter(QLocale("en_US"))

        assert formatter.format(2.0) == "2"
        assert formatter.format(2.5) == "2.5"
        assert formatter.format(3.14159) == "3.1"
        assert formatter.format(0) == "0"

class TestPieChartView:
    def test_setters_replace_options(self, qapp):
        view = PieChartView()
        view.set_show_labels(False)
        view.set_show_value_in_label(True)
        view.set_label_font(FontSpec("Sans", 9))

        assert view.display_options == DisplayOptions(
            show_labels=False,
            show_value_in_label=True,
            label_font=FontSpec("Sans", 9),
        )

    def test_segments_are_copied(self, qapp):
        segments = [Segment(RED, "A", 1)]
        view = PieChartView()
        view.set_segments(segments)
        segments.append(Segment(BLUE, "B", 1))

        assert view.segments == [Segment(RED, "A", 1)]

    def test_render_to_image(self, qapp):
        view = PieChartView()
        view.set_display_options(NO_LABELS)
        view.set_segments([Segment(RED, "A", 1)])

        image = view.render_to_image(120, 80)

        assert (image.width(), image.height()) == (120, 80)
        assert rgb_at(image, 60, 40) == (255, 0, 0, 255)

    def test_paint_event_via_grab(self, qapp):
        view = PieChartView()
        view.set_display_options(NO_LABELS)
        view.set_segments([Segment(BLUE, "B", 1)])
        view.resize(100, 100)

        pixmap = view.grab()

        assert pixmap.toImage().pixelColor(50, 50) == QColor(0, 0, 255)

    def test_property_assignment_updates_options(self, qapp):
        view = PieChartView()
        view.show_labels = False
        view.show_value_in_label = True
        view.label_font = FontSpec("Sans", 9)
        view.segments = (Segment(RED, "A", 1),)

        assert view.show_labels is False
        assert view.show_value_in_label is True
        assert view.label_font == FontSpec("Sans", 9)
        assert view.segments == [Segment(RED, "A", 1)]
        assert view.display_options == DisplayOptions(
            show_labels=False,
            show_value_in_label=True,
            label_font=FontSpec("Sans", 9),
        )

    def test_every_setter_schedules_repaint(self, qapp, monkeypatch):
        view = PieChartView()
        updates = []
        monkeypatch.setattr(view, "update", lambda: updates.append(True))

        view.segments = [Segment(RED, "A", 1)]
        view.show_labels = False
        view.show_value_in_label = True
        view.label_font = FontSpec("Sans", 9)
        view.display_options = DisplayOptions()
        view.set_segments([])
        view.set_show_labels(True)
        view.set_show_value_in_label(False)
        view.set_label_font(FontSpec())
        view.set_display_options(NO_LABELS)

        assert len(updates) == 10

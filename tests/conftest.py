import logging
import os
from typing import List, Tuple

import pytest

# Qt tests never need a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from piechart.core.models import FontSpec, ParagraphStyle, Point, Rect, RGB
from piechart.core.services import CanvasSurface, TextDrawer, TextMeasurer
from piechart.utils.config import Config
from piechart.utils import config as config_module


class FakeMeasurer(TextMeasurer):
    """10 px per character, 20 px tall; records every call."""

    def __init__(self):
        self.calls: List[Tuple[str, FontSpec, ParagraphStyle]] = []

    def measure(self, text, font, paragraph_style):
        self.calls.append((text, font, paragraph_style))
        return 10.0 * len(text), 20.0


class RecordingSurface(CanvasSurface):
    def __init__(self):
        self.calls = []

    def set_fill_color(self, color):
        self.calls.append(("set_fill_color", color))

    def move_to(self, point: Point):
        self.calls.append(("move_to", point))

    def add_arc(self, center, radius, start_angle, end_angle, clockwise):
        self.calls.append(("add_arc", center, radius, start_angle, end_angle, clockwise))

    def fill_path(self):
        self.calls.append(("fill_path",))


class RecordingDrawer(TextDrawer):
    def __init__(self):
        self.calls = []

    def draw(self, text: str, rect: Rect, font: FontSpec, color: RGB, alignment: str):
        self.calls.append((text, rect, font, color, alignment))


@pytest.fixture
def measurer():
    return FakeMeasurer()


@pytest.fixture
def clean_config(tmp_path, monkeypatch):
    """Isolate the config singleton from real files and environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in Config.ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)

    Config._instance = None
    config_module._config = None
    yield tmp_path
    Config._instance = None
    config_module._config = None


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def piechart_logs(caplog):
    """caplog wired to the ``piechart`` logger, which may not propagate."""
    logger = logging.getLogger("piechart")
    propagate = logger.propagate
    logger.propagate = False
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="piechart")
    yield caplog
    logger.removeHandler(caplog.handler)
    logger.propagate = propagate

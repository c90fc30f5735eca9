"""
Application initialization.

Sets up the PyQt6 application object, default font and exception logging.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TYPE_CHECKING

from PyQt6.QtCore import QCoreApplication, Qt
from PyQt6.QtWidgets import QApplication

from .. import __version__
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Type

logger = get_logger("app")


class PieChartApp(QApplication):
    """
    Main application class.

    Handles application metadata, the default UI font and logging of
    uncaught exceptions.
    """

    APP_NAME = "Pie Chart View"
    ORG_NAME = "piechart"

    def __init__(self, argv: Optional[List[str]] = None) -> None:
        if argv is None:
            argv = sys.argv

        super().__init__(argv)

        self.setApplicationName(self.APP_NAME)
        self.setApplicationVersion(__version__)
        self.setOrganizationName(self.ORG_NAME)

        self._setup_exception_handling()

        logger.info(f"Application initialized: {self.APP_NAME} v{__version__}")

    def _setup_exception_handling(self) -> None:
        """Log uncaught exceptions before the default hook runs."""
        self._original_excepthook = sys.excepthook

        def exception_hook(
            exc_type: Type[BaseException],
            exc_value: BaseException,
            exc_tb: Optional[TracebackType],
        ) -> None:
            if issubclass(exc_type, KeyboardInterrupt):
                logger.info("Application interrupted by user")
                sys.exit(0)

            logger.critical(
                "Unhandled exception",
                exc_info=(exc_type, exc_value, exc_tb),
            )

            if self._original_excepthook is not None:
                self._original_excepthook(exc_type, exc_value, exc_tb)

        sys.excepthook = exception_hook

    @classmethod
    def get_instance(cls) -> Optional[PieChartApp]:
        instance = QCoreApplication.instance()
        if isinstance(instance, PieChartApp):
            return instance
        return None


def create_application(argv: Optional[List[str]] = None) -> PieChartApp:
    """
    Create the application, reusing a running instance if there is one.

    Args:
        argv: Command line arguments
    """
    existing = PieChartApp.get_instance()
    if existing is not None:
        return existing

    # Must be set before the QApplication is constructed
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    return PieChartApp(argv)

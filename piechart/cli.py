"""
Pie Chart View - command line interface

Draws a pie chart from named, weighted segments, either in a window or
straight to a PNG file.

Usage:
    # Show a window
    piechart --segment Rent=950 --segment Food=420 --segment Fun=130

    # Show values in the labels, with explicit colors
    piechart --segment "A=2.5:#ff0000" --segment "B=7.5:blue" --show-values

    # Export without opening a window
    python -m piechart --config chart.yaml --output chart.png --width 600 --height 600

Segments given on the command line replace those in the config file.
"""

from __future__ import annotations

import argparse
import math
import os
import signal
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, NoReturn, Optional

from .core.models import DisplayOptions


def check_dependencies() -> None:
    """
    Check that required dependencies are installed.

    Raises:
        SystemExit: If critical dependencies are missing.
    """
    missing_deps: List[str] = []

    try:
        import PyQt6  # noqa: F401
    except ImportError:
        missing_deps.append("PyQt6")

    try:
        import yaml  # noqa: F401
    except ImportError:
        missing_deps.append("PyYAML")

    if missing_deps:
        print("ERROR: Missing required dependencies:", file=sys.stderr)
        for dep in missing_deps:
            print(f"  - {dep}", file=sys.stderr)
        print(f"\nInstall with:\n  pip install {' '.join(missing_deps)}", file=sys.stderr)
        sys.exit(1)


def positive_float(text: str) -> float:
    """argparse type for sizes that must be finite and greater than zero."""
    try:
        number = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text!r}")
    return number


def positive_int(text: str) -> int:
    try:
        number = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text!r}")
    return number


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="piechart",
        description="Render a pie chart with labelled wedges",
        epilog="Examples:\n"
               "  piechart --segment A=1 --segment B=3\n"
               "  piechart --config chart.yaml --output chart.png\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--segment', '-s',
        action='append',
        default=[],
        metavar='NAME=VALUE[:COLOR]',
        help='Add a segment (repeatable); COLOR is hex or a color name'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='YAML configuration file'
    )

    parser.add_argument(
        '--no-labels',
        action='store_true',
        help='Draw wedges only'
    )

    parser.add_argument(
        '--show-values',
        action='store_true',
        help='Append the segment value to each label'
    )

    parser.add_argument(
        '--font-family',
        type=str,
        help='Label font family'
    )

    parser.add_argument(
        '--font-size',
        type=positive_float,
        help='Label font size in points'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Write a PNG to this path instead of opening a window'
    )

    parser.add_argument('--width', type=positive_int, help='Chart width in pixels')
    parser.add_argument('--height', type=positive_int, help='Chart height in pixels')

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config, INFO)'
    )

    return parser.parse_args(argv)


def apply_cli_overrides(
    options: DisplayOptions, args: argparse.Namespace
) -> DisplayOptions:
    """Layer label flags from the command line over the configured options."""
    if args.no_labels:
        options = replace(options, show_labels=False)
    if args.show_values:
        options = replace(options, show_value_in_label=True)

    font = options.label_font
    if args.font_family is not None:
        font = replace(font, family=args.font_family)
    if args.font_size is not None:
        font = replace(font, point_size=args.font_size)
    return replace(options, label_font=font)


def setup_signal_handlers(app=None) -> None:
    """Quit cleanly on SIGINT/SIGTERM."""
    def signal_handler(signum: int, frame: object) -> None:
        if app is not None:
            app.quit()
        else:
            sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Main application entry point."""
    check_dependencies()
    args = parse_arguments(argv)

    from .core.loader import parse_segment_args
    from .utils.config import init_config
    from .utils.exceptions import PieChartError, RenderExportError
    from .utils.logger import get_logger, setup_logging

    logger = get_logger("cli")

    try:
        config = init_config(Path(args.config) if args.config else None)
        setup_logging(
            level=args.log_level or config.get("logging.level", "INFO"),
            log_file=config.get("logging.file"),
            format_type=config.get("logging.format", "pretty"),
        )

        options = apply_cli_overrides(config.display_options(), args)

        segments = parse_segment_args(args.segment) if args.segment else config.segments()
        if not segments:
            logger.warning("No segments given; the chart will be empty")

        width, height = config.window_size()
        if args.width is not None:
            width = args.width
        if args.height is not None:
            height = args.height

        if args.output:
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

        from .ui.app import create_application
        from .ui.pie_chart_view import PieChartView

        app = create_application(sys.argv[:1])
        setup_signal_handlers(app)

        view = PieChartView()
        view.display_options = options
        view.segments = segments

        if args.output:
            image = view.render_to_image(width, height)
            if not image.save(args.output):
                raise RenderExportError(args.output, "QImage.save returned False")
            logger.info(
                f"Chart written to {args.output}",
                extra_data={"segments": len(segments), "size": f"{width}x{height}"},
            )
            sys.exit(0)

        view.setWindowTitle(config.get("window.title", "Pie Chart"))
        view.resize(width, height)
        view.show()
        sys.exit(app.exec())

    except PieChartError as e:
        logger.error(str(e), extra_data=e.details)
        sys.exit(1)

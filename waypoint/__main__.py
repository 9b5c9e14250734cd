import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from waypoint import __version__
from waypoint.config import get_config
from waypoint.ui import MainWindow
from waypoint.utils.logger import setup_logging

logger = logging.getLogger("waypoint")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="View a PDF and step through its annotations in reading order."
    )
    parser.add_argument("pdf", nargs="?", help="PDF file to open")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: $WAYPOINT_LOG_LEVEL or INFO)")
    parser.add_argument("--light", action="store_true", help="Use the light theme")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv=None):
    """Run the viewer, optionally opening the PDF given on the command line."""
    args = parse_args(argv)
    config = get_config()
    if args.light:
        config.dark_mode = False
    setup_logging(args.log_level or config.log_level)

    app = QApplication(sys.argv[:1])

    logger.info("Starting Waypoint PDF %s", __version__)
    window = MainWindow(args.pdf, config=config)
    window.showMaximized()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())

"""
Command-line entry point for the chat shell.

Usage:
    chat-shell                         # Run with default settings
    chat-shell --log-file shell.log    # Write debug output to a file
    chat-shell --title "My Chat"       # Custom terminal window title
"""

import argparse
import logging
import sys

from . import __version__
from .config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chat-shell",
        description="Three-column chat shell rendered in the terminal",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Append log records to this file (default: logging disabled)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level used with --log-file (default: WARNING)",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_CONFIG.title,
        help=f"Terminal window title (default: {DEFAULT_CONFIG.title!r})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(log_file=None, level="WARNING"):
    """Send log records to a file only; stdout belongs to the UI."""
    if log_file:
        handlers = [logging.FileHandler(log_file, mode="a")]
    else:
        handlers = [logging.NullHandler()]
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT,
                        handlers=handlers, force=True)


def main(argv=None) -> int:
    """Run the shell; return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    config = DEFAULT_CONFIG.with_overrides(title=args.title)
    try:
        from .controller import ShellController

        ShellController(config=config).run()
    except Exception as e:
        logger.exception("Chat shell failed")
        print(f"Error running program: {e}", file=sys.stderr)
        return 1
    return 0

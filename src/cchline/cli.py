"""Command-line entry point for cchline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .editor.theme import available_themes

LOG_FILE_NAME = "cchline.log"


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cchline",
        description="cchline: Claude Code status line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  cchline -c               Open configuration\n"
            "  cchline -v               Show version\n"
            "  cchline --preview        Print the status line with sample values\n"
        ),
    )
    parser.add_argument("-c", "--config", action="store_true", help="Open interactive configuration")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")
    parser.add_argument("-p", "--preview", action="store_true", help="Print the configured status line with sample values")
    parser.add_argument("--config-file", type=Path, help="Config file to edit (default: ~/.claude/cchline/config.yaml)")
    parser.add_argument("--tui-theme", choices=available_themes(), help="Editor color palette")
    parser.add_argument("--debug", action="store_true", help="Debug log in ~/.claude/cchline/cchline.log and a last-key readout in the editor")
    return parser


def configure_debug_logging(log_path: Path | None = None) -> logging.Handler:
    """Send debug logging to a file.

    The editor owns the terminal, so nothing is logged to stderr.
    """
    if log_path is None:
        from .config import get_config_dir

        log_path = get_config_dir() / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    return handler


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        configure_debug_logging()

    if args.version:
        print(f"cchline {__version__}")
        return 0

    if args.preview:
        from .config import load_config
        from .preview import generate_preview

        print(generate_preview(load_config(args.config_file)))
        return 0

    if args.config:
        from .editor import run_editor

        try:
            return run_editor(config_path=args.config_file, debug=args.debug, theme_name=args.tui_theme)
        except KeyboardInterrupt:
            print()
            return 130

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

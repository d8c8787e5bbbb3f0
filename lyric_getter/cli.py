from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .app import LyricGetterApp
from .config import DEFAULT_ARTIST_FILTER, DEFAULT_EXTENSION, OutputFormat, RunConfig
from .models import ConfigError, OutputError

EXIT_OK = 0
EXIT_FATAL_IO = 1
EXIT_USAGE = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        self.roots = [str(root) for root in roots if root]

    def _shorten(self, message: str) -> str:
        for root in self.roots:
            if not message:
                break
            message = message.replace(f"{root}/", "")
        return message

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return self._shorten(message)


class ColorFormatter(ShortPathFormatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lyric-getter",
        description="Scan audio files and collect lyrics when the artist matches a filter.",
    )
    parser.add_argument("--config", type=Path, help="YAML file with default values for the options below")
    parser.add_argument("--root", type=Path, help="Root directory to scan (default: current directory)")
    parser.add_argument(
        "--output",
        type=Path,
        help="File to append lyrics to; relative paths are resolved under the root (default: lyrics.txt)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Scan and match without writing to the output file",
    )
    parser.add_argument(
        "--artist-filter",
        help=f"Case-insensitive substring to look for in the artist name (default: {DEFAULT_ARTIST_FILTER})",
    )
    parser.add_argument(
        "--extensions",
        help=f"Comma-separated list of file extensions to scan (default: {DEFAULT_EXTENSION})",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output record format (default: text)",
    )
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        help="Limit recursion depth; 0 scans only files directly in the root",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        default=None,
        help="Descend into symbolically linked directories",
    )
    parser.add_argument("--summary-json", type=Path, help="Write a JSON run summary to this file")
    parser.add_argument(
        "--quiet",
        action="store_true",
        default=None,
        help="Only report errors on the console",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Python logging level (default: INFO)",
    )
    return parser


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return number


def configure_logging(config: RunConfig, log_level: str) -> None:
    level = logging.ERROR if config.quiet else getattr(logging, log_level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    roots = [config.root]
    stream_handler = logging.StreamHandler()
    if sys.stderr.isatty():
        stream_handler.setFormatter(ColorFormatter(LOG_FORMAT, roots))
    else:
        stream_handler.setFormatter(ShortPathFormatter(LOG_FORMAT, roots))
    root_logger.addHandler(stream_handler)

    logging.getLogger("mutagen").setLevel(logging.WARNING)


def run(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides: Dict[str, Any] = {
        "root": args.root,
        "output": args.output,
        "dry_run": args.dry_run,
        "artist_filter": args.artist_filter,
        "extensions": args.extensions,
        "output_format": args.output_format,
        "max_depth": args.max_depth,
        "follow_symlinks": args.follow_symlinks,
        "summary_json": args.summary_json,
        "quiet": args.quiet,
    }
    try:
        config = RunConfig.from_sources(overrides, config_path=args.config)
    except ConfigError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(config, args.log_level)
    app = LyricGetterApp.create(config)
    try:
        report = app.run()
        report.emit(quiet=config.quiet)
        if config.summary_json is not None:
            report.write_json(config.summary_json)
    except OutputError as exc:
        logger.error("%s", exc)
        return EXIT_FATAL_IO
    return EXIT_OK


def main() -> None:
    raise SystemExit(run())

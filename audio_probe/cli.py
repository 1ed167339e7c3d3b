from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .commands import info as cmd_info
from .commands import scan as cmd_scan
from .config import Settings, find_config
from .reader import MetadataReader
from .scanner import LibraryScanner

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        self.roots = [str(root) for root in roots if root]

    def _shorten(self, message: str) -> str:
        for root in self.roots:
            if not message:
                break
            message = message.replace(f"{root}/", "")
            message = message.replace(root, "")
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


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str, roots: list[Path]) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT, roots))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(ShortPathFormatter(LOG_FORMAT, roots))
    root_logger.addHandler(warn_buffer)

    logging.getLogger("mutagen").setLevel(logging.WARNING)
    return warn_buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read audio file metadata without decoding audio")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    info_parser = subparsers.add_parser("info", help="Show stream properties and tags of files")
    info_parser.add_argument("files", nargs="+", type=Path)
    info_parser.add_argument("--json", action="store_true", help="Emit one JSON record per file")

    scan_parser = subparsers.add_parser("scan", help="Summarize every audio file under the library roots")
    scan_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Directories or files to scan instead of library.roots",
    )
    scan_parser.add_argument("--json", action="store_true", help="Emit JSON Lines instead of text")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()

    display_roots = [root.resolve() for root in settings.library.roots]
    warn_buffer = configure_logging(args.log_level, display_roots)
    reader = MetadataReader.create(settings.reader)

    try:
        match args.command:
            case "info":
                failures = cmd_info.run(reader, args.files, json_output=args.json)
                return 1 if failures else 0
            case "scan":
                roots = args.paths or None
                if roots is None and not settings.library.roots:
                    parser.error("scan needs library.roots in config.yaml or explicit paths")
                report = cmd_scan.run(
                    reader,
                    LibraryScanner(settings.library),
                    roots,
                    json_output=args.json,
                )
                return 1 if report.failed and not report.read else 0
            case _:
                parser.error("Unknown command")
    finally:
        if warn_buffer.records and not getattr(args, "json", False):
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

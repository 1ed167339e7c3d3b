from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..models import AudioProbeError, TrackInfo
from ..reader import MetadataReader
from ..scanner import LibraryScanner
from .output import format_length

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanReport:
    read: int = 0
    failed: int = 0


def summary_line(info: TrackInfo) -> str:
    bitrate = f"{info.bitrate_kbps} kbps" if info.bitrate_kbps is not None else "? kbps"
    who = info.artist or "?"
    what = info.title or info.path.stem
    return f"{info.path} | {info.codec} | {format_length(info.length_seconds)} | {bitrate} | {who} - {what}"


def run(
    reader: MetadataReader,
    scanner: LibraryScanner,
    roots: Optional[Iterable[Path]] = None,
    *,
    json_output: bool = False,
) -> ScanReport:
    report = ScanReport()
    for path in scanner.iter_files(roots):
        try:
            info = reader.read(path)
        except (AudioProbeError, OSError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
            report.failed += 1
            continue
        report.read += 1
        if json_output:
            print(json.dumps(info.to_record(), ensure_ascii=False))
        else:
            print(summary_line(info))
    logger.info("Scan finished: %d read, %d failed", report.read, report.failed)
    return report

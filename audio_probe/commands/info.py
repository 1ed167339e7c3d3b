from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from ..models import AudioProbeError, TrackInfo
from ..reader import MetadataReader
from .output import field_line, format_length

logger = logging.getLogger(__name__)


def render(info: TrackInfo) -> list[str]:
    lines = [str(info.path)]
    lines.append(field_line("Codec", info.codec))
    lines.append(field_line("Length", format_length(info.length_seconds)))
    lines.append(field_line("Bitrate", info.bitrate_kbps, "kbps"))
    if info.sample_rate is not None:
        lines.append(field_line("Sample rate", info.sample_rate, "Hz"))
        lines.append(field_line("Channels", info.channels))
        lines.append(field_line("Bits per sample", info.bits_per_sample))
    for label, value in (
        ("Title", info.title),
        ("Artist", info.artist),
        ("Album", info.album),
        ("Album artist", info.album_artist),
        ("Composer", info.composer),
        ("Year", info.year),
        ("Genre", info.genre),
        ("Comment", info.comment),
    ):
        if value is not None:
            lines.append(field_line(label, value))
    if info.track_number is not None:
        track = f"{info.track_number}/{info.track_total}" if info.track_total else str(info.track_number)
        lines.append(field_line("Track", track))
    if info.disc_number is not None:
        disc = f"{info.disc_number}/{info.disc_total}" if info.disc_total else str(info.disc_number)
        lines.append(field_line("Disc", disc))
    for key, values in sorted(info.extra.items()):
        lines.append(field_line(key, ", ".join(str(v) for v in values)))
    return lines


def run(reader: MetadataReader, paths: Iterable[Path], *, json_output: bool = False) -> int:
    """Print metadata for each path; returns the number of files that failed."""
    failures = 0
    for path in paths:
        try:
            info = reader.read(path)
        except (AudioProbeError, OSError) as exc:
            logger.error("Could not read metadata from %s: %s", path, exc)
            failures += 1
            continue
        if json_output:
            print(json.dumps(info.to_record(), ensure_ascii=False))
        else:
            print("\n".join(render(info)))
    return failures

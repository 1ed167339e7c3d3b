"""Metadata section of a FLAC stream.

The section starts with the ``fLaC`` marker and is followed by metadata
blocks, each with a 4 byte header; the header of the final block carries
the last-block flag. Audio frames start right after that block.

See https://xiph.org/flac/format.html#metadata_block
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Callable, Dict, List, Mapping, Optional

from ..binary import read_exact, read_string, skip_exact
from ..models import StreamInvalid
from .blocks import HEADER_SIZE, BlockHeader, BlockType, decode_header
from .streaminfo import STREAMINFO_SIZE, StreamInfo, decode_stream_info
from .vorbis import decode_vorbis_comments

logger = logging.getLogger(__name__)

STREAM_MARKER = "fLaC"


@dataclass(frozen=True)
class FlacMetadata:
    stream_info: Optional[StreamInfo]
    metadata_bytes: int
    tags: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    vendor: Optional[str] = None

    @classmethod
    def from_path(cls, path: Path) -> "FlacMetadata":
        with Path(path).open("rb") as fh:
            return read_flac_metadata(fh)

    @property
    def audio_offset(self) -> int:
        """Byte offset of the first audio frame, relative to the marker."""
        return self.metadata_bytes

    @property
    def duration(self) -> Optional[float]:
        if self.stream_info is None:
            return None
        return self.stream_info.duration

    def bitrate(self, file_size: int) -> Optional[int]:
        """Average audio bitrate in kbit/s, or None when it cannot be known."""
        info = self.stream_info
        if info is None or self.duration is None:
            return None
        audio_bytes = file_size - self.metadata_bytes
        if audio_bytes <= 0:
            return None
        kbps = audio_bytes * 8 * info.sample_rate // (info.total_samples * 1000)
        if kbps <= 0:
            return None
        return kbps

    def tag(self, name: str) -> Optional[str]:
        values = self.tags.get(name.upper())
        if not values:
            return None
        return values[0]


class _MetadataBuilder:
    def __init__(self) -> None:
        self.stream_info: Optional[StreamInfo] = None
        self.metadata_bytes = len(STREAM_MARKER)
        self.tags: Dict[str, List[str]] = {}
        self.vendor: Optional[str] = None

    def build(self) -> FlacMetadata:
        frozen = {name: tuple(values) for name, values in self.tags.items()}
        return FlacMetadata(
            stream_info=self.stream_info,
            metadata_bytes=self.metadata_bytes,
            tags=MappingProxyType(frozen),
            vendor=self.vendor,
        )


BlockHandler = Callable[[BinaryIO, BlockHeader, _MetadataBuilder], None]


def _read_stream_info(source: BinaryIO, header: BlockHeader, builder: _MetadataBuilder) -> None:
    if header.length < STREAMINFO_SIZE:
        raise StreamInvalid(f"STREAMINFO block is {header.length} bytes, expected {STREAMINFO_SIZE}")
    if builder.stream_info is not None:
        logger.debug("Repeated STREAMINFO block replaces the previous one")
    builder.stream_info = decode_stream_info(source)
    skip_exact(source, header.length - STREAMINFO_SIZE)


def _read_vorbis_comments(source: BinaryIO, header: BlockHeader, builder: _MetadataBuilder) -> None:
    comments = decode_vorbis_comments(read_exact(source, header.length))
    builder.vendor = comments.vendor
    for name, values in comments.tags.items():
        builder.tags.setdefault(name, []).extend(values)


def _skip_block(source: BinaryIO, header: BlockHeader, builder: _MetadataBuilder) -> None:
    skip_exact(source, header.length)


def _reject_block(source: BinaryIO, header: BlockHeader, builder: _MetadataBuilder) -> None:
    raise StreamInvalid(f"reserved block type {header.code}")


# Application, seek table, cue sheet and picture contents are not decoded.
BLOCK_HANDLERS: Mapping[int, BlockHandler] = MappingProxyType(
    {
        BlockType.STREAMINFO: _read_stream_info,
        BlockType.PADDING: _skip_block,
        BlockType.APPLICATION: _skip_block,
        BlockType.SEEKTABLE: _skip_block,
        BlockType.VORBIS_COMMENT: _read_vorbis_comments,
        BlockType.CUESHEET: _skip_block,
        BlockType.PICTURE: _skip_block,
        BlockType.INVALID: _reject_block,
    }
)


def read_stream_marker(source: BinaryIO) -> None:
    marker = read_string(source, len(STREAM_MARKER))
    if marker != STREAM_MARKER:
        raise StreamInvalid(f"expected stream marker {STREAM_MARKER!r}, found {marker!r}")


def read_flac_metadata(source: BinaryIO) -> FlacMetadata:
    """Read the metadata section of a FLAC stream positioned at its marker.

    Reading stops right after the block flagged as last, so ``source`` is
    left at the first audio frame.
    """
    read_stream_marker(source)
    builder = _MetadataBuilder()
    while True:
        header = decode_header(source)
        builder.metadata_bytes += HEADER_SIZE + header.length
        handler = BLOCK_HANDLERS.get(header.code, _skip_block)
        logger.debug(
            "Block type=%d length=%d last=%s", header.code, header.length, header.is_last
        )
        handler(source, header, builder)
        if header.is_last:
            break

    if builder.stream_info is None:
        logger.warning("FLAC stream has no STREAMINFO block")
    return builder.build()

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .codecs import Codec


@dataclass(slots=True)
class TrackInfo:
    """Codec-independent view of a file's metadata."""

    path: Path
    codec: Codec = Codec.UNKNOWN
    title: Optional[str] = None
    album: Optional[str] = None
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    composer: Optional[str] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    track_number: Optional[int] = None
    track_total: Optional[int] = None
    disc_number: Optional[int] = None
    disc_total: Optional[int] = None
    length_seconds: Optional[float] = None
    comment: Optional[str] = None
    copyright: Optional[str] = None
    website: Optional[str] = None
    encoded_by: Optional[str] = None
    encoder_settings: Optional[str] = None
    bitrate_kbps: Optional[int] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    bits_per_sample: Optional[int] = None
    original_filename: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, object]:
        payload = {
            "path": str(self.path),
            "codec": str(self.codec),
            "title": self.title,
            "album": self.album,
            "artist": self.artist,
            "album_artist": self.album_artist,
            "composer": self.composer,
            "year": self.year,
            "genre": self.genre,
            "track_number": self.track_number,
            "track_total": self.track_total,
            "disc_number": self.disc_number,
            "disc_total": self.disc_total,
            "length_seconds": self.length_seconds,
            "comment": self.comment,
            "copyright": self.copyright,
            "website": self.website,
            "encoded_by": self.encoded_by,
            "encoder_settings": self.encoder_settings,
            "bitrate_kbps": self.bitrate_kbps,
            "sample_rate": self.sample_rate,
            "channels": self.channels,
            "bits_per_sample": self.bits_per_sample,
            "original_filename": self.original_filename,
            "extra": {key: self._serialize(value) for key, value in self.extra.items()},
        }
        return {key: self._serialize(value) for key, value in payload.items()}

    @staticmethod
    def _serialize(value: object) -> object:
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, Path):
            return str(value)
        if isinstance(value, (list, tuple)):
            return [TrackInfo._serialize(item) for item in value]
        if isinstance(value, dict):
            return {
                (
                    k.decode("utf-8", errors="replace")
                    if isinstance(k, bytes)
                    else str(k)
                ): TrackInfo._serialize(v)
                for k, v in value.items()
            }
        return value


class AudioProbeError(Exception):
    """Base class for every metadata read failure."""


class UnexpectedEnd(AudioProbeError):
    """Raised when the byte source runs out before a field is complete."""


class StreamInvalid(AudioProbeError):
    """Raised on a wrong stream marker or a reserved block type."""


class MalformedTagBlock(AudioProbeError):
    """Raised when a Vorbis comment block does not frame correctly."""


class MissingId3v1Tag(AudioProbeError):
    """Raised when a file carries no ID3v1 trailer."""


class UnsupportedCodec(AudioProbeError):
    """Raised when no reader is registered for the identified codec."""

    def __init__(self, codec: Codec, path: Path) -> None:
        super().__init__(f"reading metadata for {codec} is unsupported: {path}")
        self.codec = codec
        self.path = path


def parse_number_pair(value: object) -> tuple[Optional[int], Optional[int]]:
    """Split values like ``"3/12"`` into ``(3, 12)``."""
    if value is None:
        return None, None
    text = str(value).strip()
    if "/" in text:
        number, total = text.split("/", 1)
        return parse_int(number), parse_int(total)
    return parse_int(text), None


def parse_int(value: object) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    cleaned = str(value).strip()
    if cleaned.isdigit():
        return int(cleaned)
    return None


def parse_year(value: object) -> Optional[int]:
    if value is None:
        return None
    text = str(value).strip()
    if len(text) >= 4 and text[:4].isdigit():
        return int(text[:4])
    return None

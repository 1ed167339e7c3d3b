from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Dict, Mapping, Optional, Protocol

from . import meta_keys
from .codecs import Codec, guess_codec, identify
from .config import ReaderSettings
from .flac import FlacMetadata, read_flac_metadata
from .id3v1 import Id3v1Tag, read_id3v1
from .models import (
    AudioProbeError,
    MissingId3v1Tag,
    TrackInfo,
    UnsupportedCodec,
    parse_int,
    parse_number_pair,
    parse_year,
)

logger = logging.getLogger(__name__)

PROBE_SIZE = 16

ID3V2_HEADER_SIZE = 10
ID3V2_FOOTER_FLAG = 0x10


class CodecReader(Protocol):
    codec: Codec

    def probe(self, header: bytes) -> bool: ...

    def read(self, path: Path) -> TrackInfo: ...


def skip_id3v2(source: BinaryIO) -> int:
    """Skip any ID3v2 tags at the current position and return the bytes skipped.

    Some taggers put ID3v2 in front of the ``fLaC`` marker. ``source`` must
    be seekable; it is left at the first byte after the tags.
    """
    start = source.tell()
    while True:
        header = source.read(ID3V2_HEADER_SIZE)
        if len(header) < ID3V2_HEADER_SIZE or header[:3] != b"ID3":
            source.seek(-len(header), 1)
            break
        size = 0
        for byte in header[6:10]:
            size = (size << 7) | (byte & 0x7F)
        if header[5] & ID3V2_FOOTER_FLAG:
            size += ID3V2_HEADER_SIZE
        source.seek(size, 1)
    return source.tell() - start


class FlacReader:
    codec = Codec.FLAC

    def probe(self, header: bytes) -> bool:
        return header.startswith(b"fLaC")

    def read(self, path: Path) -> TrackInfo:
        path = Path(path)
        with path.open("rb") as fh:
            offset = skip_id3v2(fh)
            if offset:
                logger.debug("Skipped %d bytes of ID3v2 in front of %s", offset, path)
            meta = read_flac_metadata(fh)
        file_size = path.stat().st_size - offset
        return self._track_info(path, meta, file_size)

    def _track_info(self, path: Path, meta: FlacMetadata, file_size: int) -> TrackInfo:
        def first(keys: tuple[str, ...]) -> Optional[str]:
            for key in keys:
                value = meta.tag(key)
                if value is not None:
                    return value
            return None

        track_number, track_total = parse_number_pair(first(meta_keys.TRACKNUMBER))
        disc_number, disc_total = parse_number_pair(first(meta_keys.DISCNUMBER))
        info = meta.stream_info
        extra: Dict[str, object] = {
            name: list(values) for name, values in meta.tags.items() if name not in meta_keys.MAPPED
        }
        return TrackInfo(
            path=path,
            codec=self.codec,
            title=first(meta_keys.TITLE),
            album=first(meta_keys.ALBUM),
            artist=first(meta_keys.ARTIST),
            album_artist=first(meta_keys.ALBUM_ARTIST),
            composer=first(meta_keys.COMPOSER),
            year=parse_year(first(meta_keys.DATE)),
            genre=first(meta_keys.GENRE),
            track_number=track_number,
            track_total=track_total or parse_int(first(meta_keys.TRACK_TOTAL)),
            disc_number=disc_number,
            disc_total=disc_total or parse_int(first(meta_keys.DISC_TOTAL)),
            length_seconds=meta.duration,
            comment=first(meta_keys.COMMENT),
            copyright=first(meta_keys.COPYRIGHT),
            website=first(meta_keys.WEBSITE),
            encoded_by=first(meta_keys.ENCODED_BY),
            encoder_settings=first(meta_keys.ENCODER_SETTINGS),
            bitrate_kbps=meta.bitrate(file_size),
            sample_rate=info.sample_rate if info else None,
            channels=info.channels if info else None,
            bits_per_sample=info.bits_per_sample if info else None,
            original_filename=first(meta_keys.ORIGINAL_FILENAME),
            extra=extra,
        )


class Id3v1Reader:
    """Reads only the fixed trailer tag; no stream properties are available."""

    def __init__(self, codec: Codec = Codec.MP3) -> None:
        self.codec = codec

    def probe(self, header: bytes) -> bool:
        if header.startswith(b"ID3"):
            return True
        # MPEG audio frame sync
        return len(header) >= 2 and header[0] == 0xFF and header[1] & 0xE0 == 0xE0

    def read(self, path: Path) -> TrackInfo:
        path = Path(path)
        with path.open("rb") as fh:
            tag = read_id3v1(fh)
        return self.track_info(path, tag)

    def track_info(self, path: Path, tag: Id3v1Tag) -> TrackInfo:
        return TrackInfo(
            path=path,
            codec=self.codec,
            title=tag.title or None,
            album=tag.album or None,
            artist=tag.artist or None,
            year=tag.year,
            genre=tag.genre,
            track_number=tag.track,
            comment=tag.comment or None,
        )


def default_readers() -> Dict[Codec, CodecReader]:
    return {
        Codec.FLAC: FlacReader(),
        Codec.MP3: Id3v1Reader(),
    }


class MetadataReader:
    """Reads metadata through an explicit table of codec readers.

    The table is copied on construction and cannot be changed afterwards.
    """

    def __init__(self, readers: Mapping[Codec, CodecReader], *, id3v1_fallback: bool = True) -> None:
        self.readers: Mapping[Codec, CodecReader] = MappingProxyType(dict(readers))
        self.id3v1_fallback = id3v1_fallback

    @classmethod
    def create(cls, settings: Optional[ReaderSettings] = None) -> "MetadataReader":
        settings = settings or ReaderSettings()
        disabled = set(settings.disabled_codecs)
        readers = {
            codec: reader
            for codec, reader in default_readers().items()
            if codec not in disabled
        }
        return cls(readers, id3v1_fallback=settings.id3v1_fallback)

    def identify(self, path: Path) -> Codec:
        codec = identify(path)
        if codec is not Codec.UNKNOWN:
            return codec
        with Path(path).open("rb") as fh:
            header = fh.read(PROBE_SIZE)
        for reader in self.readers.values():
            if reader.probe(header):
                logger.debug("%s claimed by %s signature", path, reader.codec)
                return reader.codec
        return guess_codec(path)

    def read(self, path: Path) -> TrackInfo:
        path = Path(path)
        codec = self.identify(path)
        reader = self.readers.get(codec)
        if reader is None:
            raise UnsupportedCodec(codec, path)
        try:
            return reader.read(path)
        except AudioProbeError as exc:
            if not self.id3v1_fallback or isinstance(reader, Id3v1Reader):
                raise
            fallback = self._read_id3v1(path, codec)
            if fallback is None:
                raise
            logger.warning("Could not read %s metadata from %s (%s); using ID3v1 tag", codec, path, exc)
            return fallback

    def _read_id3v1(self, path: Path, codec: Codec) -> Optional[TrackInfo]:
        fallback = Id3v1Reader(codec)
        try:
            return fallback.read(path)
        except MissingId3v1Tag:
            return None
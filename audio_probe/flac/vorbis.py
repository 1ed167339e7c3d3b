"""Vorbis comment block (FLAC metadata block type 4).

Unlike the rest of the FLAC metadata the lengths here are little-endian::

    <32> vendor length, vendor string
    <32> number of comments
         { <32> length, "NAME=value" } * number of comments

Field names are case-insensitive ASCII; values are UTF-8.
FLAC omits the framing bit that Ogg Vorbis puts at the end.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Dict, List

from ..binary import read_exact, read_uint32_le
from ..models import MalformedTagBlock, UnexpectedEnd

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VorbisComments:
    vendor: str
    tags: Dict[str, List[str]]


def decode_vorbis_comments(payload: bytes) -> VorbisComments:
    source = io.BytesIO(payload)
    try:
        vendor = _read_vector(source).decode("utf-8", errors="replace")
        count = read_uint32_le(source)
        tags: Dict[str, List[str]] = {}
        for index in range(count):
            raw = _read_vector(source)
            name, sep, value = raw.partition(b"=")
            if not sep or not name:
                logger.debug("Skipping comment %d without a field name", index)
                continue
            key = name.decode("ascii", errors="replace").upper()
            tags.setdefault(key, []).append(value.decode("utf-8", errors="replace"))
    except UnexpectedEnd as exc:
        raise MalformedTagBlock(f"comment vector runs past the end of the block: {exc}") from exc
    leftover = len(payload) - source.tell()
    if leftover:
        raise MalformedTagBlock(f"{leftover} unused bytes after the last comment")
    return VorbisComments(vendor=vendor, tags=tags)


def _read_vector(source: io.BytesIO) -> bytes:
    length = read_uint32_le(source)
    return read_exact(source, length)
"""Builders for synthetic FLAC streams used across the tests."""

from __future__ import annotations

from dataclasses import replace

from audio_probe.flac.blocks import BlockHeader, BlockType
from audio_probe.flac.streaminfo import StreamInfo

MD5 = bytes.fromhex("ce88fffba66d962c99bdd809c73d4d18")

# 4096/4096 block sizes, 339/9008 frame sizes, 44100 Hz, 2 channels,
# 16 bits, 16536 samples; channel and bit depth stored minus one.
STREAMINFO_PAYLOAD = bytes.fromhex("10001000" "000153002330" "0ac442f000004098") + MD5

STREAM_INFO = StreamInfo(
    min_block_size=4096,
    max_block_size=4096,
    min_frame_size=339,
    max_frame_size=9008,
    sample_rate=44100,
    channels=2,
    bits_per_sample=16,
    total_samples=16536,
    md5_signature=MD5,
)

AUDIO = b"\xff\xf8" + b"\x00" * 62


def stream_info(**changes) -> StreamInfo:
    return replace(STREAM_INFO, **changes)


def block(code: int, payload: bytes = b"", *, last: bool = False, length: int | None = None) -> bytes:
    size = len(payload) if length is None else length
    return BlockHeader(is_last=last, code=int(code), length=size).to_bytes() + payload


def streaminfo_block(info: StreamInfo = STREAM_INFO, *, last: bool = False) -> bytes:
    return block(BlockType.STREAMINFO, info.to_bytes(), last=last)


def vorbis_payload(vendor: str, comments: list[tuple[str, str]]) -> bytes:
    parts = [_vector(vendor.encode("utf-8")), len(comments).to_bytes(4, "little")]
    for name, value in comments:
        parts.append(_vector(f"{name}={value}".encode("utf-8")))
    return b"".join(parts)


def flac_stream(*blocks: bytes, audio: bytes = AUDIO) -> bytes:
    return b"fLaC" + b"".join(blocks) + audio


def id3v1_tag(
    title: str = "",
    artist: str = "",
    album: str = "",
    year: str = "",
    comment: str = "",
    track: int | None = None,
    genre: int = 255,
) -> bytes:
    def pad(text: str, size: int) -> bytes:
        return text.encode("latin-1")[:size].ljust(size, b"\x00")

    if track is None:
        comment_field = pad(comment, 30)
    else:
        comment_field = pad(comment, 28) + b"\x00" + bytes([track])
    return (
        b"TAG"
        + pad(title, 30)
        + pad(artist, 30)
        + pad(album, 30)
        + pad(year, 4)
        + comment_field
        + bytes([genre])
    )


def _vector(data: bytes) -> bytes:
    return len(data).to_bytes(4, "little") + data

from __future__ import annotations

from typing import BinaryIO

from .models import UnexpectedEnd

SKIP_CHUNK_SIZE = 64 * 1024


def read_exact(source: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes or raise UnexpectedEnd.

    Short reads from the underlying source are retried until it reports
    end of input, so pipes and sockets behave like regular files.
    """
    if size < 0:
        raise ValueError(f"cannot read a negative number of bytes: {size}")
    if size == 0:
        return b""
    chunks: list[bytes] = []
    remaining = size
    while remaining:
        try:
            chunk = source.read(remaining)
        except TimeoutError as exc:
            raise UnexpectedEnd(f"source timed out with {remaining} of {size} bytes unread") from exc
        if not chunk:
            raise UnexpectedEnd(f"expected {size} bytes, source ended after {size - remaining}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_string(source: BinaryIO, size: int) -> str:
    return read_exact(source, size).decode("latin-1")


def skip_exact(source: BinaryIO, size: int) -> None:
    """Consume ``size`` bytes without keeping them."""
    if size < 0:
        raise ValueError(f"cannot skip a negative number of bytes: {size}")
    remaining = size
    while remaining:
        step = min(remaining, SKIP_CHUNK_SIZE)
        read_exact(source, step)
        remaining -= step


def read_uint(source: BinaryIO, width: int) -> int:
    """Read a big-endian unsigned integer of ``width`` bytes."""
    return int.from_bytes(read_exact(source, width), "big")


def read_uint16(source: BinaryIO) -> int:
    return read_uint(source, 2)


def read_uint24(source: BinaryIO) -> int:
    return read_uint(source, 3)


def read_uint32(source: BinaryIO) -> int:
    return read_uint(source, 4)


def read_uint48(source: BinaryIO) -> int:
    return read_uint(source, 6)


def read_uint64(source: BinaryIO) -> int:
    return read_uint(source, 8)


def read_uint32_le(source: BinaryIO) -> int:
    return int.from_bytes(read_exact(source, 4), "little")

import io
import unittest

from audio_probe.binary import (
    read_exact,
    read_string,
    read_uint16,
    read_uint24,
    read_uint32_le,
    read_uint64,
    skip_exact,
)
from audio_probe.models import UnexpectedEnd


class TrickleSource:
    """Returns at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes) -> None:
        self._data = io.BytesIO(data)

    def read(self, size: int = -1) -> bytes:
        return self._data.read(min(size, 1))


class TimeoutSource:
    def read(self, size: int = -1) -> bytes:
        raise TimeoutError("deadline exceeded")


class TestReadExact(unittest.TestCase):
    def test_reads_requested_bytes_and_advances(self) -> None:
        source = io.BytesIO(b"abcdef")
        self.assertEqual(read_exact(source, 4), b"abcd")
        self.assertEqual(source.tell(), 4)

    def test_short_source_raises_unexpected_end(self) -> None:
        with self.assertRaises(UnexpectedEnd):
            read_exact(io.BytesIO(b"abc"), 4)

    def test_zero_bytes_reads_nothing(self) -> None:
        source = io.BytesIO(b"abc")
        self.assertEqual(read_exact(source, 0), b"")
        self.assertEqual(source.tell(), 0)

    def test_retries_short_reads(self) -> None:
        self.assertEqual(read_exact(TrickleSource(b"fLaC!"), 4), b"fLaC")

    def test_timeout_is_reported_as_unexpected_end(self) -> None:
        with self.assertRaises(UnexpectedEnd):
            read_exact(TimeoutSource(), 4)

    def test_negative_size_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            read_exact(io.BytesIO(b"abc"), -1)

    def test_read_string(self) -> None:
        self.assertEqual(read_string(io.BytesIO(b"fLaC"), 4), "fLaC")


class TestSkipExact(unittest.TestCase):
    def test_skips_across_chunks(self) -> None:
        data = bytes(200_000) + b"tail"
        source = io.BytesIO(data)
        skip_exact(source, 200_000)
        self.assertEqual(source.read(), b"tail")

    def test_short_skip_raises(self) -> None:
        with self.assertRaises(UnexpectedEnd):
            skip_exact(io.BytesIO(b"abc"), 10)


class TestFixedWidthIntegers(unittest.TestCase):
    def test_uint16(self) -> None:
        cases = [
            (b"\xff\x00", 0xFF00),
            (b"\x00\xff", 0x00FF),
        ]
        for raw, expected in cases:
            self.assertEqual(read_uint16(io.BytesIO(raw)), expected)
        for raw in (b"", b"\xff"):
            with self.assertRaises(UnexpectedEnd):
                read_uint16(io.BytesIO(raw))

    def test_uint24(self) -> None:
        cases = [
            (b"\xff\x00\x00", 0xFF0000),
            (b"\x00\xff\x00", 0x00FF00),
            (b"\x00\x00\xff", 0x0000FF),
        ]
        for raw, expected in cases:
            self.assertEqual(read_uint24(io.BytesIO(raw)), expected)
        for raw in (b"", b"\x00"):
            with self.assertRaises(UnexpectedEnd):
                read_uint24(io.BytesIO(raw))

    def test_uint64_is_big_endian(self) -> None:
        self.assertEqual(read_uint64(io.BytesIO(bytes.fromhex("0ac442f000004098"))), 0x0AC442F000004098)

    def test_uint32_le(self) -> None:
        self.assertEqual(read_uint32_le(io.BytesIO(b"\x01\x00\x00\x00")), 1)


if __name__ == "__main__":
    unittest.main()

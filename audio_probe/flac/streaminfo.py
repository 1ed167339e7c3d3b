"""STREAMINFO, the mandatory first metadata block of a FLAC stream.

Layout of the 34 byte payload (big-endian)::

    <16> minimum block size (samples)
    <16> maximum block size (samples)
    <24> minimum frame size (bytes, 0 = unknown)
    <24> maximum frame size (bytes, 0 = unknown)
    <20> sample rate (Hz)
    <3>  number of channels - 1
    <5>  bits per sample - 1
    <36> total samples (0 = unknown)
    <128> MD5 signature of the unencoded audio

See https://xiph.org/flac/format.html#metadata_block_streaminfo
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional

from ..binary import read_exact, read_uint32, read_uint48, read_uint64

STREAMINFO_SIZE = 34
MD5_SIZE = 16

MAX_SAMPLE_RATE = 655350


@dataclass(frozen=True, slots=True)
class StreamInfo:
    min_block_size: int
    max_block_size: int
    min_frame_size: int
    max_frame_size: int
    sample_rate: int
    channels: int
    bits_per_sample: int
    total_samples: int
    md5_signature: bytes

    @property
    def fixed_block_size(self) -> bool:
        return self.min_block_size == self.max_block_size

    @property
    def duration(self) -> Optional[float]:
        """Length in seconds, or None when the sample rate or sample count is unknown."""
        if not self.sample_rate or not self.total_samples:
            return None
        return self.total_samples / self.sample_rate

    def validate(self) -> None:
        """Raise ValueError if a field is outside the range the format allows."""
        checks = (
            ("min_block_size", self.min_block_size, 16, 0xFFFF),
            ("max_block_size", self.max_block_size, 16, 0xFFFF),
            ("sample_rate", self.sample_rate, 1, MAX_SAMPLE_RATE),
            ("channels", self.channels, 1, 8),
            ("bits_per_sample", self.bits_per_sample, 4, 32),
        )
        for name, value, low, high in checks:
            if not low <= value <= high:
                raise ValueError(f"{name}={value} outside {low}..{high}")
        if self.min_block_size > self.max_block_size:
            raise ValueError(
                f"min_block_size={self.min_block_size} exceeds max_block_size={self.max_block_size}"
            )
        if len(self.md5_signature) != MD5_SIZE:
            raise ValueError(f"md5_signature must be {MD5_SIZE} bytes")

    def to_bytes(self) -> bytes:
        """Pack the block back into its 34 byte wire form."""
        word1 = (self.min_block_size & 0xFFFF) << 16 | (self.max_block_size & 0xFFFF)
        word2 = (self.min_frame_size & 0xFFFFFF) << 24 | (self.max_frame_size & 0xFFFFFF)
        word3 = (
            (self.sample_rate & 0xFFFFF) << 44
            | ((self.channels - 1) & 0x07) << 41
            | ((self.bits_per_sample - 1) & 0x1F) << 36
            | (self.total_samples & 0xFFFFFFFFF)
        )
        return (
            word1.to_bytes(4, "big")
            + word2.to_bytes(6, "big")
            + word3.to_bytes(8, "big")
            + bytes(self.md5_signature)
        )


def decode_stream_info(source: BinaryIO) -> StreamInfo:
    """Decode a STREAMINFO payload. No range checks happen here; see StreamInfo.validate."""
    block_sizes = read_uint32(source)
    frame_sizes = read_uint48(source)
    packed = read_uint64(source)
    md5_signature = read_exact(source, MD5_SIZE)

    return StreamInfo(
        min_block_size=block_sizes >> 16,
        max_block_size=block_sizes & 0xFFFF,
        min_frame_size=frame_sizes >> 24,
        max_frame_size=frame_sizes & 0xFFFFFF,
        sample_rate=packed >> 44,
        channels=((packed >> 41) & 0x07) + 1,
        bits_per_sample=((packed >> 36) & 0x1F) + 1,
        total_samples=packed & 0xFFFFFFFFF,
        md5_signature=md5_signature,
    )

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Optional

from ..binary import read_uint32

HEADER_SIZE = 4

_LAST_FLAG = 0x80000000
_TYPE_SHIFT = 24
_TYPE_MASK = 0x7F
_LENGTH_MASK = 0x00FFFFFF


class BlockType(IntEnum):
    STREAMINFO = 0
    PADDING = 1
    APPLICATION = 2
    SEEKTABLE = 3
    VORBIS_COMMENT = 4
    CUESHEET = 5
    PICTURE = 6

    INVALID = 127


_KNOWN_CODES = frozenset(member.value for member in BlockType)


@dataclass(frozen=True, slots=True)
class BlockHeader:
    """The 4-byte header in front of every metadata block.

    Bit layout, most significant first: 1 bit last-block flag, 7 bits
    block type, 24 bits payload length.
    """

    is_last: bool
    code: int
    length: int

    @classmethod
    def from_int(cls, value: int) -> "BlockHeader":
        return cls(
            is_last=bool(value & _LAST_FLAG),
            code=(value >> _TYPE_SHIFT) & _TYPE_MASK,
            length=value & _LENGTH_MASK,
        )

    def to_int(self) -> int:
        value = (self.code & _TYPE_MASK) << _TYPE_SHIFT | (self.length & _LENGTH_MASK)
        if self.is_last:
            value |= _LAST_FLAG
        return value

    def to_bytes(self) -> bytes:
        return self.to_int().to_bytes(HEADER_SIZE, "big")

    @property
    def block_type(self) -> Optional[BlockType]:
        """The matching BlockType, or None for codes the format has not defined yet."""
        if self.code in _KNOWN_CODES:
            return BlockType(self.code)
        return None

    @property
    def is_valid(self) -> bool:
        return self.code != BlockType.INVALID


def decode_header(source: BinaryIO) -> BlockHeader:
    return BlockHeader.from_int(read_uint32(source))

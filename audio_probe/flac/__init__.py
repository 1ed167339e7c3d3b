"FLAC metadata reading."

from .blocks import BlockHeader, BlockType, decode_header
from .metadata import FlacMetadata, read_flac_metadata, read_stream_marker
from .streaminfo import StreamInfo, decode_stream_info

__all__ = [
    "BlockHeader",
    "BlockType",
    "FlacMetadata",
    "StreamInfo",
    "decode_header",
    "decode_stream_info",
    "read_flac_metadata",
    "read_stream_marker",
]

import tempfile
import unittest
from pathlib import Path

from flac_fixtures import block, flac_stream, streaminfo_block, vorbis_payload

from audio_probe.codecs import Codec, guess_codec, identify
from audio_probe.flac import BlockType


class TestGuessCodec(unittest.TestCase):
    def test_suffixes(self) -> None:
        self.assertEqual(guess_codec(Path("a.flac")), Codec.FLAC)
        self.assertEqual(guess_codec(Path("a.MP3")), Codec.MP3)
        self.assertEqual(guess_codec(Path("book.m4b")), Codec.M4B)
        self.assertEqual(guess_codec(Path("a.opus")), Codec.OPUS)
        self.assertEqual(guess_codec(Path("notes.txt")), Codec.UNKNOWN)

    def test_string_form(self) -> None:
        self.assertEqual(str(Codec.FLAC), "FLAC")
        self.assertEqual(str(Codec.UNKNOWN), "?")


class TestIdentify(unittest.TestCase):
    def test_identifies_flac(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "track.flac"
            path.write_bytes(
                flac_stream(
                    streaminfo_block(),
                    block(BlockType.VORBIS_COMMENT, vorbis_payload("vendor", [("TITLE", "x")]), last=True),
                )
            )
            self.assertEqual(identify(path), Codec.FLAC)

    def test_unrecognized_content_is_unknown(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "blob.bin"
            path.write_bytes(b"not audio at all" * 8)
            self.assertEqual(identify(path), Codec.UNKNOWN)


if __name__ == "__main__":
    unittest.main()

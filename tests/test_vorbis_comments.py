import unittest

from flac_fixtures import vorbis_payload

from audio_probe.flac.vorbis import decode_vorbis_comments
from audio_probe.models import MalformedTagBlock


class TestDecodeVorbisComments(unittest.TestCase):
    def test_vendor_and_fields(self) -> None:
        payload = vorbis_payload(
            "Xiph.Org libVorbis I 20020717",
            [("ARTIST", "me"), ("TITLE", "the sound of Vorbis")],
        )
        comments = decode_vorbis_comments(payload)
        self.assertEqual(comments.vendor, "Xiph.Org libVorbis I 20020717")
        self.assertEqual(comments.tags, {"ARTIST": ["me"], "TITLE": ["the sound of Vorbis"]})

    def test_field_names_are_case_insensitive(self) -> None:
        payload = vorbis_payload("", [("Artist", "a"), ("ARTIST", "b"), ("artist", "c")])
        self.assertEqual(decode_vorbis_comments(payload).tags, {"ARTIST": ["a", "b", "c"]})

    def test_value_may_contain_equals_and_utf8(self) -> None:
        payload = vorbis_payload("", [("COMMENT", "a=b"), ("TITLE", "Étude – Op. 10")])
        tags = decode_vorbis_comments(payload).tags
        self.assertEqual(tags["COMMENT"], ["a=b"])
        self.assertEqual(tags["TITLE"], ["Étude – Op. 10"])

    def test_empty_block_body(self) -> None:
        comments = decode_vorbis_comments(vorbis_payload("vendor", []))
        self.assertEqual(comments.tags, {})

    def test_comment_without_separator_is_skipped(self) -> None:
        payload = (
            vorbis_payload("", [])[:-4]
            + (2).to_bytes(4, "little")
            + (6).to_bytes(4, "little")
            + b"broken"
            + (5).to_bytes(4, "little")
            + b"A=one"
        )
        self.assertEqual(decode_vorbis_comments(payload).tags, {"A": ["one"]})

    def test_truncated_vector(self) -> None:
        payload = vorbis_payload("vendor", [("TITLE", "x")])
        with self.assertRaises(MalformedTagBlock):
            decode_vorbis_comments(payload[:-2])

    def test_oversized_length_prefix(self) -> None:
        payload = (0xFFFFFFFF).to_bytes(4, "little") + b"vendor"
        with self.assertRaises(MalformedTagBlock):
            decode_vorbis_comments(payload)

    def test_trailing_bytes(self) -> None:
        payload = vorbis_payload("vendor", [("TITLE", "x")]) + b"\x01"
        with self.assertRaises(MalformedTagBlock):
            decode_vorbis_comments(payload)


if __name__ == "__main__":
    unittest.main()

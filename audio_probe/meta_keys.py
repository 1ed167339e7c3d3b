from __future__ import annotations

# Vorbis comment field names read into TrackInfo, in lookup order.
# Anything not listed here ends up in TrackInfo.extra.

TITLE = ("TITLE",)
ALBUM = ("ALBUM",)
ARTIST = ("ARTIST",)
ALBUM_ARTIST = ("ALBUMARTIST", "ALBUM ARTIST", "ALBUM_ARTIST")
COMPOSER = ("COMPOSER",)
DATE = ("DATE", "YEAR")
GENRE = ("GENRE",)
TRACKNUMBER = ("TRACKNUMBER",)
TRACK_TOTAL = ("TRACKTOTAL", "TOTALTRACKS")
DISCNUMBER = ("DISCNUMBER",)
DISC_TOTAL = ("DISCTOTAL", "TOTALDISCS")
COMMENT = ("COMMENT", "DESCRIPTION")
COPYRIGHT = ("COPYRIGHT",)
WEBSITE = ("CONTACT", "WEBSITE")
ENCODED_BY = ("ENCODED-BY", "ENCODEDBY")
ENCODER_SETTINGS = ("ENCODER", "ENCODING")
ORIGINAL_FILENAME = ("ORIGINALFILENAME",)

MAPPED = frozenset(
    TITLE
    + ALBUM
    + ARTIST
    + ALBUM_ARTIST
    + COMPOSER
    + DATE
    + GENRE
    + TRACKNUMBER
    + TRACK_TOTAL
    + DISCNUMBER
    + DISC_TOTAL
    + COMMENT
    + COPYRIGHT
    + WEBSITE
    + ENCODED_BY
    + ENCODER_SETTINGS
    + ORIGINAL_FILENAME
)

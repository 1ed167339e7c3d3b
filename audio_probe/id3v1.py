from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO, Optional

from .binary import read_exact
from .models import MissingId3v1Tag, parse_year

TAG_SIZE = 128
TAG_MARKER = b"TAG"

GENRES = (
    "Blues", "Classic Rock", "Country", "Dance", "Disco", "Funk", "Grunge",
    "Hip-Hop", "Jazz", "Metal", "New Age", "Oldies", "Other", "Pop", "R&B",
    "Rap", "Reggae", "Rock", "Techno", "Industrial", "Alternative", "Ska",
    "Death Metal", "Pranks", "Soundtrack", "Euro-Techno", "Ambient",
    "Trip-Hop", "Vocal", "Jazz+Funk", "Fusion", "Trance", "Classical",
    "Instrumental", "Acid", "House", "Game", "Sound Clip", "Gospel",
    "Noise", "AlternRock", "Bass", "Soul", "Punk", "Space", "Meditative",
    "Instrumental Pop", "Instrumental Rock", "Ethnic", "Gothic",
    "Darkwave", "Techno-Industrial", "Electronic", "Pop-Folk",
    "Eurodance", "Dream", "Southern Rock", "Comedy", "Cult", "Gangsta",
    "Top 40", "Christian Rap", "Pop/Funk", "Jungle", "Native American",
    "Cabaret", "New Wave", "Psychadelic", "Rave", "Showtunes", "Trailer",
    "Lo-Fi", "Tribal", "Acid Punk", "Acid Jazz", "Polka", "Retro",
    "Musical", "Rock & Roll", "Hard Rock", "Folk", "Folk-Rock",
    "National Folk", "Swing", "Fast Fusion", "Bebob", "Latin", "Revival",
    "Celtic", "Bluegrass", "Avantgarde", "Gothic Rock", "Progressive Rock",
    "Psychedelic Rock", "Symphonic Rock", "Slow Rock", "Big Band",
    "Chorus", "Easy Listening", "Acoustic", "Humour", "Speech", "Chanson",
    "Opera", "Chamber Music", "Sonata", "Symphony", "Booty Bass", "Primus",
    "Porn Groove", "Satire", "Slow Jam", "Club", "Tango", "Samba",
    "Folklore", "Ballad", "Power Ballad", "Rhythmic Soul", "Freestyle",
    "Duet", "Punk Rock", "Drum Solo", "Acapella", "Euro-House", "Dance Hall",
)


@dataclass(frozen=True, slots=True)
class Id3v1Tag:
    title: str
    artist: str
    album: str
    year: Optional[int]
    comment: str
    track: Optional[int]
    genre: Optional[str]


def read_id3v1(source: BinaryIO) -> Id3v1Tag:
    """Read the 128 byte ID3v1 tag at the end of a seekable source.

    Layout: "TAG", title[30], artist[30], album[30], year[4], comment[30],
    genre[1]. ID3v1.1 stores the track number in the last comment byte when
    the one before it is zero.
    """
    size = source.seek(0, io.SEEK_END)
    if size < TAG_SIZE:
        raise MissingId3v1Tag(f"source is {size} bytes, shorter than an ID3v1 tag")
    source.seek(size - TAG_SIZE)
    raw = read_exact(source, TAG_SIZE)
    if raw[:3] != TAG_MARKER:
        raise MissingId3v1Tag("no ID3v1 tag marker")

    comment_field = raw[97:127]
    track: Optional[int] = None
    if comment_field[28] == 0 and comment_field[29] != 0:
        track = comment_field[29]
        comment_field = comment_field[:28]

    genre_id = raw[127]
    return Id3v1Tag(
        title=_text(raw[3:33]),
        artist=_text(raw[33:63]),
        album=_text(raw[63:93]),
        year=parse_year(_text(raw[93:97])),
        comment=_text(comment_field),
        track=track,
        genre=GENRES[genre_id] if genre_id < len(GENRES) else None,
    )


def _text(field: bytes) -> str:
    return field.split(b"\x00", 1)[0].decode("latin-1").strip()

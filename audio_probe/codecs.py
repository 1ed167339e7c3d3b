from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import mutagen
from mutagen import MutagenError

logger = logging.getLogger(__name__)


class Codec(Enum):
    UNKNOWN = "?"

    WAV = "WAV"

    # lossless
    ALAC = "ALAC"
    FLAC = "FLAC"
    APE = "APE"
    OFR = "OFR"
    TAK = "TAK"
    WV = "WV"
    TTA = "TTA"
    WMAL = "WMAL"

    # lossy
    MP3 = "MP3"
    M4A = "M4A"
    M4B = "M4B"
    M4P = "M4P"
    AAC = "AAC"
    OGG = "OGG"
    OPUS = "OPUS"
    WMA = "WMA"

    def __str__(self) -> str:
        return self.value


SUFFIX_CODECS = {
    ".wav": Codec.WAV,
    ".flac": Codec.FLAC,
    ".ape": Codec.APE,
    ".ofr": Codec.OFR,
    ".ofs": Codec.OFR,
    ".tak": Codec.TAK,
    ".wv": Codec.WV,
    ".tta": Codec.TTA,
    ".mp3": Codec.MP3,
    ".m4a": Codec.M4A,
    ".m4b": Codec.M4B,
    ".m4p": Codec.M4P,
    ".aac": Codec.AAC,
    ".ogg": Codec.OGG,
    ".oga": Codec.OGG,
    ".opus": Codec.OPUS,
    ".wma": Codec.WMA,
}

# mutagen FileType subclasses, keyed by class name
_MUTAGEN_CODECS = {
    "FLAC": Codec.FLAC,
    "MP3": Codec.MP3,
    "EasyMP3": Codec.MP3,
    "WAVE": Codec.WAV,
    "MonkeysAudio": Codec.APE,
    "OptimFROG": Codec.OFR,
    "TAK": Codec.TAK,
    "WavPack": Codec.WV,
    "TrueAudio": Codec.TTA,
    "EasyTrueAudio": Codec.TTA,
    "AAC": Codec.AAC,
    "OggVorbis": Codec.OGG,
    "OggFLAC": Codec.OGG,
    "OggSpeex": Codec.OGG,
    "OggTheora": Codec.OGG,
    "OggOpus": Codec.OPUS,
}


def guess_codec(path: Path) -> Codec:
    """Guess a codec from the file name alone."""
    return SUFFIX_CODECS.get(Path(path).suffix.lower(), Codec.UNKNOWN)


def identify(path: Path) -> Codec:
    """Identify the codec of ``path`` by letting mutagen parse its headers."""
    try:
        audio = mutagen.File(path)
    except MutagenError as exc:
        logger.debug("mutagen could not identify %s: %s", path, exc)
        return Codec.UNKNOWN
    except Exception as exc:  # pragma: no cover - mutagen parsers on odd files
        logger.debug("mutagen failed on %s: %s", path, exc)
        return Codec.UNKNOWN
    if audio is None:
        return Codec.UNKNOWN
    kind = type(audio).__name__
    if kind in {"MP4", "EasyMP4"}:
        return _mp4_codec(path, audio)
    if kind == "ASF":
        codec_name = getattr(audio.info, "codec_name", "") or ""
        return Codec.WMAL if "lossless" in codec_name.lower() else Codec.WMA
    return _MUTAGEN_CODECS.get(kind, Codec.UNKNOWN)


def _mp4_codec(path: Path, audio) -> Codec:
    codec = getattr(audio.info, "codec", "") or ""
    if codec.lower() == "alac":
        return Codec.ALAC
    guessed = guess_codec(path)
    if guessed in {Codec.M4B, Codec.M4P}:
        return guessed
    return Codec.M4A

"""Audio encoding selectors and their wire/extension policy.

Responsibilities:
- Enumerate the audio encodings callers may request.
- Map each encoding to the primary provider's wire identifier and the file
  extension an output path must carry.

Notes:
- No audio is transcoded; the encoding only decides what is requested from a
  provider and which extension is enforced on the output path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ..errors import UnsupportedEncodingError


class AudioEncoding(str, Enum):
    """Audio encodings understood by the CLI and providers."""

    LINEAR16 = "LINEAR16"
    MP3 = "MP3"
    OGG_OPUS = "OGG_OPUS"
    MULAW = "MULAW"
    ALAW = "ALAW"


@dataclass(frozen=True, slots=True)
class EncodingRule:
    """Wire identifier and required file extension for one encoding."""

    wire_name: str
    extension: str


FALLBACK_EXTENSION = "bin"

ENCODING_POLICY = MappingProxyType(
    {
        AudioEncoding.LINEAR16: EncodingRule(wire_name="LINEAR16", extension="wav"),
        AudioEncoding.MP3: EncodingRule(wire_name="MP3", extension="mp3"),
        AudioEncoding.OGG_OPUS: EncodingRule(wire_name="OGG_OPUS", extension="ogg"),
        AudioEncoding.MULAW: EncodingRule(wire_name="MULAW", extension="wav"),
        AudioEncoding.ALAW: EncodingRule(wire_name="ALAW", extension="wav"),
    }
)


def wire_name_for(encoding: AudioEncoding) -> str:
    """Return the primary provider's identifier for an encoding."""

    return ENCODING_POLICY[encoding].wire_name


def extension_for(encoding: AudioEncoding) -> str:
    """Return the lowercase file extension (without dot) required for an encoding."""

    return ENCODING_POLICY[encoding].extension


def parse_encoding(value: str | AudioEncoding) -> AudioEncoding:
    """Parse an encoding name case-insensitively.

    Raises:
        UnsupportedEncodingError: If the name is not a known encoding.
    """

    if isinstance(value, AudioEncoding):
        return value
    token = str(value).strip().upper()
    try:
        return AudioEncoding(token)
    except ValueError as exc:
        raise UnsupportedEncodingError(
            token or str(value),
            [encoding.value for encoding in AudioEncoding],
        ) from exc


def extension_for_name(value: str) -> str:
    """Return the extension for an encoding name, or `bin` when unrecognized.

    Used where a path must be derived before the encoding is validated.
    """

    token = str(value).strip().upper()
    for encoding, rule in ENCODING_POLICY.items():
        if encoding.value == token:
            return rule.extension
    return FALLBACK_EXTENSION

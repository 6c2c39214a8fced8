"""Core datatypes shared across fast-tts modules.

Responsibilities:
- Represent immutable synthesis requests passed to provider adapters.
- Represent credential material read from key files.
- Represent voice catalog entries returned by the primary provider.

Key types:
- `Gender`, `SynthesisRequestParams`, `VoiceInfo`, `ServiceAccountKey`,
  and `AuthorizedUserCredential`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..audio.encoding import AudioEncoding

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class Gender(str, Enum):
    """Preferred voice gender as understood by the primary provider."""

    NEUTRAL = "NEUTRAL"
    MALE = "MALE"
    FEMALE = "FEMALE"


def parse_gender(value: str | Gender) -> Gender:
    """Parse a gender token; anything other than male/female means neutral."""

    if isinstance(value, Gender):
        return value
    token = str(value).strip().upper()
    if token == "MALE":
        return Gender.MALE
    if token == "FEMALE":
        return Gender.FEMALE
    return Gender.NEUTRAL


@dataclass(frozen=True, slots=True)
class SynthesisRequestParams:
    """Provider-neutral parameters for one synthesis call.

    Attributes:
        text: Plain text or SSML markup, depending on `is_ssml`.
        is_ssml: Whether `text` is SSML rather than plain text.
        language_code: BCP-47 language code.
        voice_name: Optional provider voice identifier.
        gender: Optional preferred voice gender.
        speaking_rate: Speaking rate multiplier (nominal 0.25-4.0).
        pitch: Pitch shift in semitones (nominal -20.0-20.0).
        volume_gain_db: Volume gain in dB (nominal -96.0-16.0).
        sample_rate_hertz: Optional output sample rate.
        encoding: Requested audio encoding.
        effects_profile_ids: Ordered audio effects profile identifiers.
    """

    text: str
    is_ssml: bool = False
    language_code: str = "en-US"
    voice_name: str | None = None
    gender: Gender | None = None
    speaking_rate: float = 1.0
    pitch: float = 0.0
    volume_gain_db: float = 0.0
    sample_rate_hertz: int | None = None
    encoding: AudioEncoding = AudioEncoding.LINEAR16
    effects_profile_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class VoiceInfo:
    """One voice entry from the primary provider's catalog."""

    name: str
    language_codes: tuple[str, ...]
    ssml_gender: str
    natural_sample_rate_hertz: int | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the provider-shaped camelCase JSON representation."""

        return {
            "name": self.name,
            "languageCodes": list(self.language_codes),
            "ssmlGender": self.ssml_gender,
            "naturalSampleRateHertz": self.natural_sample_rate_hertz,
        }


@dataclass(frozen=True, slots=True)
class ServiceAccountKey:
    """Service-account key fields needed for the JWT-bearer grant."""

    client_email: str
    private_key: str = field(repr=False)
    token_uri: str = DEFAULT_TOKEN_URI


@dataclass(frozen=True, slots=True)
class AuthorizedUserCredential:
    """Application-default user credential fields for the refresh-token grant."""

    client_id: str
    client_secret: str = field(repr=False)
    refresh_token: str = field(repr=False)
    credential_type: str = "authorized_user"

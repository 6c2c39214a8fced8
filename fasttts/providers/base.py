"""Provider identifiers and the uniform synthesis interface.

Responsibilities:
- Enumerate selectable providers, implemented or not.
- Define the protocol every request adapter satisfies.
- Share credential and output-format lookups used by secondary adapters.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Protocol

from ..audio.encoding import AudioEncoding
from ..config import RuntimeSettings
from ..errors import MissingCredentialError, UnsupportedEncodingError
from ..http_client import HttpTransport
from ..models.datatypes import SynthesisRequestParams


class ProviderId(str, Enum):
    """Provider selector accepted by `--provider`."""

    GOOGLE = "google"
    OPENAI = "openai"
    ELEVENLABS = "elevenlabs"
    DEEPGRAM = "deepgram"
    POLLY = "polly"
    AZURE = "azure"
    HUME = "hume"
    LISTNR = "listnr"
    MURF = "murf"
    GEMINI = "gemini"


class TTSProvider(Protocol):
    """Protocol for request adapters."""

    provider_id: ProviderId

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        """Return raw audio bytes for one synthesis request."""


class SecondaryProvider:
    """Shared construction and lookups for API-key based adapters."""

    provider_id: ProviderId
    api_key_env: str
    output_formats: Mapping[AudioEncoding, str]

    def __init__(self, settings: RuntimeSettings, transport: HttpTransport | None = None) -> None:
        self.settings = settings
        self.transport = (
            transport
            if transport is not None
            else HttpTransport(timeout_seconds=settings.timeout_seconds)
        )

    @property
    def label(self) -> str:
        return f"{self.provider_id.value} synthesis"

    def require_api_key(self) -> str:
        """Return the provider API key or fail with the variable's name."""

        value = self.settings.provider_value(self.api_key_env)
        if value is None:
            raise MissingCredentialError(self.api_key_env, self.provider_id.value)
        return value

    def output_format(self, encoding: AudioEncoding) -> str:
        """Map an encoding to this provider's format vocabulary."""

        try:
            return self.output_formats[encoding]
        except KeyError:
            raise UnsupportedEncodingError(
                encoding.value,
                [supported.value for supported in self.output_formats],
                provider=self.provider_id.value,
            ) from None

"""Deepgram Aura speech adapter."""

from __future__ import annotations

from types import MappingProxyType

from ..audio.encoding import AudioEncoding
from ..models.datatypes import SynthesisRequestParams
from .base import ProviderId, SecondaryProvider

DEEPGRAM_SPEAK_URL = "https://api.deepgram.com/v1/speak"
DEFAULT_MODEL = "aura-asteria-en"


class DeepgramTTSProvider(SecondaryProvider):
    """Adapter for Deepgram `/v1/speak`; options travel as query parameters."""

    provider_id = ProviderId.DEEPGRAM
    api_key_env = "DEEPGRAM_API_KEY"
    output_formats = MappingProxyType(
        {
            AudioEncoding.LINEAR16: "wav",
            AudioEncoding.MP3: "mp3",
            AudioEncoding.OGG_OPUS: "opus",
            AudioEncoding.MULAW: "mulaw",
            AudioEncoding.ALAW: "alaw",
        }
    )

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        api_key = self.require_api_key()
        output_format = self.output_format(params.encoding)
        model = self.settings.provider_value("DEEPGRAM_TTS_MODEL") or DEFAULT_MODEL
        return self.transport.post(
            DEEPGRAM_SPEAK_URL,
            label=self.label,
            headers={
                "Authorization": f"Token {api_key}",
                "Content-Type": "text/plain; charset=utf-8",
            },
            params={
                "model": model,
                "voice": params.voice_name or DEFAULT_MODEL,
                "format": output_format,
            },
            data=params.text.encode("utf-8"),
        )

"""OpenAI speech adapter."""

from __future__ import annotations

from types import MappingProxyType

from ..audio.encoding import AudioEncoding
from ..models.datatypes import SynthesisRequestParams
from .base import ProviderId, SecondaryProvider

OPENAI_SPEECH_URL = "https://api.openai.com/v1/audio/speech"
DEFAULT_MODEL = "gpt-4o-mini-tts"
DEFAULT_VOICE = "alloy"


class OpenAITTSProvider(SecondaryProvider):
    """Adapter for OpenAI `/v1/audio/speech`; the response body is the audio."""

    provider_id = ProviderId.OPENAI
    api_key_env = "OPENAI_API_KEY"
    output_formats = MappingProxyType(
        {
            AudioEncoding.LINEAR16: "wav",
            AudioEncoding.MP3: "mp3",
            AudioEncoding.OGG_OPUS: "opus",
        }
    )

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        api_key = self.require_api_key()
        response_format = self.output_format(params.encoding)
        payload = {
            "model": self.settings.provider_value("OPENAI_TTS_MODEL") or DEFAULT_MODEL,
            "voice": params.voice_name or DEFAULT_VOICE,
            "input": params.text,
            "response_format": response_format,
        }
        return self.transport.post(
            OPENAI_SPEECH_URL,
            label=self.label,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json_body=payload,
        )

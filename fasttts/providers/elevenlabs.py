"""ElevenLabs text-to-speech adapter."""

from __future__ import annotations

from types import MappingProxyType
from urllib.parse import quote

from ..audio.encoding import AudioEncoding
from ..models.datatypes import SynthesisRequestParams
from .base import ProviderId, SecondaryProvider

ELEVENLABS_BASE_URL = "https://api.elevenlabs.io/v1/text-to-speech"
DEFAULT_MODEL = "eleven_multilingual_v2"
DEFAULT_VOICE = "Rachel"


class ElevenLabsTTSProvider(SecondaryProvider):
    """Adapter for ElevenLabs; the voice id is part of the request path."""

    provider_id = ProviderId.ELEVENLABS
    api_key_env = "ELEVENLABS_API_KEY"
    output_formats = MappingProxyType(
        {
            AudioEncoding.LINEAR16: "wav",
            AudioEncoding.MP3: "mp3",
            AudioEncoding.OGG_OPUS: "ogg",
        }
    )

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        api_key = self.require_api_key()
        output_format = self.output_format(params.encoding)
        voice_id = params.voice_name or DEFAULT_VOICE
        payload = {
            "text": params.text,
            "model_id": self.settings.provider_value("ELEVENLABS_MODEL_ID") or DEFAULT_MODEL,
            "voice_settings": {"stability": 0.5, "similarity_boost": 0.5},
            "output_format": output_format,
        }
        return self.transport.post(
            f"{ELEVENLABS_BASE_URL}/{quote(voice_id, safe='')}",
            label=self.label,
            headers={"xi-api-key": api_key, "Content-Type": "application/json"},
            json_body=payload,
        )

"""Gemini `generateContent` speech adapter.

Audio comes back base64-encoded inside the candidates/parts JSON envelope.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any
from urllib.parse import quote

from ..audio.encoding import AudioEncoding
from ..errors import ProviderError
from ..models.datatypes import SynthesisRequestParams
from .base import ProviderId, SecondaryProvider

GEMINI_MODELS_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-1.5-flash-latest"


def extract_audio_data(payload: dict[str, Any]) -> str:
    """Return the first base64 audio payload from a `generateContent` response."""

    candidates = payload.get("candidates")
    if not isinstance(candidates, list):
        raise ProviderError("Gemini response did not include audio data")
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            continue
        for part in parts:
            if not isinstance(part, dict):
                continue
            for key in ("audio", "inlineData"):
                container = part.get(key)
                if isinstance(container, dict) and container.get("data") is not None:
                    return container["data"]
    raise ProviderError("Gemini response did not include audio data")


class GeminiTTSProvider(SecondaryProvider):
    """Adapter for Gemini models that return inline audio parts."""

    provider_id = ProviderId.GEMINI
    api_key_env = "GEMINI_API_KEY"
    output_formats = MappingProxyType(
        {
            AudioEncoding.MP3: "mp3",
            AudioEncoding.OGG_OPUS: "ogg",
            AudioEncoding.LINEAR16: "wav",
        }
    )

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        api_key = self.require_api_key()
        audio_format = self.output_format(params.encoding)
        model = self.settings.provider_value("GEMINI_TTS_MODEL") or DEFAULT_MODEL
        request_body = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": params.text},
                        {"audio": {"voice": params.voice_name, "format": audio_format}},
                    ],
                }
            ]
        }
        payload = self.transport.post(
            f"{GEMINI_MODELS_URL}/{quote(model, safe='')}:generateContent",
            label=self.label,
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
            json_body=request_body,
        )
        decoded = self.transport.decode_json(payload, label="Gemini synthesis")
        return self.transport.decode_base64(extract_audio_data(decoded), label="Gemini")

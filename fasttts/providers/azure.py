"""Azure Cognitive Services speech adapter.

The request body is an SSML document generated here, so plain input text is
XML-escaped before it is embedded. SSML input is passed through unchanged.
"""

from __future__ import annotations

from html import escape
from types import MappingProxyType

from ..audio.encoding import AudioEncoding
from ..errors import MissingCredentialError
from ..models.datatypes import SynthesisRequestParams
from .base import ProviderId, SecondaryProvider

_LOCALE_DEFAULT_VOICES = (
    ("en-US", "en-US-JennyNeural"),
    ("en-GB", "en-GB-LibbyNeural"),
)
DEFAULT_VOICE = "en-US-JennyNeural"


def default_voice_for(language_code: str) -> str:
    """Pick a neural voice for a locale, defaulting to US English."""

    for prefix, voice in _LOCALE_DEFAULT_VOICES:
        if language_code.startswith(prefix):
            return voice
    return DEFAULT_VOICE


def build_ssml_document(text: str, language_code: str, voice_name: str) -> str:
    """Wrap escaped text in a single-voice SSML document."""

    lang = escape(language_code, quote=True)
    voice = escape(voice_name, quote=True)
    return (
        f'<speak version="1.0" xml:lang="{lang}">'
        f'<voice xml:lang="{lang}" name="{voice}">{escape(text, quote=True)}</voice>'
        "</speak>"
    )


class AzureTTSProvider(SecondaryProvider):
    """Adapter for the regional Azure `cognitiveservices/v1` endpoint."""

    provider_id = ProviderId.AZURE
    api_key_env = "AZURE_SPEECH_KEY"
    region_env = "AZURE_SPEECH_REGION"
    output_formats = MappingProxyType(
        {
            AudioEncoding.LINEAR16: "riff-24khz-16bit-mono-pcm",
            AudioEncoding.MP3: "audio-24khz-160kbitrate-mono-mp3",
            AudioEncoding.OGG_OPUS: "ogg-48khz-16bit-mono-opus",
            AudioEncoding.MULAW: "mulaw-8khz-8bit-mono",
            AudioEncoding.ALAW: "alaw-8khz-8bit-mono",
        }
    )

    def output_format_for(self, encoding: AudioEncoding, sample_rate_hertz: int | None) -> str:
        """Choose the `X-Microsoft-OutputFormat` value for an encoding and rate."""

        if encoding is AudioEncoding.MP3 and sample_rate_hertz is not None:
            return "audio-48khz-192kbitrate-mono-mp3"
        if (
            encoding is AudioEncoding.LINEAR16
            and sample_rate_hertz is not None
            and sample_rate_hertz >= 48000
        ):
            return "riff-48khz-16bit-mono-pcm"
        return self.output_format(encoding)

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        api_key = self.require_api_key()
        region = self.settings.provider_value(self.region_env)
        if region is None:
            raise MissingCredentialError(self.region_env, self.provider_id.value)
        output_format = self.output_format_for(params.encoding, params.sample_rate_hertz)
        voice_name = params.voice_name or default_voice_for(params.language_code)
        if params.is_ssml:
            body = params.text
        else:
            body = build_ssml_document(params.text, params.language_code, voice_name)
        return self.transport.post(
            f"https://{region}.tts.speech.microsoft.com/cognitiveservices/v1",
            label=self.label,
            headers={
                "Ocp-Apim-Subscription-Key": api_key,
                "X-Microsoft-OutputFormat": output_format,
                "Content-Type": "application/ssml+xml",
            },
            data=body.encode("utf-8"),
        )

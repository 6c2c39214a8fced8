"""Google Cloud Text-to-Speech adapter (primary provider).

Responsibilities:
- Build `text:synthesize` request bodies from `SynthesisRequestParams`.
- Authenticate with a bearer token from the credential resolver.
- Decode base64 audio from the JSON response.
- List the provider's voice catalog.
"""

from __future__ import annotations

from typing import Any, Callable

from ..audio.encoding import wire_name_for
from ..auth.resolver import CredentialResolver
from ..config import RuntimeSettings
from ..errors import ProviderError
from ..http_client import HttpTransport
from ..models.datatypes import SynthesisRequestParams, VoiceInfo
from .base import ProviderId


def build_synthesize_request(params: SynthesisRequestParams) -> dict[str, Any]:
    """Build the JSON body for `POST /v1/text:synthesize`."""

    synthesis_input = {"ssml": params.text} if params.is_ssml else {"text": params.text}

    voice: dict[str, Any] = {"languageCode": params.language_code}
    if params.voice_name is not None:
        voice["name"] = params.voice_name
    if params.gender is not None:
        voice["ssmlGender"] = params.gender.value

    audio_config: dict[str, Any] = {
        "audioEncoding": wire_name_for(params.encoding),
        "speakingRate": params.speaking_rate,
        "pitch": params.pitch,
        "volumeGainDb": params.volume_gain_db,
        "enableLegacyWavHeader": False,
    }
    if params.sample_rate_hertz is not None:
        audio_config["sampleRateHertz"] = params.sample_rate_hertz
    if params.effects_profile_ids:
        audio_config["effectsProfileId"] = list(params.effects_profile_ids)

    return {"input": synthesis_input, "voice": voice, "audioConfig": audio_config}


class GoogleTTSProvider:
    """Primary provider adapter backed by the Cloud Text-to-Speech REST API."""

    provider_id = ProviderId.GOOGLE

    def __init__(
        self,
        settings: RuntimeSettings,
        transport: HttpTransport | None = None,
        token_source: Callable[[], str] | None = None,
    ) -> None:
        self.settings = settings
        self.transport = (
            transport
            if transport is not None
            else HttpTransport(timeout_seconds=settings.timeout_seconds)
        )
        if token_source is None:
            token_source = CredentialResolver(settings).resolve_token
        self.token_source = token_source

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_source()}"}

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        """Synthesize speech and return decoded audio bytes."""

        headers = self._auth_headers()
        headers["Content-Type"] = "application/json"
        payload = self.transport.post(
            f"{self.settings.base_url}/v1/text:synthesize",
            label="Google synthesis",
            headers=headers,
            json_body=build_synthesize_request(params),
        )
        decoded = self.transport.decode_json(payload, label="Google synthesis")
        audio_content = decoded.get("audio_content", decoded.get("audioContent"))
        if audio_content is None:
            raise ProviderError("Google synthesis response missing `audio_content`.")
        return self.transport.decode_base64(audio_content, label="Google synthesis")

    def list_voices(self, language_code: str | None = None) -> list[VoiceInfo]:
        """Return the voice catalog, optionally filtered by language code."""

        payload = self.transport.get(
            f"{self.settings.base_url}/v1/voices",
            label="Google voice listing",
            headers=self._auth_headers(),
            params={"languageCode": language_code} if language_code else None,
        )
        decoded = self.transport.decode_json(payload, label="Google voice listing")
        raw_voices = decoded.get("voices", [])
        if not isinstance(raw_voices, list):
            raise ProviderError("Google voice listing `voices` must be a list.")
        return [self._parse_voice(entry) for entry in raw_voices]

    @staticmethod
    def _parse_voice(entry: object) -> VoiceInfo:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ProviderError("Google voice listing contains a malformed voice entry.")
        language_codes = entry.get("languageCodes") or []
        if not isinstance(language_codes, list):
            raise ProviderError("Google voice listing `languageCodes` must be a list.")
        sample_rate = entry.get("naturalSampleRateHertz")
        return VoiceInfo(
            name=entry["name"],
            language_codes=tuple(str(code) for code in language_codes),
            ssml_gender=str(entry.get("ssmlGender") or "SSML_VOICE_GENDER_UNSPECIFIED"),
            natural_sample_rate_hertz=int(sample_rate) if isinstance(sample_rate, int) else None,
        )

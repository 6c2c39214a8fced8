"""Unit tests for the transport-free remote tool handlers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fasttts.audio.encoding import AudioEncoding
from fasttts.config import RuntimeSettings
from fasttts.errors import AuthError
from fasttts.models.datatypes import Gender, SynthesisRequestParams, VoiceInfo
from fasttts.providers.base import ProviderId
from fasttts.synthesis import SynthesisService
from fasttts.tools import ToolHandlers, ToolInvocationError


class _RecordingProvider:
    provider_id = ProviderId.GOOGLE

    def __init__(self) -> None:
        self.requests: list[SynthesisRequestParams] = []

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        self.requests.append(params)
        return b"TOOLAUDIO"


def _handlers(provider: _RecordingProvider, voice_lister=None) -> ToolHandlers:
    settings = RuntimeSettings()
    service = SynthesisService(settings, provider_builder=lambda _pid, _settings: provider)
    return ToolHandlers(settings, service=service, voice_lister=voice_lister)


def test_list_tools_describes_synthesize_and_list_voices() -> None:
    """Both tools should be advertised with their input schemas."""

    tools = _handlers(_RecordingProvider()).list_tools()

    assert [tool["name"] for tool in tools] == ["synthesize", "listVoices"]
    assert tools[0]["inputSchema"]["required"] == ["text", "output"]
    assert "effectsProfileId" in tools[0]["inputSchema"]["properties"]
    assert ToolHandlers.server_info()["name"] == "fast-tts"


def test_synthesize_tool_writes_file_and_returns_json(tmp_path: Path) -> None:
    """A valid call should synthesize with the primary provider and report the path."""

    provider = _RecordingProvider()
    output = str(tmp_path / "tool.mp3")

    result = _handlers(provider).call_tool(
        "synthesize",
        {
            "text": "hello",
            "output": output,
            "encoding": "mp3",
            "gender": "female",
            "rate": 2,
            "sampleRate": 24000,
            "effectsProfileId": ["telephony-class-application"],
            "ssml": False,
        },
    )

    assert json.loads(result) == {"ok": True, "output": output}
    assert Path(output).read_bytes() == b"TOOLAUDIO"
    params = provider.requests[0]
    assert params.encoding is AudioEncoding.MP3
    assert params.gender is Gender.FEMALE
    assert params.speaking_rate == 2.0
    assert params.sample_rate_hertz == 24000
    assert params.effects_profile_ids == ("telephony-class-application",)
    assert params.language_code == "en-US"


@pytest.mark.parametrize(
    ("arguments", "message"),
    [
        ({"output": "a.wav"}, "text required"),
        ({"text": "hi"}, "output required"),
        ({"text": "hi", "output": "a.wav", "rate": "fast"}, "rate must be a number"),
        ({"text": "hi", "output": "a.wav", "sampleRate": True}, "sampleRate must be int"),
        ({"text": "hi", "output": "a.wav", "effectsProfileId": "x"}, "effectsProfileId must be"),
    ],
)
def test_synthesize_tool_rejects_invalid_arguments(arguments: dict, message: str) -> None:
    """Invalid arguments should raise `invalid_parameters` errors."""

    with pytest.raises(ToolInvocationError, match=message) as exc_info:
        _handlers(_RecordingProvider()).call_tool("synthesize", arguments)

    assert exc_info.value.code == "invalid_parameters"


def test_synthesize_tool_maps_domain_failures_to_execution_errors(tmp_path: Path) -> None:
    """Extension mismatches and bad encodings should be execution errors."""

    handlers = _handlers(_RecordingProvider())

    with pytest.raises(ToolInvocationError, match="does not match encoding") as mismatch:
        handlers.call_tool("synthesize", {"text": "hi", "output": str(tmp_path / "a.mp3")})
    with pytest.raises(ToolInvocationError, match="unsupported encoding: FLAC") as bad_encoding:
        handlers.call_tool(
            "synthesize", {"text": "hi", "output": "a.wav", "encoding": "flac"}
        )

    assert mismatch.value.code == "execution_error"
    assert bad_encoding.value.code == "execution_error"


def test_list_voices_tool_returns_catalog_json() -> None:
    """The voice tool should return the camelCase catalog."""

    requested: list[str | None] = []

    def _lister(language: str | None) -> list[VoiceInfo]:
        requested.append(language)
        return [VoiceInfo("en-US-Neural2-F", ("en-US",), "FEMALE", 24000)]

    result = _handlers(_RecordingProvider(), voice_lister=_lister).call_tool("listVoices", {"json": True})

    assert json.loads(result) == {
        "voices": [
            {
                "name": "en-US-Neural2-F",
                "languageCodes": ["en-US"],
                "ssmlGender": "FEMALE",
                "naturalSampleRateHertz": 24000,
            }
        ]
    }
    assert requested == [None]


def test_list_voices_tool_maps_auth_failure() -> None:
    """Credential failures during listing should become execution errors."""

    def _lister(language: str | None) -> list[VoiceInfo]:
        raise AuthError("No Google credentials found.", reason="no_credentials")

    with pytest.raises(ToolInvocationError, match="No Google credentials found") as exc_info:
        _handlers(_RecordingProvider(), voice_lister=_lister).call_tool("listVoices")

    assert exc_info.value.code == "execution_error"


def test_unknown_tool_is_not_found() -> None:
    """Unknown tool names should raise a `not_found` error."""

    with pytest.raises(ToolInvocationError, match="Tool speak not found") as exc_info:
        _handlers(_RecordingProvider()).call_tool("speak", {})

    assert exc_info.value.code == "not_found"

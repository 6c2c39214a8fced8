"""Transport-free handlers for the remote tool server.

Responsibilities:
- Describe the `synthesize` and `listVoices` tools with JSON schemas.
- Validate tool arguments and map them to synthesis parameters.
- Run the synthesis service (primary provider) or the voice listing and
  return JSON text results.

Notes:
- The server transport (stdio, SSE, or HTTP) lives outside this package and
  only calls `ToolHandlers.list_tools` and `ToolHandlers.call_tool`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Mapping

from .audio.encoding import AudioEncoding, parse_encoding
from .config import RuntimeSettings
from .errors import FastTTSError
from .http_client import HttpTransport
from .models.datatypes import SynthesisRequestParams, VoiceInfo, parse_gender
from .providers.base import ProviderId
from .providers.factory import ProviderFactory
from .synthesis import SynthesisService

SERVER_NAME = "fast-tts"
SERVER_INSTRUCTIONS = "Text-to-speech server providing synthesize and listVoices tools."

_SYNTHESIZE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "output": {"type": "string"},
        "language": {"type": "string"},
        "voice": {"type": "string"},
        "gender": {"type": "string"},
        "rate": {"type": "number"},
        "pitch": {"type": "number"},
        "sampleRate": {"type": "integer"},
        "encoding": {"type": "string"},
        "volumeGainDb": {"type": "number"},
        "effectsProfileId": {"type": "array", "items": {"type": "string"}},
        "ssml": {"type": "boolean"},
    },
    "required": ["text", "output"],
}

_LIST_VOICES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"json": {"type": "boolean"}, "language": {"type": "string"}},
    "required": [],
}


class ToolInvocationError(FastTTSError):
    """Raised when a tool call cannot be served.

    `code` is one of `not_found`, `invalid_parameters`, or `execution_error`.
    """

    kind = "tool"

    def __init__(self, detail: str, *, code: str) -> None:
        super().__init__(detail)
        self.code = code


def _default_voice_lister(settings: RuntimeSettings) -> Callable[[str | None], list[VoiceInfo]]:
    provider = ProviderFactory.create_primary(
        settings,
        transport=HttpTransport(timeout_seconds=settings.timeout_seconds),
    )
    return provider.list_voices


class ToolHandlers:
    """Tool descriptors and dispatch for the remote tool server."""

    def __init__(
        self,
        settings: RuntimeSettings,
        service: SynthesisService | None = None,
        voice_lister: Callable[[str | None], list[VoiceInfo]] | None = None,
    ) -> None:
        self.settings = settings
        self.service = service if service is not None else SynthesisService(settings)
        self._voice_lister = voice_lister

    @staticmethod
    def server_info() -> dict[str, str]:
        """Return the name and instructions a server advertises on connect."""

        return {"name": SERVER_NAME, "instructions": SERVER_INSTRUCTIONS}

    def list_tools(self) -> list[dict[str, Any]]:
        """Return tool descriptors in server registration order."""

        return [
            {
                "name": "synthesize",
                "description": "Synthesize speech and write to a file",
                "inputSchema": _SYNTHESIZE_SCHEMA,
            },
            {
                "name": "listVoices",
                "description": "List available voices from provider",
                "inputSchema": _LIST_VOICES_SCHEMA,
            },
        ]

    def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> str:
        """Run a tool and return its JSON text result.

        Raises:
            ToolInvocationError: For unknown tools, invalid arguments, or
                synthesis/listing failures.
        """

        args = arguments or {}
        if not isinstance(args, Mapping):
            raise ToolInvocationError("arguments must be an object", code="invalid_parameters")
        if name == "synthesize":
            return self._synthesize(args)
        if name == "listVoices":
            return self._list_voices(args)
        raise ToolInvocationError(f"Tool {name} not found", code="not_found")

    def _synthesize(self, args: Mapping[str, Any]) -> str:
        params, output = self.parse_synthesize_arguments(args)
        try:
            self.service.synthesize_to_file(ProviderId.GOOGLE, params, Path(output))
        except FastTTSError as exc:
            raise ToolInvocationError(exc.detail, code="execution_error") from exc
        return json.dumps({"ok": True, "output": output})

    def _list_voices(self, args: Mapping[str, Any]) -> str:
        language = args.get("language")
        if language is not None and not isinstance(language, str):
            raise ToolInvocationError("language must be a string", code="invalid_parameters")
        lister = self._voice_lister or _default_voice_lister(self.settings)
        try:
            voices = lister(language or None)
        except FastTTSError as exc:
            raise ToolInvocationError(exc.detail, code="execution_error") from exc
        return json.dumps({"voices": [voice.to_payload() for voice in voices]})

    @staticmethod
    def parse_synthesize_arguments(args: Mapping[str, Any]) -> tuple[SynthesisRequestParams, str]:
        """Validate `synthesize` arguments and return parameters plus output path."""

        text = _required_string(args, "text")
        output = _required_string(args, "output")
        gender = _optional_typed(args, "gender", str)
        effects = args.get("effectsProfileId")
        if effects is not None and (
            not isinstance(effects, list) or not all(isinstance(entry, str) for entry in effects)
        ):
            raise ToolInvocationError(
                "effectsProfileId must be a list of strings", code="invalid_parameters"
            )
        try:
            encoding = parse_encoding(
                _optional_typed(args, "encoding", str) or AudioEncoding.LINEAR16.value
            )
        except FastTTSError as exc:
            raise ToolInvocationError(exc.detail, code="execution_error") from exc

        params = SynthesisRequestParams(
            text=text,
            is_ssml=bool(_optional_typed(args, "ssml", bool) or False),
            language_code=_optional_typed(args, "language", str) or "en-US",
            voice_name=_optional_typed(args, "voice", str),
            gender=parse_gender(gender) if gender is not None else None,
            speaking_rate=float(_optional_number(args, "rate", 1.0)),
            pitch=float(_optional_number(args, "pitch", 0.0)),
            volume_gain_db=float(_optional_number(args, "volumeGainDb", 0.0)),
            sample_rate_hertz=_optional_typed(args, "sampleRate", int),
            encoding=encoding,
            effects_profile_ids=tuple(effects or ()),
        )
        return params, output


def _required_string(args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str):
        raise ToolInvocationError(f"{key} required", code="invalid_parameters")
    return value


def _optional_typed(args: Mapping[str, Any], key: str, expected: type) -> Any:
    value = args.get(key)
    if value is None:
        return None
    # bool is an int subclass; sampleRate must not accept true/false.
    if isinstance(value, bool) and expected is not bool:
        raise ToolInvocationError(f"{key} must be {expected.__name__}", code="invalid_parameters")
    if not isinstance(value, expected):
        raise ToolInvocationError(f"{key} must be {expected.__name__}", code="invalid_parameters")
    return value


def _optional_number(args: Mapping[str, Any], key: str, default: float) -> float:
    value = args.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolInvocationError(f"{key} must be a number", code="invalid_parameters")
    return float(value)

"""Unit tests for the single-shot synthesis service."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest

from fasttts.audio.encoding import AudioEncoding
from fasttts.config import RuntimeSettings
from fasttts.errors import ExtensionMismatchError, HttpError
from fasttts.models.datatypes import SynthesisRequestParams
from fasttts.providers.base import ProviderId
from fasttts.synthesis import SynthesisService
from fasttts.telemetry.logger import configure_run_logging


class _FakeProvider:
    """Provider double that records requests and returns fixed audio."""

    provider_id = ProviderId.GOOGLE

    def __init__(self, audio: bytes = b"AUDIO", error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.requests: list[SynthesisRequestParams] = []

    def synthesize(self, params: SynthesisRequestParams) -> bytes:
        self.requests.append(params)
        if self.error is not None:
            raise self.error
        return self.audio


def test_synthesize_to_file_writes_provider_audio(tmp_path: Path) -> None:
    """The provider's bytes should be written to the output path."""

    provider = _FakeProvider(audio=b"WAVDATA")
    built: list[str] = []

    def _builder(provider_id: object, settings: RuntimeSettings) -> _FakeProvider:
        built.append(str(provider_id))
        return provider

    service = SynthesisService(RuntimeSettings(), provider_builder=_builder)
    output = tmp_path / "out" / "hello.wav"

    written = service.synthesize_to_file(ProviderId.GOOGLE, SynthesisRequestParams(text="hello"), output)

    assert written == output
    assert output.read_bytes() == b"WAVDATA"
    assert provider.requests[0].text == "hello"
    assert len(built) == 1


def test_extension_mismatch_fails_before_provider_is_built(tmp_path: Path) -> None:
    """Extension validation should run before any provider work."""

    def _builder(provider_id: object, settings: RuntimeSettings) -> _FakeProvider:
        raise AssertionError("provider should not be built")

    service = SynthesisService(RuntimeSettings(), provider_builder=_builder)

    with pytest.raises(ExtensionMismatchError, match=r"\.mp3 .*expected \.wav"):
        service.synthesize_to_file(
            ProviderId.GOOGLE,
            SynthesisRequestParams(text="hello", encoding=AudioEncoding.LINEAR16),
            tmp_path / "hello.mp3",
        )


def test_provider_failure_is_logged_and_nothing_written(tmp_path: Path) -> None:
    """Provider errors should propagate, leave no file, and log a failure event."""

    sink = StringIO()
    configure_run_logging(sink, verbose=True)
    provider = _FakeProvider(error=HttpError("synthesis failed (HTTP 500).", status_code=500))
    service = SynthesisService(
        RuntimeSettings(retries=3), provider_builder=lambda _pid, _settings: provider
    )
    output = tmp_path / "hello.wav"

    with pytest.raises(HttpError):
        service.synthesize_to_file(ProviderId.GOOGLE, SynthesisRequestParams(text="hi"), output)

    assert not output.exists()
    log_text = sink.getvalue()
    assert "stage=synthesize:google event=retries_reserved retries=3" in log_text
    assert "stage=synthesize:google event=failure error_type=HttpError" in log_text

"""Single-shot synthesis: validate the output path, synthesize, write.

Responsibilities:
- Reject mismatched output extensions before any credential or network work.
- Select a provider adapter and run one synthesis call.
- Persist the returned audio bytes.

Key types:
- `SynthesisService`: the adapter + writer pair used by the CLI, the bulk
  driver, and the remote tool boundary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import RuntimeSettings
from .errors import FastTTSError
from .http_client import HttpTransport
from .io.storage import validate_extension, write_output
from .models.datatypes import SynthesisRequestParams
from .providers.base import ProviderId, TTSProvider
from .providers.factory import ProviderFactory
from .telemetry.logger import RunLogger

ProviderBuilder = Callable[[ProviderId | str, RuntimeSettings], TTSProvider]


def _default_provider_builder(provider_id: ProviderId | str, settings: RuntimeSettings) -> TTSProvider:
    return ProviderFactory.create(
        provider_id,
        settings,
        transport=HttpTransport(timeout_seconds=settings.timeout_seconds),
    )


class SynthesisService:
    """Run one synthesis request end to end."""

    def __init__(
        self,
        settings: RuntimeSettings,
        provider_builder: ProviderBuilder = _default_provider_builder,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.settings = settings
        self.provider_builder = provider_builder
        self.run_logger = run_logger if run_logger is not None else RunLogger()

    def synthesize_to_file(
        self,
        provider_id: ProviderId | str,
        params: SynthesisRequestParams,
        output: Path,
    ) -> Path:
        """Synthesize `params` with a provider and write the audio to `output`."""

        validate_extension(output, params.encoding)
        provider = self.provider_builder(provider_id, self.settings)
        stage = f"synthesize:{provider.provider_id.value}"
        if self.settings.retries:
            self.run_logger.log_event(
                stage,
                "retries_reserved",
                level="DEBUG",
                retries=self.settings.retries,
            )
        self.run_logger.log_stage_start(
            stage,
            encoding=params.encoding.value,
            ssml=params.is_ssml,
        )
        try:
            audio = provider.synthesize(params)
            written = write_output(output, audio)
        except FastTTSError as exc:
            self.run_logger.log_stage_failure(stage, type(exc).__name__)
            raise
        self.run_logger.log_stage_complete(stage, bytes=len(audio), output=written)
        return written

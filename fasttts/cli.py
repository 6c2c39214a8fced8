"""Command-line interface for fast-tts.

Responsibilities:
- Parse the single `fast-tts` command's arguments and options.
- Dispatch to bulk synthesis, voice listing, or single-shot synthesis.
- Render results on stdout and diagnostics on stderr.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .audio.encoding import parse_encoding
from .batch import BatchRunner, BulkConfigLoader
from .cli_rendering import (
    echo_voice_list,
    echo_voices_json,
    echo_written,
    exit_with_command_error,
)
from .config import DEFAULT_RETRIES, DEFAULT_TIMEOUT_MS, RuntimeSettings
from .errors import ConfigError
from .http_client import HttpTransport
from .models.datatypes import Gender, SynthesisRequestParams
from .parsing import split_csv_values
from .providers.factory import ProviderFactory, parse_provider_id
from .synthesis import SynthesisService
from .telemetry.logger import RunLogger, configure_run_logging

app = typer.Typer(
    name="fast-tts",
    add_completion=False,
    help="fast-tts: generate speech audio files from text.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fast-tts {__version__}")
        raise typer.Exit()


def _run_bulk(config_path: Path, settings: RuntimeSettings, run_logger: RunLogger) -> None:
    config = BulkConfigLoader.from_file(config_path)
    runner = BatchRunner(
        SynthesisService(settings, run_logger=run_logger),
        on_item_written=echo_written,
        run_logger=run_logger,
    )
    runner.run(config)


def _run_list_voices(settings: RuntimeSettings, json_output: bool) -> None:
    provider = ProviderFactory.create_primary(
        settings,
        transport=HttpTransport(timeout_seconds=settings.timeout_seconds),
    )
    voices = provider.list_voices()
    if json_output:
        echo_voices_json(voices)
    else:
        echo_voice_list(voices)


@app.command()
def synthesize_command(
    text: Annotated[
        str | None, typer.Argument(help="Text to synthesize (use quotes).")
    ] = None,
    output: Annotated[
        Path | None, typer.Argument(help="Output file path (extension must match encoding).")
    ] = None,
    language: Annotated[
        str, typer.Option("-l", "--language", help="BCP-47 language code (e.g. en-US).")
    ] = "en-US",
    voice: Annotated[
        str | None,
        typer.Option("-v", "--voice", help="Specific voice name (e.g. en-US-Neural2-F)."),
    ] = None,
    gender: Annotated[
        Gender | None,
        typer.Option("--gender", case_sensitive=False, help="Preferred voice gender."),
    ] = None,
    rate: Annotated[
        float, typer.Option("--rate", help="Speaking rate multiplier (0.25-4.0).")
    ] = 1.0,
    pitch: Annotated[
        float, typer.Option("--pitch", help="Pitch in semitones (-20.0-20.0).")
    ] = 0.0,
    sample_rate: Annotated[
        int | None, typer.Option("--sample-rate", help="Output sample rate (Hz).")
    ] = None,
    encoding: Annotated[
        str,
        typer.Option(
            "--encoding",
            help="Audio encoding: LINEAR16, MP3, OGG_OPUS, MULAW, ALAW (case-insensitive).",
        ),
    ] = "LINEAR16",
    volume: Annotated[
        float, typer.Option("--volume", help="Volume gain in dB (-96.0-16.0).")
    ] = 0.0,
    effects_profile: Annotated[
        list[str] | None,
        typer.Option(
            "--effects-profile",
            help="Audio effects profile id(s); repeat the flag or separate with commas.",
        ),
    ] = None,
    ssml: Annotated[
        bool, typer.Option("--ssml", help="Treat input as SSML instead of plain text.")
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", metavar="FILE", help="Bulk config file (YAML or JSON)."),
    ] = None,
    provider: Annotated[
        str,
        typer.Option(
            "--provider",
            help=(
                "TTS provider: google, openai, elevenlabs, deepgram, azure, gemini "
                "(polly, hume, listnr, murf are not implemented)."
            ),
        ),
    ] = "google",
    list_voices: Annotated[
        bool, typer.Option("--list-voices", help="List available voices and exit.")
    ] = False,
    json_output: Annotated[
        bool, typer.Option("--json", help="Emit JSON for --list-voices.")
    ] = False,
    timeout_ms: Annotated[
        int, typer.Option("--timeout", help="Request timeout in milliseconds.")
    ] = DEFAULT_TIMEOUT_MS,
    retries: Annotated[
        int,
        typer.Option("--retries", help="Retry count for transient failures (reserved)."),
    ] = DEFAULT_RETRIES,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log debug events to stderr.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """fast-tts: convert text to speech with Google Cloud TTS or another provider."""

    _ = version
    configure_run_logging(verbose=verbose)
    run_logger = RunLogger()

    try:
        settings = RuntimeSettings.from_env().with_limits(
            timeout_ms=timeout_ms, retries=retries
        )

        if config_path is not None:
            _run_bulk(config_path, settings, run_logger)
            return

        if list_voices:
            _run_list_voices(settings, json_output)
            return

        if text is None or output is None:
            raise ConfigError("text and output are required unless --list-voices is used")

        params = SynthesisRequestParams(
            text=text,
            is_ssml=ssml,
            language_code=language,
            voice_name=voice,
            gender=gender,
            speaking_rate=rate,
            pitch=pitch,
            volume_gain_db=volume,
            sample_rate_hertz=sample_rate,
            encoding=parse_encoding(encoding),
            effects_profile_ids=tuple(split_csv_values(effects_profile)),
        )
        service = SynthesisService(settings, run_logger=run_logger)
        written = service.synthesize_to_file(parse_provider_id(provider), params, output)
    except Exception as exc:
        exit_with_command_error(exc)

    echo_written(written)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()

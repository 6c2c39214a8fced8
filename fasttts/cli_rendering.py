"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
written-file confirmations, and voice listing rows.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Sequence

import typer

from .errors import FastTTSError
from .models.datatypes import VoiceInfo


def exit_with_command_error(exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, FastTTSError):
        typer.secho(f"Error: {exc.detail}", fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_written(path: Path) -> None:
    """Print the confirmation line for one written audio file."""

    typer.echo(f"Wrote {path}")


def format_voice_row(voice: VoiceInfo) -> str:
    """Format one aligned voice row: name, gender, natural rate, languages."""

    langs = ",".join(voice.language_codes) if voice.language_codes else "-"
    rate = (
        str(voice.natural_sample_rate_hertz)
        if voice.natural_sample_rate_hertz is not None
        else "-"
    )
    return f"{voice.name:<28} {voice.ssml_gender:<7} {rate:>6} Hz  [{langs}]"


def echo_voice_list(voices: Sequence[VoiceInfo]) -> None:
    """Print voices as aligned text rows in provider order."""

    for voice in voices:
        typer.echo(format_voice_row(voice))


def echo_voices_json(voices: Sequence[VoiceInfo]) -> None:
    """Print voices as pretty JSON under a top-level `voices` key."""

    payload = {"voices": [voice.to_payload() for voice in voices]}
    typer.echo(json.dumps(payload, indent=2))

"""Structured run logging utilities.

Responsibilities:
- Emit concise, deterministic event-level runtime logs through `loguru`.
- Configure the CLI log sink and level; library use stays silent until the
  CLI enables the `fasttts` logger.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

_LOGGER_NAME = "fasttts"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def configure_run_logging(sink: TextIO | None = None, *, verbose: bool = False) -> None:
    """Route `fasttts` log records to a sink (stderr by default).

    Stdout is reserved for command results, so the default sink is stderr.
    """

    logger.remove()
    logger.add(
        sink or sys.stderr,
        format="{message}",
        level="DEBUG" if verbose else "WARNING",
        colorize=False,
    )
    logger.enable(_LOGGER_NAME)


class RunLogger:
    """Emit deterministic event logs for CLI-observable synthesis activity."""

    def log_event(self, stage: str, event: str, *, level: str = "INFO", **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[event] level={level} stage={stage} event={event}{_format_context(context)}"
        logger.log(level, line)

    def log_stage_start(self, stage: str, **context: object) -> None:
        """Emit a stage-start runtime event."""

        self.log_event(stage, "start", **context)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Emit a stage-complete runtime event."""

        self.log_event(stage, "complete", **context)

    def log_stage_failure(self, stage: str, error_type: str) -> None:
        """Emit a stage-failure runtime event without sensitive payload details."""

        self.log_event(stage, "failure", level="ERROR", error_type=error_type)

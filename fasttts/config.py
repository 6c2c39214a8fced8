"""Runtime settings assembled once from the process environment.

Responsibilities:
- Collect every environment-sourced value (tokens, key paths, provider API
  keys, model overrides, endpoint overrides) into one explicit settings value.
- Resolve the platform default application-default-credentials path.
- Validate timeout and retry knobs.

Key types:
- `RuntimeSettings`: immutable settings passed into the credential resolver
  and provider adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Mapping

from .errors import ConfigError
from .parsing import normalize_optional_string


DEFAULT_BASE_URL = "https://texttospeech.googleapis.com"
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_RETRIES = 2

_ADC_FILE_NAME = "application_default_credentials.json"

_PROVIDER_ENV_KEYS = frozenset(
    {
        "OPENAI_API_KEY",
        "OPENAI_TTS_MODEL",
        "ELEVENLABS_API_KEY",
        "ELEVENLABS_MODEL_ID",
        "DEEPGRAM_API_KEY",
        "DEEPGRAM_TTS_MODEL",
        "AZURE_SPEECH_KEY",
        "AZURE_SPEECH_REGION",
        "GEMINI_API_KEY",
        "GEMINI_TTS_MODEL",
    }
)


def default_adc_path(env: Mapping[str, str], home: Path | None = None) -> Path | None:
    """Return the gcloud application-default-credentials path for this platform.

    `CLOUDSDK_CONFIG` overrides the gcloud config directory. On Windows the
    directory lives under `%APPDATA%`; elsewhere under `~/.config`.
    """

    config_dir = normalize_optional_string(env.get("CLOUDSDK_CONFIG"))
    if config_dir is not None:
        return Path(config_dir) / _ADC_FILE_NAME

    if os.name == "nt":
        appdata = normalize_optional_string(env.get("APPDATA"))
        if appdata is not None:
            return Path(appdata) / "gcloud" / _ADC_FILE_NAME

    try:
        resolved_home = home if home is not None else Path.home()
    except RuntimeError:
        return None
    return resolved_home / ".config" / "gcloud" / _ADC_FILE_NAME


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Explicit process configuration for credential and provider lookups.

    Attributes:
        token_override: Pre-supplied bearer token (raw value, not trimmed).
        base_url: Primary provider base URL.
        service_account_path: Service-account key file path, when configured.
        adc_path: Application-default-credentials path candidate.
        provider_env: Secondary provider keys, model overrides, and region.
        timeout_ms: Per-request timeout in milliseconds.
        retries: Reserved retry count; accepted and validated but not applied.
    """

    token_override: str | None = field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    service_account_path: Path | None = None
    adc_path: Path | None = None
    provider_env: Mapping[str, str] = field(default_factory=dict, repr=False)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retries: int = DEFAULT_RETRIES

    def __post_init__(self) -> None:
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int):
            raise ConfigError("`timeout` must be a positive integer of milliseconds.")
        if self.timeout_ms <= 0:
            raise ConfigError("`timeout` must be a positive integer of milliseconds.")
        if isinstance(self.retries, bool) or not isinstance(self.retries, int):
            raise ConfigError("`retries` must be a non-negative integer.")
        if self.retries < 0:
            raise ConfigError("`retries` must be a non-negative integer.")

    @property
    def timeout_seconds(self) -> float:
        """Return the per-request timeout in seconds for `requests`."""

        return self.timeout_ms / 1000.0

    def provider_value(self, key: str) -> str | None:
        """Return a normalized provider env value, or `None` when missing/blank."""

        return normalize_optional_string(self.provider_env.get(key))

    def with_limits(self, *, timeout_ms: int | None = None, retries: int | None = None) -> RuntimeSettings:
        """Return a copy with CLI-supplied timeout/retry values applied."""

        return replace(
            self,
            timeout_ms=self.timeout_ms if timeout_ms is None else timeout_ms,
            retries=self.retries if retries is None else retries,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> RuntimeSettings:
        """Create settings from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        raw_token = env_map.get("FAST_TTS_TOKEN")
        token_override = raw_token if normalize_optional_string(raw_token) is not None else None

        base_url = normalize_optional_string(env_map.get("FAST_TTS_BASE_URL")) or DEFAULT_BASE_URL

        key_path = normalize_optional_string(env_map.get("GOOGLE_APPLICATION_CREDENTIALS"))
        provider_env = {
            key: value
            for key, value in env_map.items()
            if key in _PROVIDER_ENV_KEYS and normalize_optional_string(value) is not None
        }

        return cls(
            token_override=token_override,
            base_url=base_url.rstrip("/"),
            service_account_path=Path(key_path) if key_path is not None else None,
            adc_path=default_adc_path(env_map),
            provider_env=provider_env,
        )

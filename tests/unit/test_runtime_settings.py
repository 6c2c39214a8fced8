"""Unit tests for environment-sourced runtime settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from fasttts.config import (
    DEFAULT_BASE_URL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_MS,
    RuntimeSettings,
    default_adc_path,
)
from fasttts.errors import ConfigError


def test_from_env_uses_defaults_for_empty_environment(tmp_path: Path) -> None:
    """An empty environment should produce default endpoint and limits."""

    settings = RuntimeSettings.from_env({"CLOUDSDK_CONFIG": str(tmp_path)})

    assert settings.token_override is None
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.service_account_path is None
    assert settings.adc_path == tmp_path / "application_default_credentials.json"
    assert settings.timeout_ms == DEFAULT_TIMEOUT_MS
    assert settings.retries == DEFAULT_RETRIES
    assert settings.timeout_seconds == 30.0


def test_from_env_keeps_override_token_verbatim() -> None:
    """The override token should be kept as-is when non-empty after trimming."""

    settings = RuntimeSettings.from_env({"FAST_TTS_TOKEN": " tok "})

    assert settings.token_override == " tok "


def test_from_env_ignores_blank_override_token() -> None:
    """A whitespace-only override token should count as absent."""

    settings = RuntimeSettings.from_env({"FAST_TTS_TOKEN": "   "})

    assert settings.token_override is None


def test_from_env_reads_endpoint_key_path_and_provider_values() -> None:
    """Base URL, key path, and provider variables should be collected once."""

    settings = RuntimeSettings.from_env(
        {
            "FAST_TTS_BASE_URL": "http://127.0.0.1:8080/",
            "GOOGLE_APPLICATION_CREDENTIALS": "/keys/sa.json",
            "OPENAI_API_KEY": "sk-test",
            "DEEPGRAM_API_KEY": "  ",
            "UNRELATED": "value",
        }
    )

    assert settings.base_url == "http://127.0.0.1:8080"
    assert settings.service_account_path == Path("/keys/sa.json")
    assert settings.provider_value("OPENAI_API_KEY") == "sk-test"
    assert settings.provider_value("DEEPGRAM_API_KEY") is None
    assert "UNRELATED" not in settings.provider_env


def test_with_limits_applies_values_and_validates() -> None:
    """CLI limits should be applied on a copy and invalid values rejected."""

    settings = RuntimeSettings().with_limits(timeout_ms=1500, retries=0)

    assert settings.timeout_seconds == 1.5
    assert settings.retries == 0
    with pytest.raises(ConfigError, match="`timeout` must be a positive integer"):
        settings.with_limits(timeout_ms=0)
    with pytest.raises(ConfigError, match="`retries` must be a non-negative integer"):
        settings.with_limits(retries=-1)


def test_default_adc_path_uses_home_config_directory(tmp_path: Path) -> None:
    """Without `CLOUDSDK_CONFIG` the ADC file should live under `~/.config/gcloud`."""

    path = default_adc_path({}, home=tmp_path)

    assert path == tmp_path / ".config" / "gcloud" / "application_default_credentials.json"


def test_settings_repr_hides_secrets() -> None:
    """Settings repr should not expose the override token or provider keys."""

    settings = RuntimeSettings.from_env(
        {"FAST_TTS_TOKEN": "secret-token", "OPENAI_API_KEY": "sk-secret"}
    )

    assert "secret-token" not in repr(settings)
    assert "sk-secret" not in repr(settings)

"""Shared pytest fixtures for the full fast-tts test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from loguru import logger
import pytest
import requests

from tests.http_stub import HttpStub

_MANAGED_ENV_KEYS = (
    "FAST_TTS_TOKEN",
    "FAST_TTS_BASE_URL",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "CLOUDSDK_CONFIG",
    "APPDATA",
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
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove host credentials and point gcloud config at an empty directory."""

    for key in _MANAGED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    gcloud_dir = tmp_path / "gcloud-config"
    gcloud_dir.mkdir()
    monkeypatch.setenv("CLOUDSDK_CONFIG", str(gcloud_dir))


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks added by a test and return the package logger to silent."""

    yield
    logger.remove()
    logger.disable("fasttts")


@pytest.fixture
def http_stub(monkeypatch: pytest.MonkeyPatch) -> HttpStub:
    """Patch `requests.Session.request` with a recording route table."""

    stub = HttpStub()

    def _request(self: requests.Session, method: str, url: str, **kwargs: Any):
        return stub.handle(self, method, url, **kwargs)

    monkeypatch.setattr(requests.Session, "request", _request)
    return stub


@pytest.fixture(scope="session")
def rsa_private_key_pem() -> str:
    """Generate one PKCS#8 PEM RSA key for JWT signing tests."""

    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def service_account_file(tmp_path: Path, rsa_private_key_pem: str) -> Path:
    """Write a service-account key file that uses the default token URI."""

    path = tmp_path / "service-account.json"
    path.write_text(
        json.dumps(
            {
                "type": "service_account",
                "client_email": "tts-runner@example-project.iam.gserviceaccount.com",
                "private_key": rsa_private_key_pem,
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def adc_file(tmp_path: Path) -> Path:
    """Write application-default user credentials into the isolated gcloud dir."""

    path = tmp_path / "gcloud-config" / "application_default_credentials.json"
    path.write_text(
        json.dumps(
            {
                "type": "authorized_user",
                "client_id": "adc-client-id",
                "client_secret": "adc-client-secret",
                "refresh_token": "adc-refresh-token",
            }
        ),
        encoding="utf-8",
    )
    return path

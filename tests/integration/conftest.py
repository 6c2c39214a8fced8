"""Integration-test fixtures for deterministic provider behavior."""

from __future__ import annotations

import pytest

LOCAL_BASE_URL = "http://127.0.0.1:8765"


@pytest.fixture
def google_env(monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the primary provider at a loopback URL with an override token."""

    monkeypatch.setenv("FAST_TTS_TOKEN", "test-token")
    monkeypatch.setenv("FAST_TTS_BASE_URL", LOCAL_BASE_URL)
    return LOCAL_BASE_URL

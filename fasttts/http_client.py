"""Shared `requests` transport for provider and token-endpoint calls.

Responsibilities:
- Send one blocking HTTP request with a per-request timeout.
- Disable environment proxy settings for loopback base URLs so endpoint
  overrides are always honored.
- Normalize transport and HTTP failures into `HttpError` with concise,
  redacted provider messages.
- Decode JSON and base64 payloads into `ProviderError` on malformed content.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
import socket
from typing import Any, Mapping
from urllib.parse import urlsplit

import requests

from .errors import HttpError, ProviderError

_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
USER_AGENT = "fast-tts"


def is_loopback_url(url: str) -> bool:
    """Return whether a URL points at a loopback host."""

    hostname = urlsplit(url).hostname
    return hostname is not None and hostname.lower() in _LOOPBACK_HOSTS


class HttpTransport:
    """Minimal requests-based HTTP client shared by all adapters."""

    _MAX_PROVIDER_MESSAGE_CHARS = 180

    def __init__(self, *, timeout_seconds: float = 30.0) -> None:
        """Initialize transport settings."""

        self.timeout_seconds = timeout_seconds

    def request(
        self,
        method: str,
        url: str,
        *,
        label: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        form: Mapping[str, str] | None = None,
        data: bytes | str | None = None,
    ) -> bytes:
        """Execute one HTTP request and return the raw response body.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            label: Human-readable operation name used in error messages.

        Raises:
            HttpError: On transport failure or non-2xx status.
        """

        merged_headers = {"User-Agent": USER_AGENT}
        if headers:
            merged_headers.update(headers)

        session = requests.Session()
        session.trust_env = not is_loopback_url(url)
        try:
            with session:
                response = session.request(
                    method,
                    url,
                    headers=merged_headers,
                    params=params,
                    json=json_body,
                    data=form if form is not None else data,
                    timeout=self.timeout_seconds,
                )
                response.raise_for_status()
                return bytes(response.content)
        except requests.HTTPError as exc:
            raise self._http_error_to_http_error(exc, label) from exc
        except requests.RequestException as exc:
            failure_kind = self._classify_transport_failure(exc)
            if failure_kind == "timeout":
                detail = f"{label} timed out after {self.timeout_seconds:g}s."
            else:
                detail = f"{label} transport error: {self._short_message(str(exc))}"
            raise HttpError(detail, failure_kind=failure_kind) from exc

    def get(self, url: str, *, label: str, **kwargs: Any) -> bytes:
        """Send a GET request."""

        return self.request("GET", url, label=label, **kwargs)

    def post(self, url: str, *, label: str, **kwargs: Any) -> bytes:
        """Send a POST request."""

        return self.request("POST", url, label=label, **kwargs)

    @staticmethod
    def decode_json(payload: bytes, *, label: str) -> dict[str, Any]:
        """Decode a JSON object payload or raise `ProviderError`."""

        try:
            decoded = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ProviderError(f"{label} returned invalid JSON payload.") from exc
        if not isinstance(decoded, dict):
            raise ProviderError(f"{label} returned a non-object JSON payload.")
        return decoded

    @staticmethod
    def decode_base64(value: object, *, label: str) -> bytes:
        """Decode a standard base64 audio field or raise `ProviderError`."""

        if not isinstance(value, str):
            raise ProviderError(f"{label} audio field is not a base64 string.")
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ProviderError(f"failed decoding audio data from {label} response") from exc

    @staticmethod
    def _decode_error_body(exc: requests.HTTPError) -> str:
        """Decode an HTTP error body into a best-effort UTF-8 payload string."""

        response = exc.response
        if response is None:
            return ""
        return bytes(response.content or b"").decode("utf-8", errors="replace").strip()

    @classmethod
    def _redact_sensitive_tokens(cls, text: str) -> str:
        """Redact API-key-like tokens from provider error content."""

        redacted = re.sub(r"\bsk-[A-Za-z0-9_-]{8,}\b", "[redacted-key]", text)
        redacted = re.sub(r"\bAIza[0-9A-Za-z_-]{20,}\b", "[redacted-key]", redacted)
        redacted = re.sub(r"\bya29\.[A-Za-z0-9._-]+", "[redacted-token]", redacted)
        redacted = re.sub(
            r"(?i)bearer\s+[A-Za-z0-9._-]{12,}",
            "Bearer [redacted-token]",
            redacted,
        )
        redacted = re.sub(r"(?i)([?&]key=)[^&\s]+", r"\1[redacted-key]", redacted)
        return redacted

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize, redact, and cap user-facing provider message length."""

        compact = " ".join(cls._redact_sensitive_tokens(text).split())
        if len(compact) <= cls._MAX_PROVIDER_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_PROVIDER_MESSAGE_CHARS - 1]}..."

    @classmethod
    def _extract_provider_message(cls, body: str) -> str:
        """Extract a concise provider-facing message from an error body."""

        if not body:
            return ""

        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            return cls._short_message(body)

        message: str | None = None
        if isinstance(payload, dict):
            error_payload = payload.get("error")
            if isinstance(error_payload, dict):
                message_value = error_payload.get("message")
                if isinstance(message_value, str) and message_value.strip():
                    message = message_value.strip()
            elif isinstance(error_payload, str) and error_payload.strip():
                message = error_payload.strip()
            description = payload.get("error_description")
            if isinstance(description, str) and description.strip():
                message = f"{message}: {description.strip()}" if message else description.strip()

        return cls._short_message(message if message is not None else body)

    @staticmethod
    def _classify_transport_failure(reason: object) -> str:
        """Classify network-layer failures into deterministic diagnostic kinds."""

        if isinstance(reason, TimeoutError | socket.timeout | requests.Timeout):
            return "timeout"
        return "transport"

    @classmethod
    def _http_error_to_http_error(cls, exc: requests.HTTPError, label: str) -> HttpError:
        """Convert a requests HTTP error into a normalized `HttpError`."""

        status_code = exc.response.status_code if exc.response is not None else 0
        provider_message = cls._extract_provider_message(cls._decode_error_body(exc))
        if provider_message:
            detail = f"{label} failed (HTTP {status_code}): {provider_message}"
        else:
            detail = f"{label} failed (HTTP {status_code})."
        failure_kind = "auth" if status_code in {401, 403} else "http_error"
        return HttpError(detail, status_code=status_code, failure_kind=failure_kind)

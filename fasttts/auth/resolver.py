"""Bearer-token discovery for the primary provider.

Responsibilities:
- Resolve a bearer token in fixed order: override token, service-account key
  file, then cached application-default user credentials.
- Parse service-account and application-default credential files.
- Keep secrets out of logs and error messages.

Notes:
- A fresh token is fetched on every call; nothing is cached.
- Only the application-default step may fail softly and fall through.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable

from ..config import RuntimeSettings
from ..errors import AuthError, FastTTSError
from ..http_client import HttpTransport
from ..io.storage import read_text
from ..models.datatypes import (
    DEFAULT_TOKEN_URI,
    AuthorizedUserCredential,
    ServiceAccountKey,
)
from ..parsing import normalize_optional_string
from ..telemetry.logger import RunLogger
from .jwt_signer import sign_assertion
from .token_exchange import CLOUD_PLATFORM_SCOPE, TokenExchanger

NO_CREDENTIALS_MESSAGE = (
    "No Google credentials found. Set GOOGLE_APPLICATION_CREDENTIALS or run "
    "'gcloud auth application-default login'"
)


def _read_json_object(path: Path, label: str) -> dict[str, object]:
    """Read a credential JSON file and require an object root."""

    raw_text = read_text(path, label)
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise AuthError(f"{label} `{path}` is not valid JSON: {exc.msg}.") from exc
    if not isinstance(payload, dict):
        raise AuthError(f"{label} `{path}` must contain a JSON object.")
    return payload


def _required_field(payload: dict[str, object], key: str, label: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or normalize_optional_string(value) is None:
        raise AuthError(f"{label} is missing required field `{key}`.")
    return value


def load_service_account_key(path: Path) -> ServiceAccountKey:
    """Load a service-account JSON key file."""

    label = "service account key"
    payload = _read_json_object(path, label)
    token_uri = normalize_optional_string(payload.get("token_uri"))
    return ServiceAccountKey(
        client_email=_required_field(payload, "client_email", label),
        private_key=_required_field(payload, "private_key", label),
        token_uri=token_uri or DEFAULT_TOKEN_URI,
    )


def load_authorized_user_credential(path: Path) -> AuthorizedUserCredential:
    """Load a gcloud application-default-credentials JSON file."""

    label = "ADC file"
    payload = _read_json_object(path, label)
    return AuthorizedUserCredential(
        client_id=_required_field(payload, "client_id", label),
        client_secret=_required_field(payload, "client_secret", label),
        refresh_token=_required_field(payload, "refresh_token", label),
        credential_type=_required_field(payload, "type", label),
    )


class CredentialResolver:
    """Produce a bearer token for the primary provider from configured sources."""

    def __init__(
        self,
        settings: RuntimeSettings,
        exchanger: TokenExchanger | None = None,
        clock: Callable[[], float] = time.time,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.settings = settings
        self.exchanger = (
            exchanger
            if exchanger is not None
            else TokenExchanger(HttpTransport(timeout_seconds=settings.timeout_seconds))
        )
        self.clock = clock
        self.run_logger = run_logger if run_logger is not None else RunLogger()

    def resolve_token(self) -> str:
        """Return a bearer token or raise `AuthError` when none can be obtained."""

        if self.settings.token_override is not None:
            if normalize_optional_string(self.settings.token_override) is not None:
                self.run_logger.log_event("auth", "resolved", source="override")
                return self.settings.token_override

        if self.settings.service_account_path is not None:
            token = self.token_from_service_account(self.settings.service_account_path)
            self.run_logger.log_event("auth", "resolved", source="service_account")
            return token

        adc_path = self.settings.adc_path
        if adc_path is not None and adc_path.is_file():
            try:
                token = self.token_from_application_default(adc_path)
            except FastTTSError as exc:
                self.run_logger.log_event(
                    "auth",
                    "fallthrough",
                    level="WARNING",
                    source="application_default",
                    error_type=type(exc).__name__,
                )
            else:
                self.run_logger.log_event("auth", "resolved", source="application_default")
                return token

        raise AuthError(
            NO_CREDENTIALS_MESSAGE,
            reason="no_credentials",
            hint=(
                "Point GOOGLE_APPLICATION_CREDENTIALS at a service account JSON key, "
                "or run `gcloud auth application-default login`."
            ),
        )

    def token_from_service_account(self, path: Path) -> str:
        """Sign a JWT for a service-account key file and exchange it."""

        key = load_service_account_key(path)
        assertion = sign_assertion(
            key,
            scope=CLOUD_PLATFORM_SCOPE,
            audience=key.token_uri,
            issued_at=int(self.clock()),
        )
        return self.exchanger.exchange_jwt(key.token_uri, assertion)

    def token_from_application_default(self, path: Path) -> str:
        """Exchange cached application-default user credentials for a token."""

        credential = load_authorized_user_credential(path)
        return self.exchanger.exchange_refresh(
            credential.client_id,
            credential.client_secret,
            credential.refresh_token,
        )

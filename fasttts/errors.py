"""Domain exceptions for synthesis, credential, and CLI diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class FastTTSError(RuntimeError):
    """Base class for failures surfaced to CLI and tool callers."""

    kind = "error"

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        """Initialize an error with user-facing detail and optional hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class AuthError(FastTTSError):
    """Raised when no usable credential exists or a token exchange is rejected."""

    kind = "auth"

    def __init__(
        self,
        detail: str,
        *,
        reason: str = "exchange_rejected",
        hint: str | None = None,
    ) -> None:
        """Initialize an auth failure with a machine-readable reason."""

        super().__init__(detail, hint=hint)
        self.reason = reason


class CryptoError(FastTTSError):
    """Raised when private key material cannot be used for signing."""

    kind = "crypto"


class HttpError(FastTTSError):
    """Raised on transport failures or non-2xx responses."""

    kind = "http"

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        failure_kind: str = "http_error",
        hint: str | None = None,
    ) -> None:
        """Initialize HTTP failure metadata."""

        super().__init__(detail, hint=hint)
        self.status_code = status_code
        self.failure_kind = failure_kind


class ProviderError(FastTTSError):
    """Raised when a provider response has an unexpected shape."""

    kind = "provider"


class MissingCredentialError(FastTTSError):
    """Raised when a provider's required environment variable is absent."""

    kind = "missing_credential"

    def __init__(self, env_var: str, provider: str) -> None:
        super().__init__(
            f"{env_var} is required for provider {provider}",
            hint=f"Export `{env_var}` before selecting `--provider {provider}`.",
        )
        self.env_var = env_var
        self.provider = provider


class UnsupportedEncodingError(FastTTSError):
    """Raised when an encoding cannot be represented by a provider."""

    kind = "unsupported_encoding"

    def __init__(
        self,
        encoding: str,
        supported: Iterable[str],
        *,
        provider: str | None = None,
    ) -> None:
        self.encoding = encoding
        self.supported = tuple(supported)
        self.provider = provider
        alternatives = "/".join(self.supported)
        if provider is None:
            detail = f"unsupported encoding: {encoding}; use one of {alternatives}"
        else:
            detail = (
                f"provider {provider} does not support {encoding} encoding; "
                f"use {alternatives}"
            )
        super().__init__(detail)


class ProviderNotImplementedError(FastTTSError):
    """Raised when the selected provider has no request adapter."""

    kind = "not_implemented"

    def __init__(self, provider: str) -> None:
        super().__init__(
            f"provider {provider} not yet implemented",
            hint="Please open an issue with API details.",
        )
        self.provider = provider


class ExtensionMismatchError(FastTTSError):
    """Raised when the output path extension does not match the encoding."""

    kind = "extension_mismatch"

    def __init__(self, detail: str, *, path: Path, expected: str, actual: str | None) -> None:
        super().__init__(detail)
        self.path = path
        self.expected = expected
        self.actual = actual


class FileIOError(FastTTSError):
    """Raised on filesystem failures reading inputs or writing audio."""

    kind = "io"

    def __init__(self, detail: str, *, path: Path) -> None:
        super().__init__(detail)
        self.path = path


class ConfigError(FastTTSError):
    """Raised when settings or a bulk config file contain invalid values."""

    kind = "config"


class BatchError(FastTTSError):
    """Raised when a bulk item fails; remaining items are not processed."""

    kind = "batch"

    def __init__(self, item_number: int, cause: Exception) -> None:
        cause_detail = cause.detail if isinstance(cause, FastTTSError) else str(cause)
        super().__init__(
            f"bulk item {item_number} failed: {cause_detail}",
            hint=cause.hint if isinstance(cause, FastTTSError) else None,
        )
        self.item_number = item_number
        self.cause = cause

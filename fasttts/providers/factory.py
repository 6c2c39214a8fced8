"""Provider factory for request adapters.

Responsibilities:
- Resolve provider identifiers to concrete adapter classes.
- Keep callers independent from concrete adapter construction.

Notes:
- Adding a provider means adding an adapter class and one registry entry.
- Selectable providers without a registry entry fail with
  `ProviderNotImplementedError`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable

from ..config import RuntimeSettings
from ..errors import ConfigError, ProviderNotImplementedError
from ..http_client import HttpTransport
from .azure import AzureTTSProvider
from .base import ProviderId, TTSProvider
from .deepgram import DeepgramTTSProvider
from .elevenlabs import ElevenLabsTTSProvider
from .gemini import GeminiTTSProvider
from .google import GoogleTTSProvider
from .openai import OpenAITTSProvider

PROVIDER_REGISTRY = MappingProxyType(
    {
        ProviderId.GOOGLE: GoogleTTSProvider,
        ProviderId.OPENAI: OpenAITTSProvider,
        ProviderId.ELEVENLABS: ElevenLabsTTSProvider,
        ProviderId.DEEPGRAM: DeepgramTTSProvider,
        ProviderId.AZURE: AzureTTSProvider,
        ProviderId.GEMINI: GeminiTTSProvider,
    }
)


def parse_provider_id(value: str | ProviderId) -> ProviderId:
    """Parse a provider selector case-insensitively."""

    if isinstance(value, ProviderId):
        return value
    token = str(value).strip().lower()
    try:
        return ProviderId(token)
    except ValueError as exc:
        supported = ", ".join(provider.value for provider in ProviderId)
        raise ConfigError(f"Unknown provider `{value}`; supported: {supported}.") from exc


class ProviderFactory:
    """Factory for provider adapters used by the synthesis service."""

    @staticmethod
    def create(
        provider_id: str | ProviderId,
        settings: RuntimeSettings,
        transport: HttpTransport | None = None,
    ) -> TTSProvider:
        """Create an adapter for a provider identifier."""

        resolved = parse_provider_id(provider_id)
        provider_class = PROVIDER_REGISTRY.get(resolved)
        if provider_class is None:
            raise ProviderNotImplementedError(resolved.value)
        return provider_class(settings, transport=transport)

    @staticmethod
    def create_primary(
        settings: RuntimeSettings,
        transport: HttpTransport | None = None,
        token_source: Callable[[], str] | None = None,
    ) -> GoogleTTSProvider:
        """Create the primary provider adapter, which also lists voices."""

        return GoogleTTSProvider(settings, transport=transport, token_source=token_source)

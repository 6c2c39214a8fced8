"""Text-to-speech request adapters.

This package contains one adapter per provider behind the `TTSProvider`
protocol, plus the factory that selects an adapter by provider id.
"""

from .base import ProviderId, TTSProvider
from .factory import PROVIDER_REGISTRY, ProviderFactory, parse_provider_id
from .google import GoogleTTSProvider, build_synthesize_request

__all__ = [
    "PROVIDER_REGISTRY",
    "GoogleTTSProvider",
    "ProviderFactory",
    "ProviderId",
    "TTSProvider",
    "build_synthesize_request",
    "parse_provider_id",
]

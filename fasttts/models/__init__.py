"""Shared typed data models for fast-tts.

This package contains dataclasses used across auth, provider, and batch
modules to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    DEFAULT_TOKEN_URI,
    AuthorizedUserCredential,
    Gender,
    ServiceAccountKey,
    SynthesisRequestParams,
    VoiceInfo,
    parse_gender,
)

__all__ = [
    "DEFAULT_TOKEN_URI",
    "AuthorizedUserCredential",
    "Gender",
    "ServiceAccountKey",
    "SynthesisRequestParams",
    "VoiceInfo",
    "parse_gender",
]

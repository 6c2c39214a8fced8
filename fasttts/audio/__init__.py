"""Audio encoding policy.

This package maps requested encodings to provider wire names and output
file extensions.
"""

from .encoding import (
    ENCODING_POLICY,
    AudioEncoding,
    EncodingRule,
    extension_for,
    extension_for_name,
    parse_encoding,
    wire_name_for,
)

__all__ = [
    "ENCODING_POLICY",
    "AudioEncoding",
    "EncodingRule",
    "extension_for",
    "extension_for_name",
    "parse_encoding",
    "wire_name_for",
]

"""Filesystem I/O for fast-tts.

This package validates output paths and writes synthesized audio.
"""

from .storage import read_text, validate_extension, write_output

__all__ = ["read_text", "validate_extension", "write_output"]

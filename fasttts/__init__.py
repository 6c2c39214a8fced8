"""Top-level package for fast-tts.

This package converts text into synthesized speech audio files by calling
Google Cloud Text-to-Speech or one of several secondary provider APIs. The
main programmatic entry point is `SynthesisService`; bulk runs go through
`fasttts.batch.BatchRunner`.
"""

from loguru import logger

__all__ = ["__version__"]

__version__ = "0.1.0"

logger.disable("fasttts")

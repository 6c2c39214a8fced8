"""Bulk synthesis from a JSON or YAML configuration file."""

from .config import BulkConfig, BulkConfigLoader, BulkDefaults, BulkItem
from .runner import BatchRunner, derive_output_path, resolve_effective_params

__all__ = [
    "BatchRunner",
    "BulkConfig",
    "BulkConfigLoader",
    "BulkDefaults",
    "BulkItem",
    "derive_output_path",
    "resolve_effective_params",
]

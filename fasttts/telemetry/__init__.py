"""Telemetry and observability helpers.

This package emits structured run events for synthesis diagnostics.
"""

from .logger import RunLogger, configure_run_logging

__all__ = ["RunLogger", "configure_run_logging"]

"""Errors raised while reading blocksettings configuration."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when an environment setting cannot be parsed."""

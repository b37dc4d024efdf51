"""
Global configuration for the fixture generator.

This module contains environment-specific settings and the fixed limits of
the key-value universe.
"""

import os
from typing import Final

_SUPPORTED_LOG_LEVELS: list[str] = ["debug", "info", "warning", "error"]

TESTGEN_LOG_LEVEL = os.environ.get("TESTGEN_LOG_LEVEL", "warning").lower()
"""Log level used when `--verbose` is not given. Defaults to 'warning'."""

if TESTGEN_LOG_LEVEL not in _SUPPORTED_LOG_LEVELS:
    raise ValueError(
        f"Invalid TESTGEN_LOG_LEVEL environment variable: '{TESTGEN_LOG_LEVEL}'. "
        f"Supported values: {_SUPPORTED_LOG_LEVELS}"
    )

DEFAULT_UNIVERSE_SIZE: Final = 400
"""Number of entries in the universe when the CLI is given no size."""

MAX_UNIVERSE_SIZE: Final = 1 << 16
"""Largest supported universe; keys are checked for collisions up to here."""

"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Tests expect a quiet stderr unless they ask for --verbose, whatever the
# developer exports.
os.environ["TESTGEN_LOG_LEVEL"] = "warning"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")

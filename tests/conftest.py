# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Keep tests independent of a developer's .env and away from real backends.
# This must happen before blogdoc is imported anywhere
os.environ.setdefault("STORAGE_PROVIDER", "local")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("SITE_KEY", "demo")

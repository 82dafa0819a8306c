"""Shared fixtures for memoria-common tests."""

from __future__ import annotations

import os

# Set env vars before any memoria_common settings are read.
os.environ.setdefault("MEMORIA_LOG_LEVEL", "INFO")

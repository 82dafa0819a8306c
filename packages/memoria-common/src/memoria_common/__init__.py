"""
memoria-common: Shared library for Memoria.

Provides common data models, configuration management, structured
logging, and Prometheus metrics helpers used by the alignment engine
and the dictation service.
"""

from memoria_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]

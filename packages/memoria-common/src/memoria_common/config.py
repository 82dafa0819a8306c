"""
Environment-based configuration management for Memoria.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The dictation service and the alignment API
import their settings from this module; the alignment engine itself takes
explicit arguments and never reads the environment.

All environment variables are prefixed with ``MEMORIA_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_THRESHOLDS: tuple[int, ...] = (6, 5, 4, 3, 2, 1)
DEFAULT_FINALIZE_DROP_CHARS: int = 25
DEFAULT_STOP_COMMAND: str = "terminate"


class Settings(BaseSettings):
    """Central configuration loaded from ``MEMORIA_``-prefixed environment variables.

    Attributes:
        thresholds: Descending minimum run lengths, one aligner pass each.
        finalize_drop_chars: Character-count drop between two partial
            transcripts that marks the earlier one as an implicitly
            finalized segment.
        stop_command: Spoken word that ends a dictation session when a
            transcript ends with it. Empty disables the command.
        event_queue_size: Bound of the per-session event queue (0 = unbounded).
        api_host: Bind address for the dictation service.
        api_port: Bind port for the dictation service.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON (otherwise console format).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMORIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Alignment ──
    thresholds: list[int] = Field(
        default_factory=lambda: list(DEFAULT_THRESHOLDS),
        description="Descending minimum run lengths for the aligner passes.",
    )

    # ── Transcript accumulation ──
    finalize_drop_chars: int = Field(
        default=DEFAULT_FINALIZE_DROP_CHARS,
        ge=1,
        description="Partial-transcript shrink that implies a finalized segment.",
    )
    stop_command: str = Field(
        default=DEFAULT_STOP_COMMAND,
        description="Spoken stop word; empty string disables it.",
    )
    event_queue_size: int = Field(
        default=0,
        ge=0,
        description="Per-session event queue bound (0 = unbounded).",
    )

    # ── API ──
    api_host: str = Field(default="0.0.0.0", description="Service bind address.")
    api_port: int = Field(default=8000, ge=1, le=65535, description="Service bind port.")

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Emit JSON log lines.")

    @field_validator("thresholds")
    @classmethod
    def _check_thresholds(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("thresholds must not be empty")
        if any(t < 1 for t in value):
            raise ValueError("thresholds must all be >= 1")
        if any(a <= b for a, b in zip(value, value[1:])):
            raise ValueError("thresholds must be strictly descending")
        if value[-1] != 1:
            raise ValueError("thresholds must end with 1")
        return value

    @field_validator("stop_command")
    @classmethod
    def _normalise_stop_command(cls, value: str) -> str:
        return value.strip().lower()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()

"""
Shared Pydantic data models for Memoria.

This package contains the engine's value types (tokens, range pairs,
annotated spans) and the dictation-side models (transcript events,
saved reference texts).
"""

from memoria_common.models.annotation import (
    AlignmentResult,
    AlignmentStats,
    AnnotatedSpan,
    SpanTag,
)
from memoria_common.models.memory_text import MemoryText
from memoria_common.models.range_pair import RangePair
from memoria_common.models.token import Token
from memoria_common.models.transcript import ProviderError, TranscriptUpdate

__all__ = [
    "AlignmentResult",
    "AlignmentStats",
    "AnnotatedSpan",
    "MemoryText",
    "ProviderError",
    "RangePair",
    "SpanTag",
    "Token",
    "TranscriptUpdate",
]

"""
Prometheus metrics helpers for Memoria.

Provides shared metric definitions for exposing Prometheus-format
metrics from the dictation service: evaluation counters, evaluation
latency, and transcript event counters.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

evaluations_total = Counter(
    "memoria_evaluations_total",
    "Alignment evaluations requested",
    ["outcome"],
)
evaluation_duration_seconds = Histogram(
    "memoria_evaluation_duration_seconds",
    "Time spent tokenizing, aligning and rendering one evaluation",
)
transcript_events_total = Counter(
    "memoria_transcript_events_total",
    "Transcript update events applied to an accumulator",
    ["kind"],
)

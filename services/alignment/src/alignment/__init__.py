"""
Memoria Alignment Engine.

Compares a spoken (candidate) rendition of a reference (master) text with
the original: tokenization, multi-pass greedy run matching, consolidation
of match/mismatch spans, and rendering of the annotated master text.
"""

from alignment.aligner import align
from alignment.annotator import render, to_markup, to_plain_text
from alignment.consolidator import consolidate
from alignment.engine import evaluate
from alignment.tokenizer import tokenize

__all__ = [
    "align",
    "consolidate",
    "evaluate",
    "render",
    "to_markup",
    "to_plain_text",
    "tokenize",
]

"""Utility functions."""

from .assembler import parse_nodes_to_tokens, populate_masks
from .text_normalizer import SpanNormalizer, prepare_span

__all__ = [
    "parse_nodes_to_tokens",
    "populate_masks",
    "SpanNormalizer",
    "prepare_span",
]

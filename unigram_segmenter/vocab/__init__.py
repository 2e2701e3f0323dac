"""Vocabulary loading and token/id bookkeeping."""

from .base_vocab import BaseVocab
from .loaders import (
    load_pieces,
    load_values,
    read_flat_file,
    read_json_file,
    read_sentencepiece_model,
    read_sentencepiece_vocab,
    resolve_format,
)
from .special_tokens import SpecialTokenMap

__all__ = [
    "BaseVocab",
    "SpecialTokenMap",
    "load_pieces",
    "load_values",
    "read_flat_file",
    "read_json_file",
    "read_sentencepiece_model",
    "read_sentencepiece_vocab",
    "resolve_format",
]

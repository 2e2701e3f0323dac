"""Unigram segmenter - subword tokenization over a unigram language model vocabulary."""

__version__ = "0.1.0"

from .config import Config
from .engines import Trie, UnigramSegmenter, WORD_START_MARKER
from .models import InputSpan, Mask, MatchNode, Offset, Token
from .pipeline import TokenizationPipeline
from .tokenizer import UnigramTokenizer
from .vocab import BaseVocab, SpecialTokenMap, load_pieces

__all__ = [
    "Config",
    "Trie",
    "UnigramSegmenter",
    "WORD_START_MARKER",
    "InputSpan",
    "Mask",
    "MatchNode",
    "Offset",
    "Token",
    "TokenizationPipeline",
    "UnigramTokenizer",
    "BaseVocab",
    "SpecialTokenMap",
    "load_pieces",
]

"""Segmentation engines."""

from .base import SegmentationEngine, WORD_START_MARKER, UNKNOWN_PIECE_ID, MIN_SCORE
from .trie import Trie, TrieNode
from .unigram_engine import UnigramSegmenter

__all__ = [
    "SegmentationEngine",
    "WORD_START_MARKER",
    "UNKNOWN_PIECE_ID",
    "MIN_SCORE",
    "Trie",
    "TrieNode",
    "UnigramSegmenter",
]

"""Base classes and constants for segmentation engines."""

import sys
from abc import ABC, abstractmethod

from ..models import InputSpan, MatchNode


# SentencePiece word boundary marker
WORD_START_MARKER = "▁"  # ▁ (lower one eighth block)

# Piece id given to characters no vocabulary piece covers
UNKNOWN_PIECE_ID = 0

# Minimum finite score; unknown fallback nodes carry this value
MIN_SCORE = -sys.float_info.max


class SegmentationEngine(ABC):
    """Base class for segmentation engines."""

    @abstractmethod
    def segment(self, span: InputSpan) -> list[MatchNode]:
        """Segment a span into vocabulary matches.

        Args:
            span: Input span with per-character source offsets

        Returns:
            Ordered list of MatchNode covering the whole span
        """
        pass

    def segment_with_indices(self, span: InputSpan) -> list[tuple[str, int, int]]:
        """Segment a span and return segments with their indices.

        Args:
            span: Input span to segment

        Returns:
            List of (segment_text, start_index, end_index) tuples, indices in
            codepoints within the span
        """
        return [(node.text, node.start_pos, node.end_pos) for node in self.segment(span)]

"""Unigram language model segmentation engine (Viterbi over a piece trie)."""

import math
from typing import Optional

from ..errors import (
    EmptySpanError,
    EmptyVocabularyError,
    MalformedOffsetsError,
    NoPathFoundError,
)
from ..models import InputSpan, MatchNode
from .base import MIN_SCORE, UNKNOWN_PIECE_ID, SegmentationEngine
from .trie import Trie


class UnigramSegmenter(SegmentationEngine):
    """Segmentation engine choosing the maximum-score piece sequence."""

    def __init__(self, trie: Trie):
        """Initialize unigram segmenter.

        Args:
            trie: Frozen trie of vocabulary pieces
        """
        if trie is None or len(trie) == 0:
            raise EmptyVocabularyError("Segmenter requires a non-empty vocabulary trie")
        self.trie = trie

    def decode_forward(self, span: InputSpan) -> list[Optional[MatchNode]]:
        """Run the forward pass over a span.

        Args:
            span: Input span

        Returns:
            List of length ``len(span.text) + 1``; entry ``p`` is the best node
            ending at position ``p`` (entry 0 is always None)
        """
        text = span.text
        n = len(text)
        if n == 0:
            raise EmptySpanError("Cannot segment an empty span")
        if len(span.original_offsets) < n:
            raise MalformedOffsetsError(
                f"Span has {n} characters but only {len(span.original_offsets)} offsets"
            )

        offsets = span.original_offsets
        best_nodes: list[Optional[MatchNode]] = [None] * (n + 1)
        best_scores = [-math.inf] * (n + 1)
        best_scores[0] = 0.0

        for start in range(n):
            if best_scores[start] == -math.inf:
                continue

            for piece in self.trie.common_prefix_search(text, start):
                end = start + piece.length
                local_score = best_scores[start] + piece.score
                if local_score > best_scores[end]:
                    best_nodes[end] = MatchNode(
                        text=text[start:end],
                        score=local_score,
                        piece_id=piece.piece_id,
                        start_pos=start,
                        end_pos=end,
                        original_offsets=list(offsets[start:end]),
                    )
                    best_scores[end] = local_score

            # No piece advances by one character: emit an unknown node and
            # restart scoring from zero after it.
            if best_scores[start + 1] <= MIN_SCORE:
                best_nodes[start + 1] = MatchNode(
                    text=text[start],
                    score=MIN_SCORE,
                    piece_id=UNKNOWN_PIECE_ID,
                    start_pos=start,
                    end_pos=start + 1,
                    original_offsets=[offsets[start]],
                )
                best_scores[start + 1] = 0.0

        return best_nodes

    def decode_backward(self, nodes: list[Optional[MatchNode]]) -> list[MatchNode]:
        """Reconstruct the best path from the forward pass output.

        Args:
            nodes: Output of ``decode_forward``

        Returns:
            MatchNode sequence in left-to-right order
        """
        if not nodes or nodes[-1] is None:
            raise NoPathFoundError("Forward pass did not reach the end of the span")

        best_sequence = []
        next_node = nodes[-1]
        while next_node is not None:
            best_sequence.append(next_node)
            next_node = nodes[next_node.start_pos]

        best_sequence.reverse()
        return best_sequence

    def segment(self, span: InputSpan) -> list[MatchNode]:
        """Segment a span into its maximum-score piece sequence.

        Args:
            span: Input span

        Returns:
            Ordered list of MatchNode covering the whole span
        """
        return self.decode_backward(self.decode_forward(span))

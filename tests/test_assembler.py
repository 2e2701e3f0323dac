"""
Tests for token assembly: unknown-run merging and mask classification.
"""

import copy

import pytest

from unigram_segmenter.models import InputSpan, Mask, MatchNode, Offset, Token
from unigram_segmenter.utils.assembler import parse_nodes_to_tokens, populate_masks


def make_node(text: str, piece_id: int, start: int) -> MatchNode:
    end = start + len(text)
    return MatchNode(
        text=text,
        score=-1.0,
        piece_id=piece_id,
        start_pos=start,
        end_pos=end,
        original_offsets=list(range(start, end)),
    )


def make_path(*pieces: tuple[str, int]) -> list[MatchNode]:
    nodes = []
    position = 0
    for text, piece_id in pieces:
        nodes.append(make_node(text, piece_id, position))
        position += len(text)
    return nodes


class TestMerge:
    """Tests for coalescing unknown runs."""

    def test_unknown_run_becomes_one_token(self):
        nodes = make_path(("▁ab", 5), ("z", 0), ("z", 0), ("z", 0), ("▁c", 6))

        tokens = parse_nodes_to_tokens(nodes)

        assert [token.text for token in tokens] == ["▁ab", "zzz", "▁c"]
        assert tokens[1].mask is Mask.UNKNOWN
        assert tokens[1].original_offsets == [3, 4, 5]

    def test_separate_runs_stay_separate(self):
        nodes = make_path(("z", 0), ("▁c", 6), ("q", 0), ("q", 0))

        tokens = parse_nodes_to_tokens(nodes)

        assert [token.text for token in tokens] == ["z", "▁c", "qq"]
        assert [token.mask for token in tokens] == [Mask.UNKNOWN, Mask.NONE, Mask.UNKNOWN]

    def test_offsets_round_trip(self):
        """Flattened token offsets equal the offsets of the path."""
        nodes = make_path(("▁un", 1), ("x", 0), ("y", 0), ("able", 2), ("!", 0))

        tokens = parse_nodes_to_tokens(nodes)

        flattened = [o for token in tokens for o in token.original_offsets]
        assert flattened == [o for node in nodes for o in node.original_offsets]
        assert all(token.offset == Offset(0, 0) for token in tokens)

    def test_input_nodes_are_not_modified(self):
        nodes = make_path(("z", 0), ("z", 0))

        parse_nodes_to_tokens(nodes)

        assert nodes[0].text == "z"
        assert nodes[0].original_offsets == [0]


class TestMasks:
    """Tests for structural mask classification."""

    def test_word_start_and_continuation(self):
        tokens = parse_nodes_to_tokens(make_path(("▁un", 1), ("able", 2)))

        assert [token.mask for token in tokens] == [Mask.NONE, Mask.CONTINUATION]

    def test_leading_piece_without_marker_is_continuation(self):
        tokens = parse_nodes_to_tokens(make_path(("able", 2),))

        assert tokens[0].mask is Mask.CONTINUATION

    def test_unknown_punctuation_is_punctuation(self):
        """Single punctuation characters are classified whether or not they are pieces."""
        unknown = parse_nodes_to_tokens(make_path((".", 0),))
        known = parse_nodes_to_tokens(make_path((".", 9),))

        assert len(unknown) == 1
        assert unknown[0].mask is Mask.PUNCTUATION
        assert known[0].mask is Mask.PUNCTUATION

    def test_piece_after_punctuation_is_not_continuation(self):
        tokens = parse_nodes_to_tokens(make_path(("▁a", 1), (",", 2), ("b", 3), ("c", 4)))

        assert [token.mask for token in tokens] == [
            Mask.NONE,
            Mask.PUNCTUATION,
            Mask.NONE,
            Mask.CONTINUATION,
        ]

    def test_whitespace_is_remembered_as_punctuation(self):
        tokens = parse_nodes_to_tokens(make_path(("▁a", 1), (" ", 2), ("b", 3)))

        assert [token.mask for token in tokens] == [Mask.NONE, Mask.WHITESPACE, Mask.NONE]

    def test_piece_after_unknown_is_continuation(self):
        tokens = parse_nodes_to_tokens(make_path(("▁a", 1), ("z", 0), ("z", 0), ("ble", 3)))

        assert [token.mask for token in tokens] == [
            Mask.NONE,
            Mask.UNKNOWN,
            Mask.CONTINUATION,
        ]

    def test_custom_marker(self):
        tokens = parse_nodes_to_tokens(make_path(("#un", 1), ("able", 2)), word_start_marker="#")

        assert [token.mask for token in tokens] == [Mask.NONE, Mask.CONTINUATION]

    def test_reclassification_is_idempotent(self):
        nodes = make_path(
            ("▁a", 1), ("z", 0), ("z", 0), (",", 2), ("b", 3), (" ", 4),
            ("c", 5), ("d", 6), (".", 0), ("▁e", 7),
        )
        tokens = parse_nodes_to_tokens(nodes)
        first = [token.mask for token in tokens]

        again = copy.deepcopy(tokens)
        populate_masks(again)

        assert [token.mask for token in again] == first


def test_tokens_can_be_built_from_plain_spans(segmenter):
    """Segmenter output feeds straight into assembly."""
    nodes = segmenter.segment(InputSpan.from_text("zz"))

    tokens = parse_nodes_to_tokens(nodes)

    assert len(tokens) == 1
    assert tokens[0] == Token(text="zz", original_offsets=[0, 1], mask=Mask.UNKNOWN)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

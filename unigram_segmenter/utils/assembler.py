"""Turn segmenter output into tokens: merge unknown runs and assign masks."""

import unicodedata

from ..engines.base import UNKNOWN_PIECE_ID, WORD_START_MARKER
from ..models import Mask, MatchNode, Offset, Token


def is_punctuation(character: str) -> bool:
    """Return True for characters in a Unicode punctuation category (P*)."""
    return unicodedata.category(character).startswith("P")


def parse_nodes_to_tokens(
    nodes: list[MatchNode],
    word_start_marker: str = WORD_START_MARKER,
) -> list[Token]:
    """Convert a segmentation path into masked tokens.

    Consecutive unknown nodes are coalesced into a single Unknown token whose
    text and original offsets are the concatenation of the run.

    Args:
        nodes: Path returned by the segmenter
        word_start_marker: Marker prefixed to pieces that begin a word

    Returns:
        Tokens covering the same text as ``nodes``
    """
    output: list[Token] = []

    for node in nodes:
        is_unknown = node.piece_id == UNKNOWN_PIECE_ID
        if is_unknown and output and output[-1].mask is Mask.UNKNOWN:
            previous = output[-1]
            previous.text += node.text
            previous.original_offsets.extend(node.original_offsets)
            continue

        output.append(
            Token(
                text=node.text,
                offset=Offset(0, 0),
                original_offsets=list(node.original_offsets),
                mask=Mask.UNKNOWN if is_unknown else Mask.NONE,
            )
        )

    populate_masks(output, word_start_marker)
    return output


def populate_masks(tokens: list[Token], word_start_marker: str = WORD_START_MARKER) -> None:
    """Assign structural masks in place.

    The pass remembers the mask of the previous token: a piece without the
    word start marker is a continuation unless it follows punctuation or
    whitespace. Whitespace is remembered as punctuation.

    Args:
        tokens: Tokens to classify
        word_start_marker: Marker prefixed to pieces that begin a word
    """
    previous_mask = Mask.NONE

    for token in tokens:
        if len(token.text) == 1:
            character = token.text
            if is_punctuation(character):
                token.mask = Mask.PUNCTUATION
                previous_mask = Mask.PUNCTUATION
                continue
            if character.isspace():
                token.mask = Mask.WHITESPACE
                previous_mask = Mask.PUNCTUATION
                continue

        if token.mask is Mask.UNKNOWN:
            previous_mask = Mask.UNKNOWN
        elif not token.text.startswith(word_start_marker) and previous_mask not in (
            Mask.PUNCTUATION,
            Mask.WHITESPACE,
        ):
            token.mask = Mask.CONTINUATION
            previous_mask = Mask.CONTINUATION
        else:
            token.mask = Mask.NONE
            previous_mask = Mask.NONE

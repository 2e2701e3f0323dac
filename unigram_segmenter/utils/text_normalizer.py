"""Prepare raw text for segmentation while tracking source offsets."""

from ..engines.base import WORD_START_MARKER
from ..errors import EmptySpanError
from ..models import InputSpan


class SpanNormalizer:
    """Normalize raw text into an InputSpan using the SentencePiece convention."""

    def __init__(
        self,
        lowercase: bool = False,
        add_prefix_marker: bool = True,
        word_start_marker: str = WORD_START_MARKER,
    ):
        """
        Initialize the normalizer.

        Args:
            lowercase: Lowercase every character.
            add_prefix_marker: Prepend a word start marker to the text.
            word_start_marker: Character that replaces whitespace.
        """
        if len(word_start_marker) != 1:
            raise ValueError(
                f"Word start marker must be a single character, got {word_start_marker!r}"
            )
        self.lowercase = lowercase
        self.add_prefix_marker = add_prefix_marker
        self.word_start_marker = word_start_marker

    def normalize(self, text: str, start_offset: int = 0) -> InputSpan:
        """
        Build an InputSpan from raw text.

        Every whitespace character becomes one word start marker. When a
        character expands under lowercasing, each resulting character keeps
        the offset of its source character.

        Args:
            text: Raw text.
            start_offset: Offset of ``text`` within the source document.

        Returns:
            InputSpan whose offsets point back into the source document.

        Raises:
            EmptySpanError: If ``text`` is empty.
        """
        if not text:
            raise EmptySpanError("Cannot prepare a span from empty text")

        characters = []
        offsets = []

        if self.add_prefix_marker and not text[0].isspace():
            characters.append(self.word_start_marker)
            offsets.append(start_offset)

        for index, character in enumerate(text, start_offset):
            if character.isspace():
                characters.append(self.word_start_marker)
                offsets.append(index)
                continue

            replacement = character.lower() if self.lowercase else character
            for produced in replacement:
                characters.append(produced)
                offsets.append(index)

        return InputSpan(text="".join(characters), original_offsets=offsets)


def prepare_span(
    text: str,
    *,
    lowercase: bool = False,
    add_prefix_marker: bool = True,
    word_start_marker: str = WORD_START_MARKER,
) -> InputSpan:
    """
    Convenience function for preparing a span from raw text.

    Args:
        text: Raw text.
        lowercase: Lowercase every character.
        add_prefix_marker: Prepend a word start marker to the text.
        word_start_marker: Character that replaces whitespace.

    Returns:
        Normalized InputSpan.
    """
    normalizer = SpanNormalizer(
        lowercase=lowercase,
        add_prefix_marker=add_prefix_marker,
        word_start_marker=word_start_marker,
    )
    return normalizer.normalize(text)

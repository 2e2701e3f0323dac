"""Data models for the unigram segmentation pipeline."""

from dataclasses import dataclass, field
from enum import Enum


class Mask(Enum):
    """Structural role of an output token."""

    NONE = "none"
    UNKNOWN = "unknown"
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"
    CONTINUATION = "continuation"


@dataclass
class Offset:
    """Start/end position of a token within assembled output."""

    begin: int = 0
    end: int = 0


@dataclass
class InputSpan:
    """Text handed to the segmenter, with per-character source offsets.

    ``original_offsets`` may be longer than ``text``; only the first
    ``len(text)`` entries are read.
    """

    text: str
    original_offsets: list[int]

    @classmethod
    def from_text(cls, text: str, start: int = 0) -> "InputSpan":
        """Build a span whose offsets are the identity mapping from ``start``."""
        return cls(text=text, original_offsets=list(range(start, start + len(text))))


@dataclass
class MatchNode:
    """A segment accepted by the forward pass."""

    text: str
    score: float  # cumulative path score, not the piece score
    piece_id: int
    start_pos: int
    end_pos: int
    original_offsets: list[int]

    @property
    def length(self) -> int:
        return self.end_pos - self.start_pos


@dataclass
class Token:
    """Final output unit of the tokenizer."""

    text: str
    offset: Offset = field(default_factory=Offset)
    original_offsets: list[int] = field(default_factory=list)
    mask: Mask = Mask.NONE

    @property
    def original_start(self) -> int | None:
        """First source position covered by the token."""
        return self.original_offsets[0] if self.original_offsets else None

    @property
    def original_end(self) -> int | None:
        """Source position just past the last character of the token."""
        return self.original_offsets[-1] + 1 if self.original_offsets else None

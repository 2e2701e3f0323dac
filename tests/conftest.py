"""Shared fixtures for the tokenizer tests."""

from pathlib import Path

import pytest

from unigram_segmenter.engines import Trie, UnigramSegmenter


# Piece ids are positions; "<unk>" takes id 0 as in SentencePiece models.
WORD_PIECES = [
    ("<unk>", 0.0),
    ("▁un", -1.0),
    ("able", -1.2),
    ("ly", -1.5),
    ("▁hello", -2.0),
    ("▁world", -2.5),
    ("▁", -3.0),
    ("u", -4.0),
    ("n", -4.0),
    ("a", -4.0),
    ("b", -4.0),
    ("l", -4.0),
    ("e", -4.0),
    (".", -3.5),
]


def write_vocab_file(path: Path, pieces: list[tuple[str, float]]) -> Path:
    """Write pieces in SentencePiece ``.vocab`` format."""
    with open(path, "w", encoding="utf-8") as f:
        for piece, score in pieces:
            f.write(f"{piece}\t{score}\n")
    return path


@pytest.fixture
def word_pieces():
    return list(WORD_PIECES)


@pytest.fixture
def word_trie(word_pieces):
    return Trie.from_pieces(word_pieces)


@pytest.fixture
def segmenter(word_trie):
    return UnigramSegmenter(word_trie)


@pytest.fixture
def vocab_file(tmp_path, word_pieces):
    return write_vocab_file(tmp_path / "test.vocab", word_pieces)


@pytest.fixture
def write_vocab():
    return write_vocab_file

"""Vocabulary file readers.

Supported formats:

- ``flat``: one token per line, id = line number.
- ``json``: a JSON object mapping tokens to ids.
- ``sentencepiece_vocab``: tab-separated ``piece<TAB>score`` lines, as written
  next to a SentencePiece model (``.vocab``).
- ``sentencepiece_model``: a serialized SentencePiece model (``.model``).
"""

import csv
import json
import logging
from pathlib import Path
from typing import Literal

import pandas as pd
import sentencepiece as spm

from ..errors import MalformedVocabularyError, VocabFileNotFoundError

logger = logging.getLogger(__name__)

VocabFormat = Literal["auto", "flat", "json", "sentencepiece_vocab", "sentencepiece_model"]

SUFFIX_FORMATS = {
    ".txt": "flat",
    ".json": "json",
    ".vocab": "sentencepiece_vocab",
    ".tsv": "sentencepiece_vocab",
    ".model": "sentencepiece_model",
}


def _check_exists(path: Path) -> None:
    if not path.exists():
        raise VocabFileNotFoundError(f"{path} vocabulary file not found")


def _check_unique(pieces: list[str], path: Path) -> None:
    """Reject duplicate pieces, which would silently overwrite trie entries."""
    seen = set()
    for piece in pieces:
        if piece in seen:
            raise MalformedVocabularyError(f"Duplicate piece {piece!r} in {path}")
        seen.add(piece)


def resolve_format(path: str | Path, fmt: VocabFormat = "auto") -> str:
    """Return the concrete format of a vocabulary file.

    Args:
        path: Vocabulary file path
        fmt: Explicit format, or "auto" to infer it from the file suffix

    Returns:
        One of the supported format names
    """
    if fmt != "auto":
        return fmt
    suffix = Path(path).suffix.lower()
    if suffix not in SUFFIX_FORMATS:
        raise MalformedVocabularyError(
            f"Cannot infer vocabulary format from suffix {suffix!r} of {path}"
        )
    return SUFFIX_FORMATS[suffix]


def read_flat_file(path: str | Path) -> dict[str, int]:
    """Read a flat vocabulary file (one token per line).

    Args:
        path: Vocabulary file path

    Returns:
        Mapping of token to line index
    """
    path = Path(path)
    _check_exists(path)

    with open(path, "r", encoding="utf-8") as f:
        lines = [line.strip() for line in f.read().splitlines()]

    _check_unique(lines, path)
    values = {}
    for index, line in enumerate(lines):
        values[line.strip()] = index
    return values


def read_json_file(path: str | Path) -> dict[str, int]:
    """Read a JSON vocabulary file mapping tokens to ids.

    Args:
        path: Vocabulary file path

    Returns:
        Mapping of token to id
    """
    path = Path(path)
    _check_exists(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedVocabularyError(f"Invalid JSON vocabulary {path}: {e}") from e

    if not isinstance(data, dict):
        raise MalformedVocabularyError(f"JSON vocabulary {path} must be an object")
    try:
        return {str(token): int(index) for token, index in data.items()}
    except (TypeError, ValueError) as e:
        raise MalformedVocabularyError(f"Non-integer id in {path}: {e}") from e


def read_sentencepiece_vocab(path: str | Path) -> list[tuple[str, float]]:
    """Read a SentencePiece ``.vocab`` file.

    Args:
        path: Vocabulary file path

    Returns:
        Ordered (piece, score) pairs; the id of a piece is its row index
    """
    path = Path(path)
    _check_exists(path)

    try:
        df = pd.read_csv(
            path,
            sep="\t",
            header=None,
            names=["piece", "score"],
            dtype={"piece": str},
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"Vocabulary file {path} is empty")
        return []
    except pd.errors.ParserError as e:
        raise MalformedVocabularyError(f"Cannot parse vocabulary file {path}: {e}") from e

    try:
        scores = pd.to_numeric(df["score"], errors="raise").astype(float)
    except (TypeError, ValueError) as e:
        raise MalformedVocabularyError(f"Non-numeric score in {path}: {e}") from e
    if scores.isna().any():
        raise MalformedVocabularyError(f"Missing score column in {path}")

    pieces = df["piece"].tolist()
    _check_unique(pieces, path)
    return list(zip(pieces, scores.tolist()))


def read_sentencepiece_model(path: str | Path) -> list[tuple[str, float]]:
    """Read pieces and scores from a serialized SentencePiece model.

    Args:
        path: Model file path

    Returns:
        Ordered (piece, score) pairs; the id of a piece is its index
    """
    path = Path(path)
    _check_exists(path)

    try:
        processor = spm.SentencePieceProcessor(model_file=str(path))
    except (OSError, RuntimeError) as e:
        raise MalformedVocabularyError(f"Cannot load SentencePiece model {path}: {e}") from e

    pieces = [
        (processor.id_to_piece(index), float(processor.get_score(index)))
        for index in range(processor.get_piece_size())
    ]
    _check_unique([piece for piece, _ in pieces], path)
    return pieces


def load_pieces(path: str | Path, fmt: VocabFormat = "auto") -> list[tuple[str, float]]:
    """Load ordered (piece, score) pairs for building a trie.

    Flat and JSON vocabularies carry no scores; their pieces get score 0.0
    and are ordered by id.

    Args:
        path: Vocabulary file path
        fmt: File format, or "auto" to infer it from the suffix

    Returns:
        Ordered (piece, score) pairs
    """
    resolved = resolve_format(path, fmt)
    logger.info(f"Loading vocabulary pieces from {path} ({resolved})")

    if resolved == "sentencepiece_model":
        return read_sentencepiece_model(path)
    if resolved == "sentencepiece_vocab":
        return read_sentencepiece_vocab(path)

    values = read_flat_file(path) if resolved == "flat" else read_json_file(path)
    ordered = sorted(values.items(), key=lambda item: item[1])
    ids = [index for _, index in ordered]
    if ids != list(range(len(ids))):
        raise MalformedVocabularyError(
            f"Ids in {path} must be contiguous from 0 to build a piece trie"
        )
    if any(not piece for piece, _ in ordered):
        raise MalformedVocabularyError(f"Empty token in {path}")
    return [(piece, 0.0) for piece, _ in ordered]


def load_values(path: str | Path, fmt: VocabFormat = "auto") -> dict[str, int]:
    """Load a token to id mapping from any supported vocabulary file.

    Args:
        path: Vocabulary file path
        fmt: File format, or "auto" to infer it from the suffix

    Returns:
        Mapping of token to id
    """
    resolved = resolve_format(path, fmt)
    if resolved == "flat":
        return read_flat_file(path)
    if resolved == "json":
        return read_json_file(path)
    pieces = load_pieces(path, resolved)
    return {piece: index for index, (piece, _) in enumerate(pieces)}

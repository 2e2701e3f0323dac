"""Unigram tokenizer: vocabulary, piece trie, segmenter and token assembly."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from .config import NormalizationConfig, VocabConfig
from .engines import WORD_START_MARKER, Trie, UnigramSegmenter
from .models import InputSpan, Token
from .utils.assembler import parse_nodes_to_tokens
from .utils.text_normalizer import SpanNormalizer
from .vocab import BaseVocab, SpecialTokenMap, load_pieces

logger = logging.getLogger(__name__)


class UnigramTokenizer:
    """
    Subword tokenizer over a unigram language model vocabulary.

    The trie is built once and never modified, so a single tokenizer can be
    shared by any number of threads.
    """

    def __init__(
        self,
        trie: Trie,
        vocab: Optional[BaseVocab] = None,
        *,
        word_start_marker: str = WORD_START_MARKER,
        lowercase: bool = False,
        add_prefix_marker: bool = True,
    ):
        """
        Initialize the tokenizer.

        Args:
            trie: Frozen trie of vocabulary pieces.
            vocab: Token/id tables used by ``encode`` and ``decode``.
            word_start_marker: Marker that starts a word.
            lowercase: Lowercase text before segmentation.
            add_prefix_marker: Prepend a word start marker to every text.
        """
        self.trie = trie
        self.vocab = vocab
        self.word_start_marker = word_start_marker
        self.segmenter = UnigramSegmenter(trie)
        self.normalizer = SpanNormalizer(
            lowercase=lowercase,
            add_prefix_marker=add_prefix_marker,
            word_start_marker=word_start_marker,
        )

    @classmethod
    def from_pieces(
        cls,
        pieces: list[tuple[str, float]],
        special_token_map: Optional[SpecialTokenMap] = None,
        **kwargs,
    ) -> "UnigramTokenizer":
        """
        Build a tokenizer from ordered (piece, score) pairs.

        Args:
            pieces: Ordered (piece, score) pairs; ids are positions.
            special_token_map: Special tokens; when given, a BaseVocab is
                built and every special token must be a piece.
            **kwargs: Forwarded to the constructor.
        """
        trie = Trie.from_pieces(pieces)
        vocab = BaseVocab.from_pieces(pieces, special_token_map) if special_token_map else None
        return cls(trie, vocab, **kwargs)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        fmt: str = "auto",
        special_token_map: Optional[SpecialTokenMap] = None,
        **kwargs,
    ) -> "UnigramTokenizer":
        """
        Load a tokenizer from a vocabulary file.

        Args:
            path: Vocabulary file (``.model``, ``.vocab``, ``.json`` or ``.txt``).
            fmt: File format, or "auto" to infer it from the suffix.
            special_token_map: Special tokens. Defaults to ``<unk>`` only.
            **kwargs: Forwarded to the constructor.
        """
        pieces = load_pieces(path, fmt)
        tokenizer = cls.from_pieces(pieces, special_token_map or SpecialTokenMap(), **kwargs)
        logger.info(f"Loaded tokenizer with {len(tokenizer.trie)} pieces from {path}")
        return tokenizer

    @classmethod
    def from_config(
        cls,
        vocab_config: VocabConfig,
        normalization: Optional[NormalizationConfig] = None,
    ) -> "UnigramTokenizer":
        """Load a tokenizer from configuration sections."""
        if vocab_config.path is None:
            raise ValueError("Vocabulary path not specified in configuration")

        normalization = normalization or NormalizationConfig()
        if vocab_config.special_tokens_file is not None:
            special_token_map = SpecialTokenMap.from_json_file(vocab_config.special_tokens_file)
        else:
            special_token_map = SpecialTokenMap(unk_token=vocab_config.unk_token)

        return cls.from_file(
            vocab_config.path,
            fmt=vocab_config.format,
            special_token_map=special_token_map,
            word_start_marker=normalization.word_start_marker,
            lowercase=normalization.lowercase,
            add_prefix_marker=normalization.add_prefix_marker,
        )

    def tokenize_span(self, span: InputSpan) -> list[Token]:
        """Segment a prepared span and assemble its tokens."""
        nodes = self.segmenter.segment(span)
        return parse_nodes_to_tokens(nodes, self.word_start_marker)

    def prepare(self, text: str, start_offset: int = 0) -> InputSpan:
        """Normalize raw text into a span."""
        return self.normalizer.normalize(text, start_offset)

    def tokenize(self, text: str) -> list[Token]:
        """Normalize and tokenize raw text.

        Token offsets refer to positions in ``text``.
        """
        return self.tokenize_span(self.prepare(text))

    def _require_vocab(self) -> BaseVocab:
        if self.vocab is None:
            raise RuntimeError("Tokenizer has no vocabulary. Load it with special tokens.")
        return self.vocab

    def encode(self, text: str) -> list[int]:
        """Tokenize text and map tokens to ids; unknown runs map to the unknown id."""
        vocab = self._require_vocab()
        return vocab.convert_tokens_to_ids(token.text for token in self.tokenize(text))

    def decode(self, ids: Iterable[int]) -> str:
        """Join the pieces of ``ids`` and turn word start markers back into spaces."""
        vocab = self._require_vocab()
        text = "".join(vocab.id_to_token(int(index)) for index in ids)
        return text.replace(self.word_start_marker, " ").lstrip(" ")

"""Token/id lookup tables with special token support."""

import logging
from typing import Iterable, Optional

from .special_tokens import SpecialTokenMap

logger = logging.getLogger(__name__)


class BaseVocab:
    """
    Two-way mapping between tokens and ids.

    Unknown tokens map to the id of the configured unknown token and unknown
    ids map back to the unknown token. Adding tokens only extends these
    tables; it never changes a tokenizer's piece trie.
    """

    def __init__(self, values: dict[str, int], special_token_map: Optional[SpecialTokenMap] = None):
        """
        Initialize the vocabulary.

        Args:
            values: Mapping of token to id.
            special_token_map: Special tokens to register. Defaults to an
                unknown token of ``<unk>``.

        Raises:
            TokenNotFoundError: If a special token is missing from ``values``.
        """
        if values is None:
            raise ValueError("values must not be None")
        self.values = dict(values)
        self.special_token_map = special_token_map or SpecialTokenMap()
        self.special_values = self.special_token_map.register_special_values(self.values)
        self.indices = {index: token for token, index in self.values.items()}
        self.special_indices = {index: token for token, index in self.special_values.items()}

    @classmethod
    def from_pieces(
        cls,
        pieces: list[tuple[str, float]],
        special_token_map: Optional[SpecialTokenMap] = None,
    ) -> "BaseVocab":
        """Build a vocabulary whose ids are the positions of ``pieces``."""
        values = {piece: index for index, (piece, _) in enumerate(pieces)}
        return cls(values, special_token_map)

    @property
    def unknown_value(self) -> str:
        return self.special_token_map.unk_token

    def token_to_id(self, token: str) -> int:
        """Return the id of ``token``, or the unknown id."""
        if token in self.special_values:
            return self.special_values[token]
        if token in self.values:
            return self.values[token]
        return self.values[self.unknown_value]

    def id_to_token(self, index: int) -> str:
        """Return the token of ``index``, or the unknown token."""
        if index in self.special_indices:
            return self.special_indices[index]
        return self.indices.get(index, self.unknown_value)

    def convert_tokens_to_ids(self, tokens: Iterable[str]) -> list[int]:
        return [self.token_to_id(token) for token in tokens]

    def _next_id(self) -> int:
        return max(self.values.values(), default=-1) + 1

    def add_extra_ids(self, num_extra_ids: int) -> None:
        """
        Append ``<extra_id_{i}>`` sentinel tokens after the highest id.

        Args:
            num_extra_ids: Number of sentinel tokens to add.
        """
        self.add_tokens(f"<extra_id_{i}>" for i in range(num_extra_ids))

    def add_tokens(self, tokens: Iterable[str]) -> None:
        """
        Append tokens that are not yet in the vocabulary.

        Args:
            tokens: Tokens to add, in order.
        """
        added = 0
        for token in tokens:
            if token in self.values:
                continue
            next_id = self._next_id()
            self.values[token] = next_id
            self.indices[next_id] = token
            added += 1
        if added:
            logger.debug(f"Added {added} tokens, vocabulary size is now {len(self)}")

    def __contains__(self, token: str) -> bool:
        return token in self.values

    def __len__(self) -> int:
        return len(self.values)

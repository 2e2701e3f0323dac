"""Prefix trie over scored vocabulary pieces."""

import logging
from typing import Iterable, Optional

from ..errors import EmptyVocabularyError

logger = logging.getLogger(__name__)


class TrieNode:
    """A node of the piece trie.

    ``score`` and ``piece_id`` are only meaningful when ``is_piece_end`` is set.
    """

    __slots__ = ("text", "children", "is_piece_end", "score", "piece_id")

    def __init__(self, text: str):
        self.text = text
        self.children: dict[str, "TrieNode"] = {}
        self.is_piece_end = False
        self.score = 0.0
        self.piece_id = 0

    @property
    def length(self) -> int:
        """Length of the represented substring in codepoints."""
        return len(self.text)

    def __repr__(self) -> str:
        return (
            f"TrieNode(text={self.text!r}, is_piece_end={self.is_piece_end}, "
            f"score={self.score}, piece_id={self.piece_id})"
        )


class Trie:
    """
    Character trie built once from an ordered vocabulary.

    Construction is the only mutating phase. Once ``freeze()`` has been
    called the trie is read-only and can be searched from many threads
    without locking.
    """

    def __init__(self):
        self.root = TrieNode("")
        self._piece_count = 0
        self._frozen = False

    @classmethod
    def from_pieces(cls, pieces: Iterable[tuple[str, float]]) -> "Trie":
        """
        Build a frozen trie from (piece, score) pairs.

        The id of each piece is its position in ``pieces``.

        Args:
            pieces: Ordered (piece, score) pairs.

        Returns:
            A frozen Trie.

        Raises:
            EmptyVocabularyError: If ``pieces`` is empty.
        """
        trie = cls()
        for index, (piece, score) in enumerate(pieces):
            trie.insert(piece, score, index)

        if len(trie) == 0:
            raise EmptyVocabularyError("Cannot build a trie from an empty vocabulary")

        trie.freeze()
        logger.debug(f"Built trie with {len(trie)} pieces")
        return trie

    def insert(self, piece: str, score: float, piece_id: int) -> None:
        """
        Add a piece to the trie.

        Re-inserting an existing piece overwrites its score and id.

        Args:
            piece: Piece text.
            score: Unigram score of the piece.
            piece_id: Vocabulary id of the piece.
        """
        if self._frozen:
            raise RuntimeError("Trie is frozen. Build a new trie to change the vocabulary.")
        if not piece:
            raise ValueError("Cannot insert an empty piece")

        node = self.root
        for character in piece:
            child = node.children.get(character)
            if child is None:
                child = TrieNode(node.text + character)
                node.children[character] = child
            node = child

        if not node.is_piece_end:
            self._piece_count += 1
        node.is_piece_end = True
        node.score = float(score)
        node.piece_id = piece_id

    def freeze(self) -> None:
        """End the construction phase."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def common_prefix_search(self, text: str, start_pos: int = 0) -> list[TrieNode]:
        """
        Find every piece that is a prefix of ``text[start_pos:]``.

        Args:
            text: Text to search.
            start_pos: Codepoint position to start from.

        Returns:
            Matching piece-end nodes, shortest first.
        """
        results = []
        node = self.root
        for position in range(start_pos, len(text)):
            node = node.children.get(text[position])
            if node is None:
                break
            if node.is_piece_end:
                results.append(node)
        return results

    def find(self, piece: str) -> Optional[TrieNode]:
        """Return the node for ``piece`` if it is a vocabulary piece."""
        node = self.root
        for character in piece:
            node = node.children.get(character)
            if node is None:
                return None
        return node if node.is_piece_end else None

    def __contains__(self, piece: str) -> bool:
        return bool(piece) and self.find(piece) is not None

    def __len__(self) -> int:
        return self._piece_count

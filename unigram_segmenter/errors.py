"""Exceptions raised by the tokenizer and its vocabulary loaders."""


class TokenizerError(Exception):
    """Base class for all tokenizer errors."""


class EmptySpanError(TokenizerError, ValueError):
    """Raised when segmentation is requested for a span with no characters."""


class MalformedOffsetsError(TokenizerError, ValueError):
    """Raised when a span carries fewer offsets than characters."""


class NoPathFoundError(TokenizerError, RuntimeError):
    """Raised when the forward pass left the end of the span unreachable."""


class VocabularyError(TokenizerError):
    """Base class for vocabulary configuration and loading errors."""


class EmptyVocabularyError(VocabularyError, ValueError):
    """Raised when a tokenizer is built without any vocabulary pieces."""


class MalformedVocabularyError(VocabularyError, ValueError):
    """Raised when a vocabulary file cannot be parsed."""


class VocabFileNotFoundError(VocabularyError, FileNotFoundError):
    """Raised when a vocabulary or special token file does not exist."""


class TokenNotFoundError(VocabularyError, KeyError):
    """Raised when a configured special token is missing from the vocabulary."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""

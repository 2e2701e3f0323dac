"""
Tests for the UnigramTokenizer facade.
"""

import pytest

from unigram_segmenter.config import NormalizationConfig, VocabConfig
from unigram_segmenter.errors import EmptySpanError, EmptyVocabularyError, TokenNotFoundError
from unigram_segmenter.models import InputSpan, Mask
from unigram_segmenter.tokenizer import UnigramTokenizer
from unigram_segmenter.vocab import SpecialTokenMap


@pytest.fixture
def tokenizer(word_pieces):
    return UnigramTokenizer.from_pieces(word_pieces, SpecialTokenMap())


class TestTokenize:
    """Tests for text and span tokenization."""

    def test_word_split_into_start_and_continuation(self, tokenizer):
        tokens = tokenizer.tokenize("unable")

        assert [token.text for token in tokens] == ["▁un", "able"]
        assert [token.mask for token in tokens] == [Mask.NONE, Mask.CONTINUATION]

    def test_unknown_run_is_merged(self, tokenizer):
        tokens = tokenizer.tokenize_span(InputSpan.from_text("zz"))

        assert len(tokens) == 1
        assert tokens[0].text == "zz"
        assert tokens[0].mask is Mask.UNKNOWN

    def test_single_punctuation_span(self, tokenizer):
        tokens = tokenizer.tokenize_span(InputSpan.from_text("!"))

        assert len(tokens) == 1
        assert tokens[0].mask is Mask.PUNCTUATION

    def test_empty_span_fails(self, tokenizer):
        with pytest.raises(EmptySpanError):
            tokenizer.tokenize_span(InputSpan(text="", original_offsets=[]))
        with pytest.raises(EmptySpanError):
            tokenizer.tokenize("")

    def test_offsets_round_trip(self, tokenizer):
        """Flattened token offsets reproduce the span offsets in order."""
        span = tokenizer.prepare("hello wxrld.")

        tokens = tokenizer.tokenize_span(span)

        assert "".join(token.text for token in tokens) == span.text
        assert [o for token in tokens for o in token.original_offsets] == span.original_offsets

    def test_offsets_point_into_raw_text(self, tokenizer):
        text = "hello world"

        tokens = tokenizer.tokenize(text)

        assert [token.text for token in tokens] == ["▁hello", "▁world"]
        assert [(token.original_start, token.original_end) for token in tokens] == [
            (0, 5),
            (5, 11),
        ]
        assert text[tokens[1].original_start + 1:tokens[1].original_end] == "world"

    def test_lowercase_option(self, word_pieces):
        tokenizer = UnigramTokenizer.from_pieces(
            word_pieces, SpecialTokenMap(), lowercase=True
        )

        assert [token.text for token in tokenizer.tokenize("HELLO")] == ["▁hello"]


class TestEncodeDecode:
    """Tests for id mapping."""

    def test_encode_maps_pieces_to_ids(self, tokenizer):
        assert tokenizer.encode("hello world") == [4, 5]

    def test_unknown_tokens_map_to_unknown_id(self, tokenizer):
        assert tokenizer.encode("hello zz") == [4, 6, 0]

    def test_decode_restores_spaces(self, tokenizer):
        assert tokenizer.decode([4, 5]) == "hello world"
        assert tokenizer.decode([1, 2, 3]) == "unablely"

    def test_encode_requires_vocab(self, word_trie):
        tokenizer = UnigramTokenizer(word_trie)
        with pytest.raises(RuntimeError):
            tokenizer.encode("hello")


class TestLoading:
    """Tests for building tokenizers from files and configuration."""

    def test_from_file(self, vocab_file):
        tokenizer = UnigramTokenizer.from_file(vocab_file)

        assert len(tokenizer.trie) == 14
        assert tokenizer.vocab.token_to_id("▁world") == 5
        assert [token.text for token in tokenizer.tokenize("unable")] == ["▁un", "able"]

    def test_from_config(self, vocab_file):
        tokenizer = UnigramTokenizer.from_config(
            VocabConfig(path=vocab_file),
            NormalizationConfig(lowercase=True),
        )

        assert tokenizer.encode("Hello World") == [4, 5]

    def test_missing_special_token(self, vocab_file):
        with pytest.raises(TokenNotFoundError):
            UnigramTokenizer.from_file(vocab_file, special_token_map=SpecialTokenMap(unk_token="[UNK]"))

    def test_empty_vocabulary_fails_at_load(self, tmp_path):
        empty = tmp_path / "empty.vocab"
        empty.write_text("", encoding="utf-8")

        with pytest.raises(EmptyVocabularyError):
            UnigramTokenizer.from_file(empty)

    def test_config_without_path(self):
        with pytest.raises(ValueError):
            UnigramTokenizer.from_config(VocabConfig())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

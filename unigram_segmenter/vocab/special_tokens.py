"""Special token configuration and registration."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from ..errors import MalformedVocabularyError, TokenNotFoundError, VocabFileNotFoundError


class SpecialTokenMap(BaseModel):
    """Special tokens a vocabulary must contain."""

    unk_token: str = "<unk>"
    pad_token: Optional[str] = None
    bos_token: Optional[str] = None
    sep_token: Optional[str] = None
    cls_token: Optional[str] = None
    eos_token: Optional[str] = None
    mask_token: Optional[str] = None
    additional_special_tokens: list[str] = Field(default_factory=list)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "SpecialTokenMap":
        """Load a special token map from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise VocabFileNotFoundError(f"{path} special token mapping file not found")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise MalformedVocabularyError(f"Invalid special token mapping {path}: {e}") from e

    def special_tokens(self) -> list[str]:
        """Return every configured special token, unknown token first."""
        tokens = [
            self.unk_token,
            self.pad_token,
            self.bos_token,
            self.sep_token,
            self.cls_token,
            self.eos_token,
            self.mask_token,
            *self.additional_special_tokens,
        ]
        return [token for token in tokens if token]

    def register_special_values(self, values: dict[str, int]) -> dict[str, int]:
        """
        Look up the id of every configured special token.

        Args:
            values: Vocabulary mapping of token to id.

        Returns:
            Mapping of special token to id.

        Raises:
            TokenNotFoundError: If a configured token is not in ``values``.
        """
        special_values = {}
        for token in self.special_tokens():
            if token not in values:
                raise TokenNotFoundError(
                    f"The special value {token} could not be found in the vocabulary"
                )
            special_values[token] = values[token]
        return special_values

"""Configuration management for the tokenization pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .engines.base import WORD_START_MARKER


class VocabConfig(BaseModel):
    """Configuration for vocabulary loading."""

    path: Optional[Path] = None
    format: Literal["auto", "flat", "json", "sentencepiece_vocab", "sentencepiece_model"] = "auto"
    special_tokens_file: Optional[Path] = None
    unk_token: str = "<unk>"

    @field_validator("path", "special_tokens_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class NormalizationConfig(BaseModel):
    """Configuration for span preparation."""

    lowercase: bool = False
    add_prefix_marker: bool = True
    word_start_marker: str = Field(default=WORD_START_MARKER, min_length=1, max_length=1)


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    text_field: str = "text"
    workers: int = Field(default=1, ge=1)
    max_span_chars: int = Field(
        default=0, ge=0, description="Skip records longer than this (0 = unlimited)"
    )


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_dir: Path = Path("data/tokenized_output")
    format: Literal["csv", "jsonl"] = "csv"
    file_name: str = "tokens"


class Config(BaseModel):
    """Main configuration for the tokenization pipeline."""

    input_file: Optional[Path] = None
    vocab: VocabConfig = Field(default_factory=VocabConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        # mode="json" turns Path objects into strings
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)

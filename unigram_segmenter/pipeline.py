"""Batch tokenization pipeline."""

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

import pandas as pd
from tqdm import tqdm

from .config import Config
from .errors import TokenizerError
from .models import Token
from .tokenizer import UnigramTokenizer

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = [
    "Source_Line_Number",
    "Token_Order",
    "Token",
    "Token_ID",
    "Mask",
    "Original_Start",
    "Original_End",
    "Original_Offsets",
]

# Regex pattern for illegal control characters (except tab, newline, carriage return)
ILLEGAL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')


def sanitize_token(text: str, offsets: list[int]) -> tuple[str, list[int]]:
    """Remove control characters that may interfere with CSV/Excel.

    The offset of each removed character is dropped with it, so the
    sanitized text still has one offset per character.

    Args:
        text: Token text
        offsets: Original offset of each character in ``text``

    Returns:
        Sanitized text and its offsets
    """
    if not ILLEGAL_CHARS.search(text):
        return text, list(offsets)
    kept = [(char, offset) for char, offset in zip(text, offsets) if not ILLEGAL_CHARS.match(char)]
    return "".join(char for char, _ in kept), [offset for _, offset in kept]


class TokenizationPipeline:
    """Pipeline for tokenizing JSONL text records."""

    def __init__(self, config: Config, tokenizer: Optional[UnigramTokenizer] = None):
        """Initialize tokenization pipeline.

        Args:
            config: Pipeline configuration
            tokenizer: Prebuilt tokenizer; loaded from ``config.vocab`` if omitted
        """
        self.config = config
        self.tokenizer = tokenizer or UnigramTokenizer.from_config(
            config.vocab, config.normalization
        )

    def _extract_text(self, record: dict):
        """Pick the raw text value of a record, trying the configured field first."""
        for field_name in (self.config.processing.text_field, "text", "content"):
            value = record.get(field_name)
            if value:
                return value
        return None

    def _token_rows(self, line_num: int, tokens: list[Token]) -> list[dict]:
        """Build output rows for the tokens of one record."""
        vocab = self.tokenizer.vocab
        rows = []
        for order, token in enumerate(tokens, 1):
            text, offsets = sanitize_token(token.text, token.original_offsets)
            rows.append({
                "Source_Line_Number": line_num,
                "Token_Order": order,
                "Token": text,
                "Token_ID": vocab.token_to_id(token.text) if vocab is not None else None,
                "Mask": token.mask.value,
                "Original_Start": token.original_start,
                "Original_End": token.original_end,
                "Original_Offsets": " ".join(str(o) for o in offsets),
            })
        return rows

    def process_record(self, line_num: int, record: dict) -> Optional[list[dict]]:
        """Tokenize a single record.

        Args:
            line_num: 1-based line number of the record in the input file
            record: Parsed JSON record

        Returns:
            Output rows, or None if the record was skipped
        """
        text = self._extract_text(record)
        if text is None:
            return None
        if not isinstance(text, str):
            logger.warning(f"Skipping non-string text at line {line_num}")
            return None

        span = self.tokenizer.prepare(text)
        max_chars = self.config.processing.max_span_chars
        if max_chars and len(span.text) > max_chars:
            logger.warning(
                f"Skipping line {line_num}: {len(span.text)} characters exceeds limit of {max_chars}"
            )
            return None

        tokens = self.tokenizer.tokenize_span(span)
        return self._token_rows(line_num, tokens)

    def _read_records(self, input_path: Path) -> list[tuple[int, dict]]:
        """Read JSONL records, skipping blank and malformed lines."""
        records = []
        with open(input_path, "r", encoding="utf-8") as infile:
            for line_num, line in enumerate(infile, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(f"Skipping malformed JSON at line {line_num}")
                    continue
                if not isinstance(record, dict):
                    logger.warning(f"Skipping non-object record at line {line_num}")
                    continue
                records.append((line_num, record))
        return records

    def _process_sequential(self, records: list[tuple[int, dict]]) -> dict[int, list[dict]]:
        results = {}
        for line_num, record in tqdm(records, desc="Tokenizing"):
            try:
                rows = self.process_record(line_num, record)
            except TokenizerError as e:
                logger.error(f"Tokenization failed at line {line_num}: {e}")
                continue
            if rows is not None:
                results[line_num] = rows
        return results

    def _process_parallel(self, records: list[tuple[int, dict]]) -> dict[int, list[dict]]:
        """Tokenize records on worker threads sharing one tokenizer."""
        workers = self.config.processing.workers
        results = {}

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.process_record, line_num, record): line_num
                for line_num, record in records
            }
            for future in tqdm(
                as_completed(futures), total=len(futures), desc=f"Tokenizing ({workers} workers)"
            ):
                line_num = futures[future]
                try:
                    rows = future.result()
                except TokenizerError as e:
                    logger.error(f"Tokenization failed at line {line_num}: {e}")
                    continue
                if rows is not None:
                    results[line_num] = rows
        return results

    def _write_output(self, rows: list[dict]) -> Path:
        """Write token rows to the configured output file."""
        output_cfg = self.config.output
        output_cfg.output_dir.mkdir(parents=True, exist_ok=True)

        df = pd.DataFrame(rows, columns=OUTPUT_COLUMNS)

        if output_cfg.format == "csv":
            save_path = output_cfg.output_dir / f"{output_cfg.file_name}.csv"
            df.to_csv(save_path, index=False)
        else:
            save_path = output_cfg.output_dir / f"{output_cfg.file_name}.jsonl"
            df.to_json(save_path, orient="records", lines=True, force_ascii=False)

        logger.info(f"Wrote {len(df)} tokens to {save_path}")
        return save_path

    def process_file(self, input_path: Path) -> int:
        """Tokenize a JSONL file and write the token table.

        Args:
            input_path: Path to input JSONL file

        Returns:
            Number of records tokenized
        """
        logger.info(f"Reading from: {input_path}")
        records = self._read_records(input_path)

        if self.config.processing.workers <= 1:
            results = self._process_sequential(records)
        else:
            results = self._process_parallel(records)

        rows = []
        for line_num in sorted(results):
            rows.extend(results[line_num])
        self._write_output(rows)

        return len(results)

    def run(self) -> int:
        """Run the tokenization pipeline.

        Returns:
            Number of records tokenized
        """
        if not self.config.input_file:
            raise ValueError("Input file not specified in configuration")

        if not self.config.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {self.config.input_file}")

        return self.process_file(self.config.input_file)

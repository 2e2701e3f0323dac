"""Command-line interface for the tokenization pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import Config
from .errors import TokenizerError
from .pipeline import TokenizationPipeline
from .tokenizer import UnigramTokenizer

VOCAB_FORMATS = ["auto", "flat", "json", "sentencepiece_vocab", "sentencepiece_model"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="unigram-segmenter",
        description="Tokenize text with a unigram (SentencePiece) vocabulary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  unigram-segmenter tokenize --config config.yaml

  # Direct arguments
  unigram-segmenter tokenize --input data/input.jsonl --vocab spm.model --output data/tokens

  # Show the tokens of a single text
  unigram-segmenter inspect --vocab spm.vocab "Hello world"
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    tokenize_parser = subparsers.add_parser("tokenize", help="Tokenize a JSONL file")
    setup_tokenize_parser(tokenize_parser)

    inspect_parser = subparsers.add_parser("inspect", help="Print the tokens of a text")
    setup_inspect_parser(inspect_parser)

    return parser


def _add_vocab_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--vocab",
        type=Path,
        help="Path to vocabulary file (.model, .vocab, .json or .txt)",
    )
    parser.add_argument(
        "--vocab-format",
        choices=VOCAB_FORMATS,
        help="Vocabulary file format (default: inferred from suffix)",
    )
    parser.add_argument(
        "--special-tokens",
        type=Path,
        help="Path to JSON special token mapping",
    )
    parser.add_argument(
        "--lowercase",
        action="store_true",
        help="Lowercase text before tokenization",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def setup_tokenize_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for tokenize command."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="Path to input JSONL file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output directory for token tables",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "jsonl"],
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "--text-field",
        type=str,
        help="JSON field holding the text (default: text)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker threads (default: 1)",
    )
    _add_vocab_arguments(parser)


def setup_inspect_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for inspect command."""
    parser.add_argument("text", type=str, help="Text to tokenize")
    _add_vocab_arguments(parser)


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    if getattr(args, "input", None):
        config.input_file = args.input
    if getattr(args, "output", None):
        config.output.output_dir = args.output
    if getattr(args, "format", None):
        config.output.format = args.format
    if getattr(args, "text_field", None):
        config.processing.text_field = args.text_field
    if getattr(args, "workers", None) is not None:
        config.processing.workers = args.workers

    if args.vocab:
        config.vocab.path = args.vocab
    if args.vocab_format:
        config.vocab.format = args.vocab_format
    if args.special_tokens:
        config.vocab.special_tokens_file = args.special_tokens
    if args.lowercase:
        config.normalization.lowercase = True

    # Assignments bypass field validation
    return Config.model_validate(config.model_dump())


def handle_tokenize(args: argparse.Namespace) -> int:
    """Handle tokenize command."""
    try:
        config = build_config(args)
    except (ValueError, ValidationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.input_file:
        print("Error: Input file is required (use --input or --config)", file=sys.stderr)
        return 1
    if not config.vocab.path:
        print("Error: Vocabulary is required (use --vocab or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = TokenizationPipeline(config)
        record_count = pipeline.run()
        print(f"\nTokenized {record_count} records")
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except (TokenizerError, ValueError) as e:
        logging.exception("Tokenization failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def handle_inspect(args: argparse.Namespace) -> int:
    """Handle inspect command."""
    if not args.vocab:
        print("Error: Vocabulary is required (use --vocab)", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
        tokenizer = UnigramTokenizer.from_config(config.vocab, config.normalization)
        tokens = tokenizer.tokenize(args.text)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except (TokenizerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for token in tokens:
        token_id = tokenizer.vocab.token_to_id(token.text)
        offsets = f"{token.original_start}-{token.original_end}"
        print(f"{token.text}\t{token_id}\t{token.mask.value}\t{offsets}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    if args.command == "inspect":
        return handle_inspect(args)
    return handle_tokenize(args)


if __name__ == "__main__":
    sys.exit(main())

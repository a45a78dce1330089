"""CLI entrypoints for usermeta commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .comments import CommentStyle
from .config import ConfigError, load_config
from .converters import hash_file, resolve_path, to_hash_fragment
from .errors import ValidationError
from .generator import generate
from .loader import load_metadata
from .logging import configure_logging, get_logger
from .models import HashType


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only report errors; hides locale canonicalization warnings.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usermeta",
        description="Generate userscript metadata blocks from structured metadata files.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the metadata block for a YAML or JSON metadata file.",
    )
    _add_verbosity_options(generate_parser, suppress_default=True)
    generate_parser.add_argument("meta", help="Path to the metadata file.")
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to .usermeta.yml (defaults to the metadata file's directory).",
    )
    generate_parser.add_argument(
        "--comment-style",
        choices=[style.value for style in CommentStyle],
        default=None,
        help="Override the configured comment style.",
    )
    generate_parser.add_argument(
        "--no-block",
        action="store_true",
        help="Omit the ==UserScript== delimiters.",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the block to this file instead of stdout.",
    )

    hash_parser = subparsers.add_parser(
        "hash",
        help="Print the integrity fragment for a local file.",
    )
    _add_verbosity_options(hash_parser, suppress_default=True)
    hash_parser.add_argument("file", help="File to hash.")
    hash_parser.add_argument(
        "--algorithm",
        choices=[algorithm.value for algorithm in HashType],
        default=HashType.SHA256.value,
        help="Hash algorithm (default: sha256).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for usermeta commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        parser.error("--verbose and --quiet cannot be combined")
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    logger = get_logger("cli")

    if args.command == "generate":
        meta_path = Path(args.meta)
        config_path = Path(args.config) if args.config else meta_path.parent
        try:
            config = load_config(config_path)
            options = config.to_generator_options()
            if args.comment_style is not None:
                options.comment_style = CommentStyle(args.comment_style)
            if args.no_block:
                options.include_block = False
            meta = load_metadata(meta_path)
            header = generate(meta, options)
        except (ConfigError, ValidationError, OSError) as exc:
            logger.debug("Generation failed", exc_info=True)
            parser.exit(1, f"usermeta generate failed: {exc}\n")
        if args.output:
            Path(args.output).write_text(header + "\n", encoding="utf-8")
            logger.info("Metadata block written to %s", args.output)
        else:
            print(header)
    elif args.command == "hash":
        try:
            digest = hash_file(resolve_path(args.file), args.algorithm)
        except OSError as exc:
            parser.exit(1, f"usermeta hash failed: {exc}\n")
        print(to_hash_fragment(digest, args.algorithm))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])

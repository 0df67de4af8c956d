"""CLI entry point for the tool result parser.

Usage:
    toolcards parse transcript.md
    toolcards parse --format rich < reply.txt
    toolcards strip reply.txt
    toolcards check reply.txt && echo "has a tool result"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from toolcards.shared.formatters.result_card import format_tool_result, render_card_rich
from toolcards.shared.config import ParserConfig
from toolcards.shared.errors import InputError, ToolCardsError
from .parser import ToolResultParser
from .yaml_config import load_yaml_config

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolcards",
        description="Extract fenced tool-result blocks from assistant text",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML config file (default: TOOLCARDS_* env vars)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Print parsed tool result records")
    parse_cmd.add_argument("input", nargs="?", default="-", help="Input file or - for stdin")
    parse_cmd.add_argument(
        "--format", "-f",
        choices=("json", "rich"),
        default="json",
        help="Output format (default: json)",
    )

    strip_cmd = sub.add_parser("strip", help="Print the text with tool result blocks removed")
    strip_cmd.add_argument("input", nargs="?", default="-", help="Input file or - for stdin")

    check_cmd = sub.add_parser(
        "check", help="Exit 0 if the text contains a tool result block, 1 otherwise",
    )
    check_cmd.add_argument("input", nargs="?", default="-", help="Input file or - for stdin")
    return parser


def _read_input(source: str) -> str:
    """Read text from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise InputError(source, "file not found")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(source, str(exc)) from exc


def _load_config(path: str | None) -> ParserConfig:
    if path:
        return load_yaml_config(path)
    return ParserConfig.from_env()


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = _load_config(args.config)
        if not args.verbose:
            logging.getLogger().setLevel(config.log_level.upper())
        text = _read_input(args.input)
    except ToolCardsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    parser = ToolResultParser(config)

    if args.command == "check":
        return 0 if parser.has_block(text) else 1

    if args.command == "strip":
        sys.stdout.write(parser.strip(text))
        return 0

    records = parser.parse(text)
    logger.info("Parsed %d tool result record(s)", len(records))
    if args.format == "rich":
        console = Console()
        for record in records:
            console.print(render_card_rich(format_tool_result(record)))
            console.print()
    else:
        print(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Main CLI entry point for the slax command-line tool.

Commands:
    parse   Print the tree of one or more XML files
    query   Print the elements of a file whose name matches
    text    Print the text runs of a file, one per line
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from xml.sax import SAXParseException

from slax import __version__
from slax.api import SlaxParser
from slax.shared import ParserConfig, SlaxError, get_logger
from slax.tree import (
    Element,
    filter_by_name_contains,
    filter_by_name_exact,
    filter_by_name_regex,
    get_text,
    to_json,
    to_outline,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

logger = get_logger(__name__, component="cli")


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration from a config file and flags."""
    config = ParserConfig.default()
    if args.config:
        config = ParserConfig.from_json(args.config.read_text())
    if args.strict:
        config = config.override(duplicate_attributes=ParserConfig.strict().duplicate_attributes)
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="slax",
        description="Parse simple XML documents into compact trees and query them"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Print the tree of XML files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to parse"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "text", "stats"],
        default="json",
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Query command
    query_parser = subparsers.add_parser("query", help="Find elements by name")
    query_parser.add_argument("path", type=Path, help="XML file to query")
    match = query_parser.add_mutually_exclusive_group(required=True)
    match.add_argument("--name", help="Exact compacted name, e.g. cas:user")
    match.add_argument("--contains", help="Substring of the compacted name")
    match.add_argument("--regex", help="Regular expression matching the whole name")
    query_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    # Text command
    text_parser = subparsers.add_parser("text", help="Print the text of an XML file")
    text_parser.add_argument("path", type=Path, help="XML file to read")

    # Global options
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON parser configuration file"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject repeated attribute names"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _emit(text: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(text + "\n")
        print(f"Results written to {output}", file=sys.stderr)
    else:
        print(text)


def cmd_parse(args: argparse.Namespace, parser: SlaxParser) -> int:
    """Handle parse command."""
    rendered: List[str] = []
    summaries: List[Dict[str, Any]] = []

    for path in args.paths:
        root = parser.parse_file(path)
        if args.format == "json":
            rendered.append(to_json(root))
        elif args.format == "text":
            rendered.append(to_outline(root))
        else:
            stats = parser.last_statistics.to_dict() if parser.last_statistics else {}
            summaries.append({"file": str(path), "root": root.name, **stats})

    if args.format == "stats":
        _emit(json.dumps(summaries, indent=2), args.output)
    else:
        _emit("\n".join(rendered), args.output)
    return EXIT_OK


def cmd_query(args: argparse.Namespace, parser: SlaxParser) -> int:
    """Handle query command."""
    pattern = re.compile(args.regex) if args.regex is not None else None
    root = parser.parse_file(args.path)

    matches: List[Element]
    if args.name is not None:
        matches = filter_by_name_exact(root, args.name)
    elif args.contains is not None:
        matches = filter_by_name_contains(root, args.contains)
    else:
        matches = filter_by_name_regex(root, pattern)

    if args.format == "json":
        print(json.dumps([element.to_dict() for element in matches], indent=2, ensure_ascii=False))
    else:
        for element in matches:
            print(to_outline(element))
    return EXIT_OK if matches else EXIT_ERROR


def cmd_text(args: argparse.Namespace, parser: SlaxParser) -> int:
    """Handle text command."""
    for line in get_text(parser.parse_file(args.path)):
        print(line)
    return EXIT_OK


COMMANDS = {
    "parse": cmd_parse,
    "query": cmd_query,
    "text": cmd_text,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    arg_parser = create_argument_parser()
    args = arg_parser.parse_args(argv)

    if not args.command:
        arg_parser.print_help()
        return EXIT_ERROR

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.CRITICAL)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        parser = SlaxParser(load_config(args))
        return COMMANDS[args.command](args, parser)

    except (SlaxError, SAXParseException, OSError, re.error) as e:
        logger.debug("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())

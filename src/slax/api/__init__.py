"""Public parsing API for slax."""

from .parser import (
    SlaxParser,
    parse,
    parse_events,
    parse_file,
    parse_stream,
    parse_string,
)

__all__ = [
    "SlaxParser",
    "parse",
    "parse_events",
    "parse_file",
    "parse_stream",
    "parse_string",
]

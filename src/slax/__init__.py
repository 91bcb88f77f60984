"""slax - simple lax XML trees.

Parses small XML documents, such as web API responses, into an immutable
tree of elements and text. Qualified names are compacted into one string
(``cas:user``, or ``:user`` without a prefix) and whitespace-only text is
ignored.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - SlaxParser with ParserConfig
- Level 3: Event level - XMLEventReader and TreeBuilder
"""

__version__ = "0.1.0"
__author__ = "slax developers"

from .api import (
    SlaxParser,
    parse,
    parse_events,
    parse_file,
    parse_stream,
    parse_string,
)
from .events import EventType, XMLEvent, XMLEventReader
from .shared import (
    DuplicateAttributePolicy,
    InvariantError,
    ParseError,
    ParserConfig,
    QName,
    SlaxError,
    UnsupportedEventError,
    compact_qname,
)
from .tree import (
    Element,
    Node,
    Text,
    TreeBuilder,
    filter_by_name_contains,
    filter_by_name_exact,
    filter_by_name_regex,
    filter_elements,
    filter_nodes,
    get_text,
    visit,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_events",
    "parse_file",
    "parse_stream",
    "parse_string",

    # Level 2: Configured parser
    "SlaxParser",
    "ParserConfig",
    "DuplicateAttributePolicy",

    # Level 3: Events and tree building
    "EventType",
    "XMLEvent",
    "XMLEventReader",
    "TreeBuilder",

    # Tree and queries
    "Element",
    "Node",
    "Text",
    "QName",
    "compact_qname",
    "visit",
    "filter_nodes",
    "filter_elements",
    "filter_by_name_exact",
    "filter_by_name_contains",
    "filter_by_name_regex",
    "get_text",

    # Errors
    "SlaxError",
    "ParseError",
    "UnsupportedEventError",
    "InvariantError",
]

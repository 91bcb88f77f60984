"""Tree building and querying for slax.

Key Components:
    TreeBuilder: State machine folding events into an immutable tree
    Element: XML element with compacted name, attributes and children
    Text: Trimmed character data
    visit / filter_*: Read-only pre-order queries over a finished tree
"""

from .builder import ParserState, TreeBuilder, build_tree
from .export import to_json, to_outline
from .nodes import Element, Node, Text
from .query import (
    filter_by_name_contains,
    filter_by_name_exact,
    filter_by_name_regex,
    filter_elements,
    filter_nodes,
    get_text,
    iter_nodes,
    visit,
)

__all__ = [
    "Element",
    "Node",
    "ParserState",
    "Text",
    "TreeBuilder",
    "build_tree",
    "filter_by_name_contains",
    "filter_by_name_exact",
    "filter_by_name_regex",
    "filter_elements",
    "filter_nodes",
    "get_text",
    "iter_nodes",
    "to_json",
    "to_outline",
    "visit",
]

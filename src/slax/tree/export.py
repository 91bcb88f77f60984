"""Export of trees to JSON and indented text."""

import json
from typing import List

from slax.tree.nodes import Element, Node, Text


def to_json(node: Node, indent: int = 2) -> str:
    """Serialize a node and its subtree to JSON."""
    return json.dumps(node.to_dict(), indent=indent, ensure_ascii=False)


def to_outline(node: Node, indent: str = "  ") -> str:
    """Render a tree as an indented outline, one node per line.

    Elements appear as their name followed by their attributes, text nodes as
    quoted strings.
    """
    lines: List[str] = []
    _outline(node, 0, indent, lines)
    return "\n".join(lines)


def _outline(node: Node, depth: int, indent: str, lines: List[str]) -> None:
    prefix = indent * depth
    if isinstance(node, Text):
        lines.append(f"{prefix}{node.data!r}")
        return
    if isinstance(node, Element):
        attributes = " ".join(
            f"{key}={value!r}"
            for key, values in node.attributes.items()
            for value in values
        )
        lines.append(f"{prefix}{node.name} {attributes}".rstrip())
        for child in node.children:
            _outline(child, depth + 1, indent, lines)

"""Traversal and query functions over a finished tree.

Every function here is read-only: it walks the tree in depth-first pre-order
(a node before its children, children in document order) and returns a new
list. Trees are immutable, so these functions can be called from several
threads at once.
"""

import re
from typing import Callable, Iterator, List, Pattern, Union

from slax.tree.nodes import Element, Node, Text

NodePredicate = Callable[[Node], bool]
ElementPredicate = Callable[[Element], bool]


def visit(node: Node, action: Callable[[Node], None]) -> None:
    """Call ``action`` on ``node`` and then on every descendant, in pre-order."""
    action(node)
    if isinstance(node, Element):
        for child in node.children:
            visit(child, action)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in the same order as :func:`visit`."""
    yield node
    if isinstance(node, Element):
        for child in node.children:
            yield from iter_nodes(child)


def filter_nodes(root: Node, predicate: NodePredicate) -> List[Node]:
    """Collect every node, root included, that satisfies ``predicate``."""
    found: List[Node] = []

    def collect(node: Node) -> None:
        if predicate(node):
            found.append(node)

    visit(root, collect)
    return found


def filter_elements(root: Node, predicate: ElementPredicate) -> List[Element]:
    """Collect every element, root included, that satisfies ``predicate``."""
    found: List[Element] = []

    def collect(node: Node) -> None:
        if isinstance(node, Element) and predicate(node):
            found.append(node)

    visit(root, collect)
    return found


def filter_by_name_exact(root: Node, name: str) -> List[Element]:
    """Elements whose compacted name equals ``name``."""
    return filter_elements(root, lambda element: element.name == name)


def filter_by_name_contains(root: Node, substring: str) -> List[Element]:
    """Elements whose compacted name contains ``substring``."""
    return filter_elements(root, lambda element: substring in element.name)


def filter_by_name_regex(root: Node, pattern: Union[str, Pattern[str]]) -> List[Element]:
    """Elements whose whole compacted name matches ``pattern``.

    ``pattern`` must match the entire name, as with :func:`re.fullmatch`;
    ``"cas:.*"`` matches ``"cas:user"`` while ``"user"`` does not.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return filter_elements(root, lambda element: regex.fullmatch(element.name) is not None)


def get_text(root: Node) -> List[str]:
    """Data of every text node under ``root``, in document order."""
    found: List[str] = []

    def collect(node: Node) -> None:
        if isinstance(node, Text):
            found.append(node.data)

    visit(root, collect)
    return found

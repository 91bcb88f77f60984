"""Immutable document tree for slax.

A tree is made of exactly two node kinds:

- :class:`Element` - compacted name, attributes and ordered children
- :class:`Text` - a trimmed, non-empty run of character data

Both are frozen dataclasses. ``children`` is stored as a tuple and
``attributes`` as a read-only mapping of tuples, so a finished tree cannot be
changed in place and is safe to share between threads. Deriving a modified
tree means building new values, see :meth:`Element.with_child`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Node(ABC):
    """Base class of the two tree node kinds, :class:`Element` and :class:`Text`."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert node and its subtree to dictionary."""


@dataclass(frozen=True)
class Text(Node):
    """Character data between tags, trimmed of surrounding whitespace."""

    data: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert text node to dictionary."""
        return {"type": "text", "data": self.data}


AttributeValues = Union[str, Iterable[str]]


def _freeze_attributes(
    attributes: Optional[Mapping[str, AttributeValues]],
) -> Mapping[str, Tuple[str, ...]]:
    frozen: Dict[str, Tuple[str, ...]] = {}
    for key, values in (attributes or {}).items():
        if isinstance(values, str):
            frozen[key] = (values,)
        else:
            frozen[key] = tuple(values)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class Element(Node):
    """XML element with a compacted name.

    ``attributes`` maps each compacted attribute name to every value seen for
    it on this element, in encounter order. A plain string value passed to the
    constructor is treated as a single value.
    """

    name: str
    attributes: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    children: Tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Freeze attributes and children and check child types."""
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, (Element, Text)):
                raise TypeError(
                    f"Element children must be Element or Text, got {type(child).__name__}"
                )
        object.__setattr__(self, "attributes", _freeze_attributes(self.attributes))
        object.__setattr__(self, "children", children)

    @property
    def elements(self) -> Tuple["Element", ...]:
        """Direct child elements, text nodes skipped."""
        return tuple(child for child in self.children if isinstance(child, Element))

    @property
    def text(self) -> str:
        """Direct text children joined by a single space."""
        return " ".join(child.data for child in self.children if isinstance(child, Text))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value recorded for an attribute."""
        values = self.attributes.get(name)
        if not values:
            return default
        return values[0]

    def with_child(self, child: Node) -> "Element":
        """Return a copy of this element with ``child`` appended."""
        return Element(self.name, self.attributes, self.children + (child,))

    def with_children(self, children: Sequence[Node]) -> "Element":
        """Return a copy of this element with its children replaced."""
        return Element(self.name, self.attributes, tuple(children))

    def to_dict(self) -> Dict[str, Any]:
        """Convert element and its subtree to dictionary."""
        return {
            "type": "element",
            "name": self.name,
            "attributes": {key: list(values) for key, values in self.attributes.items()},
            "children": [child.to_dict() for child in self.children],
        }

"""Structural XML events and the reader that produces them.

Key Components:
    XMLEvent: Single event with its type, name, attributes or text
    EventType: Enumeration of reported event types
    XMLEventReader: Pull-based iterator of events over a character stream
"""

from .reader import XMLEventReader
from .types import (
    TREE_EVENT_TYPES,
    Attribute,
    EventPosition,
    EventType,
    XMLEvent,
)

__all__ = [
    "TREE_EVENT_TYPES",
    "Attribute",
    "EventPosition",
    "EventType",
    "XMLEvent",
    "XMLEventReader",
]

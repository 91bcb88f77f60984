"""Event vocabulary shared by the event reader and the tree builder.

The tree builder understands five event types: document start and end,
element start and end, and character data. The reader also reports comments,
processing instructions, CDATA section markers and document type
declarations so that the builder can reject them instead of dropping them.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple

from slax.shared.names import QName


class EventType(Enum):
    """Structural events reported by the event reader."""

    DOCUMENT_START = auto()
    DOCUMENT_END = auto()
    ELEMENT_START = auto()      # Carries name and attributes
    ELEMENT_END = auto()        # Carries name
    CHARACTERS = auto()         # Carries text and whitespace flag

    # Reported but not accepted by the tree builder
    COMMENT = auto()
    PROCESSING_INSTRUCTION = auto()
    CDATA_START = auto()
    CDATA_END = auto()
    DOCTYPE = auto()


TREE_EVENT_TYPES = frozenset({
    EventType.DOCUMENT_START,
    EventType.DOCUMENT_END,
    EventType.ELEMENT_START,
    EventType.ELEMENT_END,
    EventType.CHARACTERS,
})


@dataclass(frozen=True)
class EventPosition:
    """Source position of an event, as reported by expat."""

    line: int
    column: int


@dataclass(frozen=True)
class Attribute:
    """A single attribute of an element start event."""

    name: QName
    value: str


@dataclass(frozen=True)
class XMLEvent:
    """Single structural event with the payload its type requires."""

    type: EventType
    name: Optional[QName] = None
    attributes: Tuple[Attribute, ...] = ()
    text: str = ""
    is_whitespace: bool = False
    position: Optional[EventPosition] = None

    @classmethod
    def document_start(cls, position: Optional[EventPosition] = None) -> "XMLEvent":
        return cls(EventType.DOCUMENT_START, position=position)

    @classmethod
    def document_end(cls, position: Optional[EventPosition] = None) -> "XMLEvent":
        return cls(EventType.DOCUMENT_END, position=position)

    @classmethod
    def element_start(
        cls,
        name: QName,
        attributes: Iterable[Attribute] = (),
        position: Optional[EventPosition] = None,
    ) -> "XMLEvent":
        return cls(
            EventType.ELEMENT_START,
            name=name,
            attributes=tuple(attributes),
            position=position,
        )

    @classmethod
    def element_end(
        cls, name: QName, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(EventType.ELEMENT_END, name=name, position=position)

    @classmethod
    def characters(
        cls, text: str, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        """Create a character data event; the whitespace flag is derived."""
        return cls(
            EventType.CHARACTERS,
            text=text,
            is_whitespace=not text.strip(),
            position=position,
        )

    @classmethod
    def comment(
        cls, text: str, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(EventType.COMMENT, text=text, position=position)

    @classmethod
    def processing_instruction(
        cls, target: str, data: str, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(
            EventType.PROCESSING_INSTRUCTION,
            name=QName(target),
            text=data,
            position=position,
        )

    @classmethod
    def cdata_start(cls, position: Optional[EventPosition] = None) -> "XMLEvent":
        return cls(EventType.CDATA_START, position=position)

    @classmethod
    def cdata_end(cls, position: Optional[EventPosition] = None) -> "XMLEvent":
        return cls(EventType.CDATA_END, position=position)

    @classmethod
    def doctype(
        cls, name: str, position: Optional[EventPosition] = None
    ) -> "XMLEvent":
        return cls(EventType.DOCTYPE, name=QName(name), position=position)

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.type.name}({self.name.compact()})"
        if self.type == EventType.CHARACTERS:
            return f"{self.type.name}({self.text!r})"
        return self.type.name

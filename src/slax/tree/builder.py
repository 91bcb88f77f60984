"""Tree building state machine for slax.

:class:`TreeBuilder` folds a stream of :class:`~slax.events.XMLEvent` objects
into an immutable :class:`~slax.tree.nodes.Element`. Two things are
simplified along the way: qualified names are compacted into one string, and
character data that is only whitespace is dropped.

The builder moves through three states::

    READY --DOCUMENT_START--> OPEN --last ELEMENT_END--> CLOSED

While ``OPEN`` it keeps a stack of element builders, one per open element,
top of stack being the innermost. A builder collects its children in a list
and is frozen into an ``Element`` when its end event arrives, then appended to
the builder below it. Any event that does not fit the current state aborts the
build with :class:`~slax.shared.errors.ParseError`; there is no recovery and
no partial tree.
"""

import time
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional

from slax.events import TREE_EVENT_TYPES, EventType, XMLEvent
from slax.shared import (
    DuplicateAttributeError,
    DuplicateAttributePolicy,
    InvariantError,
    ParseError,
    ParserConfig,
    ParseStatistics,
    UnsupportedEventError,
    compact_qname,
    get_logger,
)
from slax.tree.nodes import Element, Node, Text


class ParserState(Enum):
    """States of the tree building state machine."""

    READY = auto()      # Waiting for the document start
    OPEN = auto()       # Consuming the document
    CLOSED = auto()     # Root element finished


class _ElementBuilder:
    """Open element whose children are still being collected."""

    __slots__ = ("name", "attributes", "children")

    def __init__(self, name: str, attributes: Dict[str, List[str]]) -> None:
        self.name = name
        self.attributes = attributes
        self.children: List[Node] = []

    def freeze(self) -> Element:
        return Element(self.name, self.attributes, tuple(self.children))


class TreeBuilder:
    """Single-use state machine that builds one tree from one event stream.

    Use :meth:`build` for the common case. :meth:`feed` and :meth:`finish`
    expose the same machine one event at a time.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration, defaults to ``ParserConfig()``
        """
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "tree_builder")

        self.state = ParserState.READY
        self.statistics = ParseStatistics()
        self._stack: List[_ElementBuilder] = []
        self._root: Optional[Element] = None

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    @property
    def root(self) -> Optional[Element]:
        """Finished root element, available once the state is CLOSED."""
        return self._root

    def build(self, events: Iterable[XMLEvent]) -> Element:
        """Consume every event and return the finished root element.

        Args:
            events: Events in document order

        Returns:
            Immutable root element

        Raises:
            ParseError: If the events violate the document structure
        """
        start_time = time.perf_counter()
        self.logger.debug("Starting tree building")

        for event in events:
            self.feed(event)
        root = self.finish()

        self.statistics.processing_time_ms = (time.perf_counter() - start_time) * 1000
        self.logger.info(
            "Tree building completed",
            extra=self.statistics.to_dict()
        )
        return root

    def feed(self, event: XMLEvent) -> None:
        """Apply a single event to the state machine."""
        self.statistics.events_processed += 1
        if not isinstance(event, XMLEvent) or event.type not in TREE_EVENT_TYPES:
            raise UnsupportedEventError(
                f"Unsupported event: {event}", self.state, event
            )

        state = self.state
        event_type = event.type

        if event_type == EventType.DOCUMENT_START:
            if state != ParserState.READY:
                raise ParseError(f"Document already started: {state.name}", state, event)
            self.state = ParserState.OPEN

        elif state == ParserState.READY:
            raise ParseError(
                f"Document not started: got {event_type.name}", state, event
            )

        elif state == ParserState.OPEN:
            _TRANSITIONS[event_type](self, event)

        elif event_type == EventType.DOCUMENT_END:
            if self._stack:
                raise InvariantError(f"Stack not empty: {len(self._stack)}")

        else:
            raise ParseError(
                f"Unexpected event after close: {event_type.name}", state, event
            )

    def finish(self) -> Element:
        """Signal the end of the event stream and return the root element."""
        if self.state != ParserState.CLOSED or self._root is None:
            raise ParseError(
                f"Document not closed at end of events: {self.state.name}",
                self.state,
            )
        return self._root

    def _start_element(self, event: XMLEvent) -> None:
        if event.name is None:
            raise ParseError("Element start without a name", self.state, event)
        if self.config.max_depth is not None and len(self._stack) >= self.config.max_depth:
            raise ParseError(
                f"Maximum element depth exceeded: {self.config.max_depth}",
                self.state,
                event,
            )

        attributes: Dict[str, List[str]] = {}
        for attribute in event.attributes:
            key = compact_qname(attribute.name)
            values = attributes.get(key)
            if values is None:
                attributes[key] = [attribute.value]
            elif self.config.duplicate_attributes == DuplicateAttributePolicy.ERROR:
                raise DuplicateAttributeError(
                    f"Duplicate attribute: {key}", self.state, event
                )
            else:
                values.append(attribute.value)

        self._stack.append(_ElementBuilder(compact_qname(event.name), attributes))
        self.statistics.max_depth = max(self.statistics.max_depth, len(self._stack))

    def _end_element(self, event: XMLEvent) -> None:
        if not self._stack:
            raise ParseError("Stack empty: no open element to end", self.state, event)

        head = self._stack.pop().freeze()
        self.statistics.elements_built += 1
        if self._stack:
            self._stack[-1].children.append(head)
        else:
            self._root = head
            self.state = ParserState.CLOSED

    def _characters(self, event: XMLEvent) -> None:
        data = event.text.strip()
        if event.is_whitespace or not data:
            self.statistics.whitespace_discarded += 1
            return
        if not self._stack:
            raise ParseError("Stack empty: text outside of an element", self.state, event)

        self._stack[-1].children.append(Text(data))
        self.statistics.text_nodes_built += 1

    def _end_document(self, event: XMLEvent) -> None:
        raise ParseError(
            f"State should be closed: {len(self._stack)} element(s) still open",
            self.state,
            event,
        )


# Handlers for events received while OPEN.
_TRANSITIONS = {
    EventType.ELEMENT_START: TreeBuilder._start_element,
    EventType.ELEMENT_END: TreeBuilder._end_element,
    EventType.CHARACTERS: TreeBuilder._characters,
    EventType.DOCUMENT_END: TreeBuilder._end_document,
}


def build_tree(events: Iterable[XMLEvent], config: Optional[ParserConfig] = None) -> Element:
    """Build a tree from events with a fresh :class:`TreeBuilder`."""
    return TreeBuilder(config).build(events)

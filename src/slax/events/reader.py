"""Pull-based XML event reader on top of the standard library SAX parser.

Expat does the lexing, well-formedness checking and entity expansion. It is
fed the input stream chunk by chunk, and the SAX callbacks of each chunk are
queued as :class:`XMLEvent` objects that the caller pulls one at a time.
Malformed input raises ``xml.sax.SAXParseException`` from ``next()``.
"""

from collections import deque
from typing import IO, Any, Deque, Iterator, List, Optional, Union
from xml.sax import handler, make_parser
from xml.sax.xmlreader import AttributesImpl, IncrementalParser

from slax.events.types import Attribute, EventPosition, XMLEvent
from slax.shared.config import ParserConfig
from slax.shared.logging import get_logger
from slax.shared.names import QName

Stream = IO[Any]


class _EventCollector(handler.ContentHandler):
    """SAX content and lexical handler that queues events.

    Consecutive character callbacks are merged into a single event, so a
    text run split by expat's buffering or by entity references arrives
    whole.
    """

    def __init__(self, queue: Deque[XMLEvent]) -> None:
        super().__init__()
        self._queue = queue
        self._text: List[str] = []
        self._text_position: Optional[EventPosition] = None
        self._locator: Optional[Any] = None

    def _position(self) -> Optional[EventPosition]:
        if self._locator is None:
            return None
        line = self._locator.getLineNumber()
        column = self._locator.getColumnNumber()
        if line is None or column is None:
            return None
        return EventPosition(line, column)

    def _emit(self, event: XMLEvent) -> None:
        self._flush_text()
        self._queue.append(event)

    def _flush_text(self) -> None:
        if self._text:
            self._queue.append(XMLEvent.characters("".join(self._text), self._text_position))
            self._text = []
            self._text_position = None

    # ContentHandler

    def setDocumentLocator(self, locator: Any) -> None:
        self._locator = locator

    def startDocument(self) -> None:
        self._emit(XMLEvent.document_start(self._position()))

    def endDocument(self) -> None:
        self._emit(XMLEvent.document_end(self._position()))

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        attributes = [
            Attribute(QName.from_qualified(key), value)
            for key, value in attrs.items()
            if not _is_namespace_declaration(key)
        ]
        self._emit(XMLEvent.element_start(QName.from_qualified(name), attributes, self._position()))

    def endElement(self, name: str) -> None:
        self._emit(XMLEvent.element_end(QName.from_qualified(name), self._position()))

    def characters(self, content: str) -> None:
        if not self._text:
            self._text_position = self._position()
        self._text.append(content)

    def ignorableWhitespace(self, whitespace: str) -> None:
        self.characters(whitespace)

    def processingInstruction(self, target: str, data: str) -> None:
        self._emit(XMLEvent.processing_instruction(target, data, self._position()))

    # LexicalHandler

    def comment(self, content: str) -> None:
        self._emit(XMLEvent.comment(content, self._position()))

    def startCDATA(self) -> None:
        self._emit(XMLEvent.cdata_start(self._position()))

    def endCDATA(self) -> None:
        self._emit(XMLEvent.cdata_end(self._position()))

    def startDTD(self, name: str, public_id: Optional[str], system_id: Optional[str]) -> None:
        self._emit(XMLEvent.doctype(name, self._position()))

    def endDTD(self) -> None:
        pass


def _is_namespace_declaration(name: str) -> bool:
    return name == "xmlns" or name.startswith("xmlns:")


class XMLEventReader:
    """Iterator of :class:`XMLEvent` read lazily from a character stream.

    The reader owns ``stream`` and closes it exactly once, either when
    :meth:`close` is called or when used as a context manager. Text and
    binary streams are both accepted; binary input lets expat honor the
    encoding declaration of the document.
    """

    def __init__(self, stream: Stream, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "event_reader")

        self._stream: Optional[Stream] = stream
        self._pending: Deque[XMLEvent] = deque()
        self._sax: Optional[IncrementalParser] = self._create_parser(self._pending)
        self._started = False
        self._finished = False
        self._closed = False
        self.events_read = 0
        self.bytes_read = 0

    @staticmethod
    def _create_parser(queue: Deque[XMLEvent]) -> IncrementalParser:
        collector = _EventCollector(queue)
        parser = make_parser()
        parser.setFeature(handler.feature_external_ges, False)
        parser.setContentHandler(collector)
        parser.setProperty(handler.property_lexical_handler, collector)
        # Only parse() installs a locator; the expat driver is its own locator.
        collector.setDocumentLocator(parser)
        return parser

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[XMLEvent]:
        return self

    def __next__(self) -> XMLEvent:
        while not self._pending:
            if self._finished or self._closed:
                raise StopIteration
            self._pump()
        self.events_read += 1
        return self._pending.popleft()

    def _pump(self) -> None:
        """Feed the next chunk to expat, finishing the parse at end of input."""
        assert self._stream is not None and self._sax is not None
        chunk: Union[str, bytes] = self._stream.read(self.config.buffer_size)
        if chunk:
            self.bytes_read += len(chunk)
            self._started = True
            self._sax.feed(chunk)
            return

        if not self._started:
            # Start the parse so that empty input is reported by expat.
            self._started = True
            self._sax.feed(chunk)
        self._finished = True
        self._sax.close()
        self.logger.debug(
            "Event stream exhausted",
            extra={"bytes_read": self.bytes_read, "events_queued": len(self._pending)}
        )

    def close(self) -> None:
        """Release the stream and the SAX parser. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        stream, self._stream = self._stream, None
        self._sax = None
        self._pending.clear()
        if stream is not None:
            stream.close()

    def __enter__(self) -> "XMLEventReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

"""Parsing API for slax.

Module-level functions cover the common inputs:

- :func:`parse` detects the input type and dispatches
- :func:`parse_string` parses XML text given as ``str`` or ``bytes``
- :func:`parse_file` parses a file on disk
- :func:`parse_stream` parses a file-like object and closes it
- :func:`parse_events` builds a tree from already produced events

:class:`SlaxParser` bundles a configuration and keeps the statistics of its
last parse. Every entry point either returns a complete tree or raises;
there are no partial results.
"""

import io
import time
from pathlib import Path
from typing import IO, Any, Iterable, Optional, Union

from slax.events import XMLEvent, XMLEventReader
from slax.shared import ParserConfig, ParseStatistics, get_logger
from slax.tree import Element, TreeBuilder

InputType = Union[str, bytes, Path, IO[Any]]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
BYTE_ORDER_MARK = "\ufeff"


class SlaxParser:
    """Configured, reusable parser.

    A fresh :class:`TreeBuilder` is created for every call, so one parser can
    be used repeatedly, but not from several threads at once.

    Examples:
        >>> parser = SlaxParser(ParserConfig.strict())
        >>> root = parser.parse_string('<a:root xmlns:a="urn:a"><a:item/></a:root>')
        >>> root.name
        'a:root'
        >>> parser.last_statistics.elements_built
        2
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "parser")
        self.last_statistics: Optional[ParseStatistics] = None

    def parse(self, source: InputType) -> Element:
        """Parse XML from a path, XML text, bytes or a file-like object.

        A ``str`` is treated as XML text when it starts with ``<`` after
        leading whitespace and an optional byte order mark, and as a file
        path otherwise.
        """
        if isinstance(source, Path):
            return self.parse_file(source)
        if isinstance(source, bytes):
            return self.parse_string(source)
        if isinstance(source, str):
            if source.lstrip(BYTE_ORDER_MARK).lstrip().startswith("<"):
                return self.parse_string(source)
            return self.parse_file(source)
        if hasattr(source, "read"):
            return self.parse_stream(source)
        raise TypeError(f"Unsupported input type: {type(source).__name__}")

    def parse_string(self, xml: Union[str, bytes]) -> Element:
        """Parse XML held in memory."""
        if isinstance(xml, str):
            xml = xml.lstrip(BYTE_ORDER_MARK)
        preview = xml[:PREVIEW_LENGTH]
        self.logger.debug(
            "Parsing in-memory document",
            extra={"content_length": len(xml), "preview": preview}
        )
        stream: IO[Any] = io.BytesIO(xml) if isinstance(xml, bytes) else io.StringIO(xml)
        return self.parse_stream(stream)

    def parse_file(self, path: Union[str, Path]) -> Element:
        """Parse an XML file.

        The file is read in binary mode so that expat applies the encoding
        declared by the document.
        """
        path_obj = Path(path)
        self.logger.debug("Parsing file", extra={"file_path": str(path_obj)})
        return self.parse_stream(path_obj.open("rb"))

    def parse_stream(self, stream: IO[Any]) -> Element:
        """Parse a text or binary file-like object.

        The parser takes ownership of ``stream`` and closes it exactly once,
        whether parsing succeeds or fails.
        """
        with XMLEventReader(stream, self.config) as reader:
            return self.parse_events(reader)

    def parse_events(self, events: Iterable[XMLEvent]) -> Element:
        """Build a tree from an iterable of events."""
        builder = TreeBuilder(self.config)
        start_time = time.perf_counter()
        try:
            return builder.build(events)
        except Exception:
            self.logger.exception(
                "Parse failed",
                extra={
                    "state": builder.state.name,
                    "depth": builder.depth,
                    "events_processed": builder.statistics.events_processed,
                }
            )
            raise
        finally:
            builder.statistics.processing_time_ms = (time.perf_counter() - start_time) * 1000
            self.last_statistics = builder.statistics


def parse(source: InputType, config: Optional[ParserConfig] = None) -> Element:
    """Parse XML from a path, XML text, bytes or a file-like object.

    Examples:
        >>> root = parse('<root><item id="1">Hello</item></root>')
        >>> root.name
        ':root'
        >>> root.elements[0].attributes[':id']
        ('1',)
    """
    return SlaxParser(config).parse(source)


def parse_string(xml: Union[str, bytes], config: Optional[ParserConfig] = None) -> Element:
    """Parse XML held in memory as ``str`` or ``bytes``."""
    return SlaxParser(config).parse_string(xml)


def parse_file(path: Union[str, Path], config: Optional[ParserConfig] = None) -> Element:
    """Parse an XML file."""
    return SlaxParser(config).parse_file(path)


def parse_stream(stream: IO[Any], config: Optional[ParserConfig] = None) -> Element:
    """Parse a file-like object, closing it afterwards."""
    return SlaxParser(config).parse_stream(stream)


def parse_events(events: Iterable[XMLEvent], config: Optional[ParserConfig] = None) -> Element:
    """Build a tree from an iterable of events."""
    return SlaxParser(config).parse_events(events)

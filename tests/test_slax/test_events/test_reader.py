"""Tests for the pull-based event reader."""

import io
from typing import List
from xml.sax import SAXParseException

import pytest

from slax.events import EventType, XMLEvent, XMLEventReader
from slax.shared import ParserConfig, QName


class TrackingStream(io.StringIO):
    """StringIO that counts close calls and reads."""

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.close_calls = 0
        self.read_calls = 0

    def read(self, size: int = -1) -> str:  # type: ignore[override]
        self.read_calls += 1
        return super().read(size)

    def close(self) -> None:
        self.close_calls += 1
        super().close()


def read_events(xml, **config) -> List[XMLEvent]:
    stream = io.BytesIO(xml) if isinstance(xml, bytes) else io.StringIO(xml)
    with XMLEventReader(stream, ParserConfig(**config)) as reader:
        return list(reader)


def types(events: List[XMLEvent]) -> List[EventType]:
    return [event.type for event in events]


class TestEventSequence:
    """Tests for the events reported for well-formed documents."""

    def test_minimal_document(self) -> None:
        """Test the events of a single empty element."""
        events = read_events("<root/>")

        assert types(events) == [
            EventType.DOCUMENT_START,
            EventType.ELEMENT_START,
            EventType.ELEMENT_END,
            EventType.DOCUMENT_END,
        ]
        assert events[1].name == QName("root")
        assert events[2].name == QName("root")

    def test_prefixed_names_and_attributes(self) -> None:
        """Test that prefixes are kept and namespace declarations dropped."""
        events = read_events(
            '<cas:serviceResponse xmlns:cas="http://www.yale.edu/tp/cas" '
            'xmlns="urn:default" code="X" xml:lang="en"/>'
        )

        start = events[1]
        assert start.name == QName("serviceResponse", "cas")
        assert [(a.name, a.value) for a in start.attributes] == [
            (QName("code"), "X"),
            (QName("lang", "xml"), "en"),
        ]

    def test_character_data_and_whitespace_flag(self) -> None:
        """Test text events between elements."""
        events = read_events("<a>\n  <b>value</b>\n</a>")
        characters = [e for e in events if e.type == EventType.CHARACTERS]

        assert [(e.text, e.is_whitespace) for e in characters] == [
            ("\n  ", True),
            ("value", False),
            ("\n", True),
        ]

    def test_text_split_by_entities_is_coalesced(self) -> None:
        """Test that entity references do not split a text run."""
        events = read_events("<a>fish &amp; chips &lt;3</a>")
        characters = [e for e in events if e.type == EventType.CHARACTERS]

        assert len(characters) == 1
        assert characters[0].text == "fish & chips <3"

    def test_small_buffer_reads_incrementally(self) -> None:
        """Test that tiny chunks still yield whole names and text runs."""
        xml = '<root attr="value"><child>some text</child></root>'

        assert read_events(xml, buffer_size=1) == read_events(xml)

    def test_events_are_pulled_lazily(self) -> None:
        """Test that the stream is read only as far as needed."""
        stream = TrackingStream("<root>" + "<item/>" * 50 + "</root>")
        reader = XMLEventReader(stream, ParserConfig(buffer_size=8))

        first = next(reader)
        assert first.type == EventType.DOCUMENT_START
        assert stream.read_calls < 10
        reader.close()

    def test_bytes_with_encoding_declaration(self) -> None:
        """Test that binary input honors the declared encoding."""
        xml = '<?xml version="1.0" encoding="ISO-8859-1"?><a>caf\xe9</a>'.encode("latin-1")
        events = read_events(xml)
        characters = [e for e in events if e.type == EventType.CHARACTERS]

        assert characters[0].text == "caf\xe9"

    def test_positions_are_reported(self) -> None:
        """Test that element events carry their line."""
        events = read_events("<root>\n  <child/>\n</root>")
        child_start = [e for e in events if e.type == EventType.ELEMENT_START][1]

        assert child_start.position is not None
        assert child_start.position.line == 2


class TestUnsupportedConstructs:
    """Constructs the reader reports so that the builder can reject them."""

    def test_comment(self) -> None:
        """Test that comments become events."""
        events = read_events("<a><!-- note --></a>")

        assert EventType.COMMENT in types(events)
        assert [e.text for e in events if e.type == EventType.COMMENT] == [" note "]

    def test_processing_instruction(self) -> None:
        """Test that processing instructions become events."""
        events = read_events('<a><?render mode="fast"?></a>')

        [pi] = [e for e in events if e.type == EventType.PROCESSING_INSTRUCTION]
        assert pi.name == QName("render")
        assert pi.text == 'mode="fast"'

    def test_cdata_markers(self) -> None:
        """Test that CDATA sections are bracketed by marker events."""
        events = read_events("<a><![CDATA[<raw>]]></a>")

        assert types(events)[2:5] == [
            EventType.CDATA_START,
            EventType.CHARACTERS,
            EventType.CDATA_END,
        ]
        assert events[3].text == "<raw>"

    def test_doctype(self) -> None:
        """Test that a document type declaration becomes an event."""
        events = read_events("<!DOCTYPE a><a/>")

        assert types(events)[:2] == [EventType.DOCUMENT_START, EventType.DOCTYPE]
        assert events[1].name == QName("a")


class TestMalformedInput:
    """Errors found by expat propagate unchanged."""

    @pytest.mark.parametrize("xml", [
        "",
        "<a>",
        "<a></b>",
        "<a x='1' x='2'/>",
        "text only",
        "<a/><b/>",
    ])
    def test_malformed_documents(self, xml: str) -> None:
        """Test that expat errors reach the caller."""
        with pytest.raises(SAXParseException):
            read_events(xml)


class TestResourceRelease:
    """The reader owns its stream and closes it exactly once."""

    def test_close_after_success(self) -> None:
        """Test closing after a complete read."""
        stream = TrackingStream("<a/>")
        with XMLEventReader(stream) as reader:
            list(reader)

        assert stream.close_calls == 1
        assert reader.closed

    def test_close_after_error(self) -> None:
        """Test closing when expat fails mid-stream."""
        stream = TrackingStream("<a><b></a>")

        with pytest.raises(SAXParseException):
            with XMLEventReader(stream) as reader:
                list(reader)

        assert stream.close_calls == 1

    def test_close_is_idempotent(self) -> None:
        """Test that repeated closes release the stream once."""
        stream = TrackingStream("<a/>")
        reader = XMLEventReader(stream)
        reader.close()
        reader.close()

        assert stream.close_calls == 1

    def test_iteration_stops_after_close(self) -> None:
        """Test that a closed reader yields no more events."""
        reader = XMLEventReader(io.StringIO("<a/>"))
        next(reader)
        reader.close()

        assert list(reader) == []

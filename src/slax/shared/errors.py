"""Exception hierarchy for slax.

Parsing never recovers: every error below aborts the current operation and no
partial tree is returned. Errors raised by expat while lexing the raw document
(``xml.sax.SAXParseException``) are not wrapped and reach the caller unchanged.
"""

from typing import Any, List, Optional


class SlaxError(Exception):
    """Base exception for all slax errors."""


class ParseError(SlaxError):
    """Structural violation of the event grammar.

    Raised when an event arrives in a state that cannot accept it, e.g. a
    document end while an element is still open.
    """

    def __init__(
        self,
        message: str,
        state: Optional[Any] = None,
        event: Optional[Any] = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Description of the violated rule
            state: Parser state when the error occurred
            event: Offending event, if any
        """
        self.message = message
        self.state = state
        self.event = event
        self.position = getattr(event, "position", None)

        location = ""
        if self.position is not None:
            location = f"line {self.position.line}, column {self.position.column}: "

        super().__init__(f"{location}{message}")


class UnsupportedEventError(ParseError):
    """Event outside the vocabulary the tree builder understands."""


class DuplicateAttributeError(ParseError):
    """Attribute name repeated on one element under the strict policy."""


class InvariantError(SlaxError):
    """Internal invariant violated.

    Indicates a defect in the tree builder rather than bad input.
    """


class ConfigError(SlaxError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []

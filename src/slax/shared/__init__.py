"""Shared utilities for slax.

Configuration, logging, the error hierarchy and parse statistics used across
the event, tree and API layers.
"""

from .config import (
    DuplicateAttributePolicy,
    ParserConfig,
)
from .errors import (
    ConfigError,
    ConfigValidationError,
    DuplicateAttributeError,
    InvariantError,
    ParseError,
    SlaxError,
    UnsupportedEventError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .names import QName, compact_qname
from .result import ParseStatistics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DuplicateAttributeError",
    "DuplicateAttributePolicy",
    "InvariantError",
    "ParseError",
    "ParseStatistics",
    "ParserConfig",
    "QName",
    "SlaxError",
    "UnsupportedEventError",
    "compact_qname",
    "get_logger",
]

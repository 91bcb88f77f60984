"""Configuration for slax parsing.

``ParserConfig`` is a frozen dataclass, so a single instance can be shared by
any number of parsers and threads.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, Optional

from slax.shared.errors import ConfigValidationError

DEFAULT_BUFFER_SIZE = 16384


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class DuplicateAttributePolicy(Enum):
    """How an attribute name repeated on one element is handled."""

    ACCUMULATE = auto()    # Keep every value, in encounter order
    ERROR = auto()         # Raise DuplicateAttributeError


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for event reading and tree building."""

    buffer_size: int = DEFAULT_BUFFER_SIZE
    duplicate_attributes: DuplicateAttributePolicy = DuplicateAttributePolicy.ACCUMULATE
    max_depth: Optional[int] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not _is_int(self.buffer_size) or self.buffer_size <= 0:
            raise ConfigValidationError(
                "buffer_size must be > 0",
                field_name="buffer_size",
                suggestions=[f"Use the default of {DEFAULT_BUFFER_SIZE}"],
            )
        if not isinstance(self.duplicate_attributes, DuplicateAttributePolicy):
            raise ConfigValidationError(
                "duplicate_attributes must be a DuplicateAttributePolicy",
                field_name="duplicate_attributes",
                suggestions=[policy.name for policy in DuplicateAttributePolicy],
            )
        if self.max_depth is not None and (not _is_int(self.max_depth) or self.max_depth <= 0):
            raise ConfigValidationError(
                "max_depth must be > 0 or None",
                field_name="max_depth",
            )

    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default, lenient configuration."""
        return cls()

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration that rejects repeated attribute names."""
        return cls(duplicate_attributes=DuplicateAttributePolicy.ERROR)

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(buffer_size=4096)
            >>> config.buffer_size
            4096
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected; enum values may be given by name.
        """
        values = dict(data)
        policy = values.get("duplicate_attributes")
        if isinstance(policy, str):
            try:
                values["duplicate_attributes"] = DuplicateAttributePolicy[policy.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown duplicate_attributes policy: {policy}",
                    field_name="duplicate_attributes",
                    suggestions=[p.name for p in DuplicateAttributePolicy],
                ) from e
        return cls.default().override(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

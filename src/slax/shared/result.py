"""Statistics collected while building a tree."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class ParseStatistics:
    """Counters for a single tree building operation."""

    events_processed: int = 0
    elements_built: int = 0
    text_nodes_built: int = 0
    whitespace_discarded: int = 0
    max_depth: int = 0
    processing_time_ms: float = 0.0

    @property
    def node_count(self) -> int:
        """Total number of nodes in the finished tree."""
        return self.elements_built + self.text_nodes_built

    @property
    def events_per_second(self) -> float:
        """Calculate events processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.events_processed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to a dictionary, derived values included."""
        data = asdict(self)
        data["node_count"] = self.node_count
        data["events_per_second"] = self.events_per_second
        return data

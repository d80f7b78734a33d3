"""
Result models for decoded Elasticsearch responses.

Any of these classes can be passed as the ``model`` argument of the
``ESOper`` read operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.response_parser import parse_aggregations, parse_hits, parse_total


@dataclass
class GetResponse:
    """Single document fetched by id."""
    index: str
    id: str
    found: bool
    version: Optional[int] = None
    source: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GetResponse":
        """Create from an Elasticsearch get response dict."""
        return cls(
            index=data.get("_index", ""),
            id=data.get("_id", ""),
            found=data.get("found", False),
            version=data.get("_version"),
            source=data.get("_source"),
        )


@dataclass
class MultiGetResponse:
    """Documents fetched with a multi-get request."""
    docs: List[GetResponse] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MultiGetResponse":
        """Create from an Elasticsearch mget response dict."""
        return cls(docs=[GetResponse.from_dict(doc) for doc in data.get("docs", [])])

    @property
    def found(self) -> List[GetResponse]:
        """Documents that exist."""
        return [doc for doc in self.docs if doc.found]


@dataclass
class SearchResponse:
    """Search or scroll response."""
    took: int
    timed_out: bool
    total: int
    hits: List[Dict[str, Any]]
    aggregations: Dict[str, Any] = field(default_factory=dict)
    scroll_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResponse":
        """Create from an Elasticsearch search response dict."""
        return cls(
            took=data.get("took", 0),
            timed_out=data.get("timed_out", False),
            total=parse_total(data),
            hits=parse_hits(data),
            aggregations=parse_aggregations(data),
            scroll_id=data.get("_scroll_id"),
        )

    @property
    def sources(self) -> List[Dict[str, Any]]:
        """The ``_source`` of every hit."""
        return [hit.get("_source", {}) for hit in self.hits]

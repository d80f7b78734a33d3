"""
Type definitions for the Elasticsearch adapter.
"""

from .primitives import (
    GetResponse,
    MultiGetResponse,
    SearchResponse,
)

from .errors import (
    ElasticsearchOperError,
    ResponseStatusError,
)

__all__ = [
    # Models
    "GetResponse",
    "MultiGetResponse",
    "SearchResponse",
    # Errors
    "ElasticsearchOperError",
    "ResponseStatusError",
]

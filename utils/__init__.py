"""
Utility functions for the Elasticsearch adapter.
"""

from .connection import new_es_client, must_new_es_client, test_connection
from .template import TextTemplate
from .response_parser import (
    response_body,
    decode_response,
    extract_count,
    parse_hits,
    parse_total,
    parse_aggregations,
)

__all__ = [
    # Connection
    "new_es_client",
    "must_new_es_client",
    "test_connection",
    # Templates
    "TextTemplate",
    # Response parsing
    "response_body",
    "decode_response",
    "extract_count",
    "parse_hits",
    "parse_total",
    "parse_aggregations",
]

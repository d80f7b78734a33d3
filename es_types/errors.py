"""
Error types raised by the Elasticsearch adapter.

Transport errors from the client (``elasticsearch.TransportError`` and its
subclasses) are not wrapped and reach the caller unchanged.
"""

import json
from http import HTTPStatus
from typing import Any


class ElasticsearchOperError(Exception):
    """Base exception for adapter errors."""


def format_status(status: int) -> str:
    """Render a status code with its reason phrase, e.g. ``404 Not Found``."""
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def format_body(body: Any) -> str:
    """Render a response body as raw text."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return str(body)


class ResponseStatusError(ElasticsearchOperError):
    """Raised when Elasticsearch answers with a non-success status."""

    def __init__(self, status: int, body: Any = None):
        self.status = status
        self.body = body
        super().__init__(
            f"elasticsearch response status indicates failure: "
            f"{format_status(status)}, {format_body(body)}"
        )

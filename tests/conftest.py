"""
Pytest configuration and fixtures for the Elasticsearch adapter tests.
"""

import pytest
import os
import sys
from unittest.mock import Mock
from typing import Any, Dict

from elasticsearch import ApiError, Elasticsearch

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from oper import ESOper  # noqa: E402


SEARCH_RESPONSE: Dict[str, Any] = {
    "took": 5,
    "timed_out": False,
    "_scroll_id": "scroll-1",
    "hits": {
        "total": {"value": 2, "relation": "eq"},
        "hits": [
            {"_index": "products", "_id": "1", "_source": {"name": "kettle", "price": 30}},
            {"_index": "products", "_id": "2", "_source": {"name": "toaster", "price": 45}},
        ],
    },
    "aggregations": {"brands": {"buckets": [{"key": "acme", "doc_count": 2}]}},
}

GET_RESPONSE: Dict[str, Any] = {
    "_index": "products",
    "_id": "1",
    "_version": 3,
    "found": True,
    "_source": {"name": "kettle", "price": 30},
}

MGET_RESPONSE: Dict[str, Any] = {
    "docs": [
        GET_RESPONSE,
        {"_index": "products", "_id": "9", "found": False},
    ]
}


def make_api_error(status: int, body: Any) -> ApiError:
    """Build the error the client raises for a failure status."""
    return ApiError(message="api error", meta=Mock(status=status), body=body)


@pytest.fixture
def mock_elasticsearch():
    """Mock Elasticsearch client for testing."""
    mock_es = Mock(spec=Elasticsearch)

    mock_es.get.return_value = GET_RESPONSE
    mock_es.mget.return_value = MGET_RESPONSE
    mock_es.search.return_value = SEARCH_RESPONSE
    mock_es.scroll.return_value = SEARCH_RESPONSE
    mock_es.count.return_value = {"count": 42, "_shards": {"total": 1, "successful": 1}}

    mock_es.index.return_value = {"result": "created"}
    mock_es.create.return_value = {"result": "created"}
    mock_es.update.return_value = {"result": "updated"}
    mock_es.delete.return_value = {"result": "deleted"}
    mock_es.bulk.return_value = {"errors": False, "items": []}
    mock_es.delete_by_query.return_value = {"deleted": 2}
    mock_es.update_by_query.return_value = {"updated": 2}
    mock_es.clear_scroll.return_value = {"succeeded": True, "num_freed": 1}

    return mock_es


@pytest.fixture
def es_oper(mock_elasticsearch):
    """ESOper wrapping the mock client."""
    return ESOper(mock_elasticsearch)


@pytest.fixture
def mock_template():
    """Mock template engine recording which rendering path was used."""
    template = Mock()
    template.execute.return_value = '{"query": {"match_all": {}}}'
    template.execute_template.return_value = '{"query": {"term": {"brand": "acme"}}}'
    return template


@pytest.fixture
def sample_query():
    """Sample query body text."""
    return '{"query": {"match": {"name": "kettle"}}}'

"""
Unit tests for the ESOper document operations.
"""

import json
import re
import pytest
from dataclasses import dataclass
from unittest.mock import Mock

from elasticsearch import ConnectionError as ESConnectionError

from conftest import GET_RESPONSE, MGET_RESPONSE, make_api_error
from es_types import GetResponse, MultiGetResponse, ResponseStatusError


@dataclass
class Product:
    name: str
    price: int


class TestGet:
    """Test cases for ESOper.get."""

    def test_get_returns_raw_body_without_model(self, es_oper, mock_elasticsearch):
        """Test that the decoded body equals the served fixture."""
        result = es_oper.get(None, "products", "1")

        assert result == GET_RESPONSE
        mock_elasticsearch.get.assert_called_once_with(index="products", id="1")

    def test_get_decodes_into_model(self, es_oper):
        """Test decoding into a model with from_dict."""
        result = es_oper.get(GetResponse, "products", "1")

        assert isinstance(result, GetResponse)
        assert result.found is True
        assert result.version == 3
        assert result.source == {"name": "kettle", "price": 30}

    def test_get_decodes_into_plain_callable(self, es_oper, mock_elasticsearch):
        """Test decoding into a model without from_dict."""
        mock_elasticsearch.get.return_value = {"name": "kettle", "price": 30}

        result = es_oper.get(Product, "products", "1")

        assert result == Product(name="kettle", price=30)

    def test_get_forwards_options(self, es_oper, mock_elasticsearch):
        """Test that extra keyword arguments reach the client."""
        es_oper.get(None, "products", "1", routing="user-7", _source_includes=["name"])

        mock_elasticsearch.get.assert_called_once_with(
            index="products", id="1", routing="user-7", _source_includes=["name"]
        )

    def test_get_not_found(self, es_oper, mock_elasticsearch):
        """Test that a 404 becomes a ResponseStatusError carrying the body."""
        body = {"_index": "products", "_id": "404", "found": False}
        mock_elasticsearch.get.side_effect = make_api_error(404, body)

        with pytest.raises(ResponseStatusError) as exc_info:
            es_oper.get(None, "products", "404")

        message = str(exc_info.value)
        assert "404 Not Found" in message
        assert json.dumps(body) in message
        assert exc_info.value.status == 404
        assert exc_info.value.body == body

    def test_get_transport_error_passes_through(self, es_oper, mock_elasticsearch):
        """Test that connection errors are not wrapped."""
        error = ESConnectionError("Connection refused")
        mock_elasticsearch.get.side_effect = error

        with pytest.raises(ESConnectionError) as exc_info:
            es_oper.get(None, "products", "1")

        assert exc_info.value is error

    def test_get_model_error_passes_through(self, es_oper, mock_elasticsearch):
        """Test that model decode errors are not wrapped."""
        mock_elasticsearch.get.return_value = {"unexpected": "field"}

        with pytest.raises(TypeError):
            es_oper.get(Product, "products", "1")


class TestMultiGet:
    """Test cases for ESOper.multi_get."""

    def test_multi_get_encodes_ids(self, es_oper, mock_elasticsearch):
        """Test that ids are sent as a JSON body."""
        result = es_oper.multi_get(None, "products", ["1", "9"])

        assert result == MGET_RESPONSE
        kwargs = mock_elasticsearch.mget.call_args[1]
        assert kwargs["index"] == "products"
        assert json.loads(kwargs["body"]) == {"ids": ["1", "9"]}

    def test_multi_get_decodes_into_model(self, es_oper):
        """Test decoding into MultiGetResponse."""
        result = es_oper.multi_get(MultiGetResponse, "products", ["1", "9"])

        assert len(result.docs) == 2
        assert [doc.id for doc in result.found] == ["1"]

    def test_multi_get_error_status(self, es_oper, mock_elasticsearch):
        """Test failure status handling."""
        mock_elasticsearch.mget.side_effect = make_api_error(400, "bad request body")

        with pytest.raises(ResponseStatusError, match="400 Bad Request, bad request body"):
            es_oper.multi_get(None, "products", [])


class TestWrites:
    """Test cases for create, index, update and delete."""

    def test_index_encodes_payload(self, es_oper, mock_elasticsearch):
        """Test that the document is sent as JSON text."""
        result = es_oper.index("products", "1", {"name": "kettle", "price": 30})

        assert result is None
        mock_elasticsearch.index.assert_called_once_with(
            index="products", id="1", body='{"name": "kettle", "price": 30}'
        )

    def test_index_encodes_dataclass(self, es_oper, mock_elasticsearch):
        """Test that dataclass payloads are encoded field by field."""
        es_oper.index("products", "1", Product(name="kettle", price=30))

        body = mock_elasticsearch.index.call_args[1]["body"]
        assert json.loads(body) == {"name": "kettle", "price": 30}

    def test_index_without_id(self, es_oper, mock_elasticsearch):
        """Test that an empty id lets Elasticsearch generate one."""
        es_oper.index("products", None, {"name": "kettle"})

        assert "id" not in mock_elasticsearch.index.call_args[1]

    def test_index_unencodable_payload(self, es_oper, mock_elasticsearch):
        """Test that encode errors surface before any request."""
        with pytest.raises(TypeError):
            es_oper.index("products", "1", {"when": object()})

        mock_elasticsearch.index.assert_not_called()

    def test_index_options_override(self, es_oper, mock_elasticsearch):
        """Test that caller options win over adapter arguments."""
        es_oper.index("products", "1", {}, refresh="wait_for", id="2")

        kwargs = mock_elasticsearch.index.call_args[1]
        assert kwargs["refresh"] == "wait_for"
        assert kwargs["id"] == "2"

    def test_create(self, es_oper, mock_elasticsearch):
        """Test creating a document."""
        es_oper.create("products", "1", {"name": "kettle"})

        mock_elasticsearch.create.assert_called_once_with(
            index="products", id="1", body='{"name": "kettle"}'
        )

    def test_create_conflict(self, es_oper, mock_elasticsearch):
        """Test that a version conflict is reported with its body."""
        body = {"error": {"type": "version_conflict_engine_exception"}, "status": 409}
        mock_elasticsearch.create.side_effect = make_api_error(409, body)

        with pytest.raises(ResponseStatusError) as exc_info:
            es_oper.create("products", "1", {"name": "kettle"})

        assert "409 Conflict" in str(exc_info.value)
        assert "version_conflict_engine_exception" in str(exc_info.value)

    def test_update_wraps_doc(self, es_oper, mock_elasticsearch):
        """Test that updates are sent as partial documents."""
        es_oper.update("products", "1", {"price": 35})

        kwargs = mock_elasticsearch.update.call_args[1]
        assert kwargs["index"] == "products"
        assert kwargs["id"] == "1"
        assert json.loads(kwargs["body"]) == {"doc": {"price": 35}}

    def test_delete(self, es_oper, mock_elasticsearch):
        """Test deleting a document."""
        es_oper.delete("products", "1", refresh=True)

        mock_elasticsearch.delete.assert_called_once_with(index="products", id="1", refresh=True)

    def test_delete_error_status(self, es_oper, mock_elasticsearch):
        """Test failure status handling on delete."""
        mock_elasticsearch.delete.side_effect = make_api_error(404, {"result": "not_found"})

        with pytest.raises(ResponseStatusError, match=re.escape('404 Not Found, {"result": "not_found"}')):
            es_oper.delete("products", "1")


class TestBulk:
    """Test cases for ESOper.bulk."""

    def test_bulk_sends_buffered_body(self, es_oper, mock_elasticsearch):
        """Test that the callback output is sent as one request."""
        def write_body(buf):
            buf.write('{"index": {"_id": "1"}}\n')
            buf.write('{"name": "kettle"}\n')
            buf.write('{"delete": {"_id": "2"}}\n')

        es_oper.bulk("products", write_body)

        mock_elasticsearch.bulk.assert_called_once_with(
            index="products",
            body='{"index": {"_id": "1"}}\n{"name": "kettle"}\n{"delete": {"_id": "2"}}\n',
        )

    def test_bulk_callback_error(self, es_oper, mock_elasticsearch):
        """Test that nothing is sent when the callback fails."""
        write_body = Mock(side_effect=ValueError("cannot build body"))

        with pytest.raises(ValueError, match="cannot build body"):
            es_oper.bulk("products", write_body)

        mock_elasticsearch.bulk.assert_not_called()

    def test_bulk_error_status(self, es_oper, mock_elasticsearch):
        """Test failure status handling on bulk."""
        mock_elasticsearch.bulk.side_effect = make_api_error(429, "too many requests")

        with pytest.raises(ResponseStatusError, match="429 Too Many Requests, too many requests"):
            es_oper.bulk("products", lambda buf: buf.write("{}\n"))

    def test_bulk_without_default_index(self, es_oper, mock_elasticsearch):
        """Test that an empty index is not sent."""
        es_oper.bulk("", lambda buf: buf.write("{}\n"))

        assert mock_elasticsearch.bulk.call_args[1]["index"] is None

"""
Simplified interface over the Elasticsearch client.

Every operation issues exactly one client call. Keyword arguments are passed
through to the client verbatim and take precedence over the adapter's own.
"""

import dataclasses
import io
import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Sequence

from elasticsearch import ApiError, Elasticsearch

from config.environments import ESConfig
from es_types.errors import ResponseStatusError
from oper.query import Query, TemplateParam, render_query
from utils.connection import new_es_client
from utils.response_parser import decode_response, extract_count


logger = logging.getLogger(__name__)

# Keep-alive of a scroll cursor between two pages
SCROLL_KEEP_ALIVE = "5m"


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_json(obj: Any) -> str:
    """Encode a request payload; dataclasses are encoded field by field."""
    return json.dumps(obj, default=_json_default)


def _indexes(indexes: Optional[Sequence[str]]) -> Optional[List[str]]:
    return list(indexes) if indexes else None


@contextmanager
def _checked(operation: str) -> Iterator[None]:
    """Turn failure statuses into ResponseStatusError; transport errors pass through."""
    try:
        yield
    except ApiError as e:
        status = e.meta.status
        logger.warning("elasticsearch %s failed with status %s", operation, status)
        raise ResponseStatusError(status, e.body) from e


class ESOper:
    """
    Document and search operations on top of an Elasticsearch client.

    The client is borrowed, not owned: closing it is up to the caller.
    """

    def __init__(self, client: Elasticsearch):
        self._client = client

    @property
    def es_client(self) -> Elasticsearch:
        """The wrapped Elasticsearch client."""
        return self._client

    # ========== DOCUMENTS ==========

    def get(self, model: Optional[Callable[..., Any]], index: str, doc_id: str, **params: Any) -> Any:
        """
        Fetch a document by id.

        Args:
            model: Decode target for the response body (None for the raw dict)
            index: Index name
            doc_id: Document id
            **params: Extra client arguments

        Returns:
            The decoded response

        Raises:
            ResponseStatusError: If Elasticsearch answers with a failure status,
                including 404 for a missing document
        """
        with _checked("get"):
            response = self._client.get(**{"index": index, "id": doc_id, **params})
        return decode_response(response, model)

    def multi_get(
        self,
        model: Optional[Callable[..., Any]],
        index: str,
        ids: Sequence[str],
        **params: Any,
    ) -> Any:
        """
        Fetch several documents of one index by id.

        Args:
            model: Decode target for the response body (None for the raw dict)
            index: Index name
            ids: Document ids
            **params: Extra client arguments

        Returns:
            The decoded response
        """
        body = encode_json({"ids": list(ids)})
        with _checked("mget"):
            response = self._client.mget(**{"index": index, "body": body, **params})
        return decode_response(response, model)

    def bulk(self, index: Optional[str], write_body: Callable[[io.StringIO], None], **params: Any) -> None:
        """
        Send several index/update/delete operations in a single request.

        ``write_body`` writes the newline-delimited bulk body into the buffer
        it is given. Nothing is sent if it raises.

        Args:
            index: Default index for operations that do not name one
            write_body: Callback filling the request body
            **params: Extra client arguments
        """
        buf = io.StringIO()
        write_body(buf)
        with _checked("bulk"):
            self._client.bulk(**{"index": index or None, "body": buf.getvalue(), **params})

    def create(self, index: str, doc_id: str, obj: Any, **params: Any) -> None:
        """Index a new document, failing if the id already exists."""
        body = encode_json(obj)
        with _checked("create"):
            self._client.create(**{"index": index, "id": doc_id, "body": body, **params})

    def index(self, index: str, doc_id: Optional[str], obj: Any, **params: Any) -> None:
        """
        Create or replace a document.

        Args:
            index: Index name
            doc_id: Document id, or None to let Elasticsearch generate one
            obj: Document to store
            **params: Extra client arguments
        """
        body = encode_json(obj)
        kwargs = {"index": index, "body": body}
        if doc_id:
            kwargs["id"] = doc_id
        with _checked("index"):
            self._client.index(**{**kwargs, **params})

    def update(self, index: str, doc_id: str, obj: Any, **params: Any) -> None:
        """Merge ``obj`` into an existing document as a partial ``doc`` update."""
        body = encode_json({"doc": obj})
        with _checked("update"):
            self._client.update(**{"index": index, "id": doc_id, "body": body, **params})

    def delete(self, index: str, doc_id: str, **params: Any) -> None:
        """Delete a document by id."""
        with _checked("delete"):
            self._client.delete(**{"index": index, "id": doc_id, **params})

    # ========== BY QUERY ==========

    def delete_by_query(self, query: Query, indexes: Sequence[str], **params: Any) -> None:
        """
        Delete every document matching a query.

        Args:
            query: Query body text or a QuerySource
            indexes: Indices to delete from
            **params: Extra client arguments
        """
        query = render_query(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("delete_by_query: the delete query is %s", query)
        with _checked("delete_by_query"):
            self._client.delete_by_query(**{"index": _indexes(indexes), "body": query, **params})

    def delete_by_query_template(self, t: TemplateParam, indexes: Sequence[str], **params: Any) -> None:
        """Render ``t`` and delete the documents matching the result."""
        self.delete_by_query(t.execute(), indexes, **params)

    def update_by_query(self, query: Query, indexes: Sequence[str], **params: Any) -> None:
        """
        Update every document matching a query, typically with a script.

        Args:
            query: Request body text or a QuerySource
            indexes: Indices to update
            **params: Extra client arguments
        """
        query = render_query(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("update_by_query: the update query is %s", query)
        with _checked("update_by_query"):
            self._client.update_by_query(**{"index": _indexes(indexes), "body": query, **params})

    def update_by_query_template(self, t: TemplateParam, indexes: Sequence[str], **params: Any) -> None:
        """Render ``t`` and run it as an update-by-query request."""
        self.update_by_query(t.execute(), indexes, **params)

    # ========== SEARCH ==========

    def count(self, query: Query, indexes: Sequence[str], **params: Any) -> int:
        """
        Count documents matching a query.

        Args:
            query: Query body text or a QuerySource
            indexes: Indices to count in (all when empty)
            **params: Extra client arguments

        Returns:
            Number of matching documents
        """
        query = render_query(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("count: the count query is %s", query)
        with _checked("count"):
            response = self._client.count(**{"index": _indexes(indexes), "body": query, **params})
        return extract_count(response)

    def count_template(self, t: TemplateParam, indexes: Sequence[str], **params: Any) -> int:
        """Render ``t`` and count the documents matching the result."""
        return self.count(t.execute(), indexes, **params)

    def search(
        self,
        model: Optional[Callable[..., Any]],
        query: Query,
        indexes: Sequence[str],
        **params: Any,
    ) -> Any:
        """
        Run a search request.

        Pass ``scroll="5m"`` to open a scroll cursor, then page with
        search_by_scroll_id.

        Args:
            model: Decode target for the response body (None for the raw dict)
            query: Search body text or a QuerySource
            indexes: Indices to search (all when empty)
            **params: Extra client arguments

        Returns:
            The decoded response
        """
        query = render_query(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("search: the search query is %s", query)
        with _checked("search"):
            response = self._client.search(**{"index": _indexes(indexes), "body": query, **params})
        return decode_response(response, model)

    def search_template(
        self,
        model: Optional[Callable[..., Any]],
        t: TemplateParam,
        indexes: Sequence[str],
        **params: Any,
    ) -> Any:
        """Render ``t`` and search with the result."""
        return self.search(model, t.execute(), indexes, **params)

    def search_by_scroll_id(self, model: Optional[Callable[..., Any]], scroll_id: str, **params: Any) -> Any:
        """
        Fetch the next page of a scroll cursor.

        The cursor is kept alive for another five minutes unless ``scroll``
        is given.
        """
        with _checked("scroll"):
            response = self._client.scroll(
                **{"scroll_id": scroll_id, "scroll": SCROLL_KEEP_ALIVE, **params}
            )
        return decode_response(response, model)

    def clear_scroll(self, scroll_id: str, **params: Any) -> None:
        """Release a scroll cursor before it expires."""
        with _checked("clear_scroll"):
            self._client.clear_scroll(**{"scroll_id": scroll_id, **params})


def new_es_oper(config: Optional[ESConfig] = None) -> ESOper:
    """
    Build an ESOper over a new client.

    Args:
        config: Connection settings (read from the environment if not given)
    """
    return ESOper(new_es_client(config))

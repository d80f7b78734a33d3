"""
Response parsing utilities for Elasticsearch.
"""

from typing import Any, Callable, Dict, List, Optional

from elastic_transport import ApiResponse


def response_body(response: Any) -> Any:
    """
    Extract the decoded body from a client response.

    Args:
        response: ApiResponse returned by the client, or an already decoded body

    Returns:
        Decoded response body
    """
    if isinstance(response, ApiResponse):
        return response.body
    return response


def decode_response(response: Any, model: Optional[Callable[..., Any]] = None) -> Any:
    """
    Decode a response body into a caller-supplied model.

    Args:
        response: Client response or decoded body
        model: None to get the plain body, a type with ``from_dict``,
            or any callable accepting the body fields as keywords

    Returns:
        The decoded model instance
    """
    body = response_body(response)
    if model is None:
        return body
    from_dict = getattr(model, "from_dict", None)
    if from_dict is not None:
        return from_dict(body)
    return model(**body)


def extract_count(response: Any) -> int:
    """
    Extract the document count from a count response.

    Args:
        response: Client response for a count request

    Returns:
        Number of matching documents
    """
    return int(response_body(response)["count"])


def parse_hits(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Extract hits from search response.

    Args:
        response: Elasticsearch response

    Returns:
        List of hit documents
    """
    return response.get("hits", {}).get("hits", [])


def parse_total(response: Dict[str, Any]) -> int:
    """Extract the total hit count, which may be an int or ``{"value": n}``."""
    total = response.get("hits", {}).get("total", 0)
    if isinstance(total, dict):
        total = total.get("value", 0)
    return total


def parse_aggregations(response: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract aggregations from response.

    Args:
        response: Elasticsearch response

    Returns:
        Aggregations dict
    """
    return response.get("aggregations", {})

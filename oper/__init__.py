"""
Elasticsearch operations adapter.
"""

from .query import QuerySource, RawQuery, TemplateParam, render_query
from .es_oper import ESOper, SCROLL_KEEP_ALIVE, encode_json, new_es_oper

__all__ = [
    # Adapter
    "ESOper",
    "new_es_oper",
    "encode_json",
    "SCROLL_KEEP_ALIVE",
    # Query sources
    "QuerySource",
    "RawQuery",
    "TemplateParam",
    "render_query",
]

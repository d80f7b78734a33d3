"""
Query sources accepted by the query-taking ESOper operations.

A query is either literal JSON text or something that renders to it, such as
a template with its data.
"""

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable


@runtime_checkable
class QuerySource(Protocol):
    """Anything that can render itself to a query body."""

    def render(self) -> str:
        ...


@runtime_checkable
class TemplateEngine(Protocol):
    """The two rendering entry points TemplateParam relies on."""

    def execute(self, data: Any) -> str:
        ...

    def execute_template(self, name: str, data: Any) -> str:
        ...


@dataclass(frozen=True)
class RawQuery:
    """Literal query text, sent unchanged."""
    text: str

    def render(self) -> str:
        return self.text


@dataclass
class TemplateParam:
    """
    A template, the data to render it with, and an optional template name.

    With an empty ``name`` the template's root is rendered, otherwise the
    named sub-template.
    """
    template: TemplateEngine
    data: Any = None
    name: str = ""

    def execute(self) -> str:
        if not self.name:
            return self.template.execute(self.data)
        return self.template.execute_template(self.name, self.data)

    def render(self) -> str:
        return self.execute()


Query = Union[str, QuerySource]


def render_query(query: Query) -> str:
    """
    Resolve a query to the text sent to Elasticsearch.

    Args:
        query: Literal query text or a QuerySource

    Returns:
        Query text

    Raises:
        TypeError: If query is neither text nor a QuerySource
    """
    if isinstance(query, str):
        return query
    if isinstance(query, QuerySource):
        return query.render()
    raise TypeError(f"unsupported query type: {type(query).__name__}")

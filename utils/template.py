"""
Text templates for building query bodies.
"""

from typing import Any, Dict, Mapping, Optional

import jinja2


ROOT_TEMPLATE = "__root__"


class TextTemplate:
    """
    A root template plus optional named sub-templates, rendered with Jinja2.

    Named templates share one environment, so they can ``{% include %}`` or
    ``{% import %}`` each other. Undefined variables raise
    ``jinja2.UndefinedError`` instead of rendering as empty text.
    """

    def __init__(
        self,
        source: Optional[str] = None,
        templates: Optional[Dict[str, str]] = None,
    ):
        mapping = dict(templates or {})
        root = None
        if source is not None:
            mapping[ROOT_TEMPLATE] = source
            root = ROOT_TEMPLATE
        self._load(jinja2.DictLoader(mapping), root)

    @classmethod
    def from_directory(cls, template_dir: str, root: Optional[str] = None) -> "TextTemplate":
        """
        Load templates from files.

        Args:
            template_dir: Directory holding the template files
            root: File name of the default template, if any

        Returns:
            TextTemplate reading from ``template_dir``
        """
        template = cls()
        template._load(jinja2.FileSystemLoader(template_dir), root)
        return template

    def _load(self, loader: jinja2.BaseLoader, root: Optional[str]) -> None:
        self._root = root
        self._env = jinja2.Environment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def execute(self, data: Any = None) -> str:
        """
        Render the root template.

        Raises:
            jinja2.TemplateNotFound: no root template was configured
            jinja2.TemplateError: rendering the template failed
        """
        if self._root is None:
            raise jinja2.TemplateNotFound("<root>", "no root template configured")
        return self.execute_template(self._root, data)

    def execute_template(self, name: str, data: Any = None) -> str:
        """
        Render a named template.

        Raises:
            jinja2.TemplateNotFound: ``name`` is unknown
            jinja2.TemplateError: rendering the template failed
        """
        template = self._env.get_template(name)
        return template.render(**_context(data))


def _context(data: Any) -> Dict[str, Any]:
    """Mappings are spread into the context; anything else is bound to ``data``."""
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}

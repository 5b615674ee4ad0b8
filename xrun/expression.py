"""Expression evaluation of row-scoped templates.

Select keys, previews and actions are small templates rendered against one
table row. Row cells are exposed under the header name converted to lower
camel case, so ``APP VERSION`` becomes ``appVersion``::

    helm get notes {{ name }} -n {{ namespace }}
"""

import re
from typing import Dict, List, Protocol

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from xrun.errors import TemplateRenderError

_WORD_SEPARATORS_RE = re.compile(r"[\s_\-.]+")


class ExpressionEvaluator(Protocol):
    """Renders a template string with the given variables."""

    def render(self, tpl: str, data: Dict[str, str]) -> str:
        ...


class JinjaEvaluator:
    """Jinja2 evaluator running in a sandbox. Unknown variables render empty."""

    def __init__(self):
        self.env = SandboxedEnvironment(keep_trailing_newline=False)

    def render(self, tpl: str, data: Dict[str, str]) -> str:
        """Render ``tpl`` with ``data``.

        Raises:
            TemplateRenderError: If the template cannot be parsed or rendered
        """
        try:
            return self.env.from_string(tpl).render(data)
        except TemplateError as e:
            raise TemplateRenderError(f"while rendering template {tpl!r}: {e}") from e


def to_lower_camel_case(name: str) -> str:
    """Convert a column header such as ``APP VERSION`` to ``appVersion``."""
    words = [w for w in _WORD_SEPARATORS_RE.split(name.strip().lower()) if w]
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def row_data(headers: List[str], row: List[str]) -> Dict[str, str]:
    """Map each header, in lower camel case, to the matching row cell."""
    return {to_lower_camel_case(col): value for col, value in zip(headers, row)}


def render_row(evaluator: ExpressionEvaluator, tpl: str, headers: List[str], row: List[str]) -> str:
    """Render ``tpl`` against a single table row."""
    return evaluator.render(tpl, row_data(headers, row))

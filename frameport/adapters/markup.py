"""
HTML markup adapter for frameport.

Renders a frame as a single ``<table>`` through a Jinja2 template with
autoescaping enabled, so every header name, cell value and attribute
has ``&``, ``<``, ``>``, ``"`` and ``'`` escaped. Source data can never
inject markup into the table.

Only ``class`` and ``id`` attributes on ``<table>`` are supported; no
other styling is emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping, Sequence
from typing import Any

from jinja2 import Environment, StrictUndefined

from frameport.adapters.base import Renderer
from frameport.config import HTMLOptions

logger = logging.getLogger(__name__)

HTML_TABLE_TEMPLATE = """\
<table{% if table_id is not none %} id="{{ table_id }}"{% endif %}\
{% if css_class is not none %} class="{{ css_class }}"{% endif %}>
{% if header %}
  <thead>
    <tr>{% for name in columns %}<th>{{ name }}</th>{% endfor %}</tr>
  </thead>
{% endif %}
  <tbody>
{% for cells in rows %}
    <tr>{% for value in cells %}<td>{{ value }}</td>{% endfor %}</tr>
{% endfor %}
  </tbody>
</table>"""


class HTMLAdapter(Renderer):
    """Renders rows as an HTML table."""

    def __init__(self) -> None:
        self._env = Environment(
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._template = self._env.from_string(HTML_TABLE_TEMPLATE)

    def render(
        self,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: HTMLOptions | None = None,
    ) -> str:
        """Assemble an HTML table.

        Args:
            columns: Column labels, in output order.
            rows: Row mappings keyed by *columns*.
            options: Header flag and ``class`` / ``id`` attributes.

        Returns:
            The ``<table>...</table>`` markup. ``None`` values render as
            empty cells.
        """
        options = options or HTMLOptions()
        cells = [
            ["" if row[c] is None else row[c] for c in columns]
            for row in rows
        ]
        html = self._template.render(
            columns=list(columns),
            rows=cells,
            header=options.header,
            css_class=options.css_class,
            table_id=options.table_id,
        )
        logger.debug("Rendered HTML table (%d rows, %d cols)", len(cells), len(columns))
        return html

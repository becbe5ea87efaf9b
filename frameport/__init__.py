"""
frameport: immutable tabular frames with CSV, fixed-width, HTML and SQL adapters.

Public API surface:

- ``Frame`` -- the container. Built only through its factories
  (``from_array``, ``from_csv``, ``from_fwf``, ``from_pandas``) and
  consumed by its outputs (``to_array``, ``to_csv``, ``to_html``,
  ``to_sql``, ``to_pandas``).

- Option models (``CSVReadOptions``, ``CSVWriteOptions``, ``FWFOptions``,
  ``HTMLOptions``, ``SQLOptions``) and ``ColumnSpec`` for fixed-width
  column triples.

- ``load_config`` / ``save_config`` for YAML project defaults, and
  ``load_layout`` / ``load_all_layouts`` for YAML fixed-width layouts.

Examples::

    from frameport import Frame

    frame = Frame.from_csv("inputs/prices.csv", delimiter=";")
    frame.to_csv("outputs/prices.csv", overwrite=True)
    html = frame.to_html(css_class="prices")

    statement = Frame.from_fwf(
        "inputs/statement.txt",
        [("date", 0, 10), ("amount", 10, 12)],
    )
    statement.to_sql(connection, "statement_lines", batch_size=1000)
"""

from __future__ import annotations

from frameport.config import (
    ColumnSpec,
    CSVReadOptions,
    CSVWriteOptions,
    FrameportConfig,
    FWFOptions,
    HTMLOptions,
    SQLOptions,
    load_config,
    save_config,
)
from frameport.exceptions import (
    ExportError,
    FrameportError,
    OptionsError,
    ParsingError,
    SchemaError,
    SinkError,
    UnsupportedOperationError,
)
from frameport.frame import Frame
from frameport.layout_registry import FWFLayout, load_all_layouts, load_layout, save_layout

__all__ = [
    "Frame",
    "ColumnSpec",
    "CSVReadOptions",
    "CSVWriteOptions",
    "FWFOptions",
    "HTMLOptions",
    "SQLOptions",
    "FrameportConfig",
    "load_config",
    "save_config",
    "FWFLayout",
    "load_layout",
    "load_all_layouts",
    "save_layout",
    "FrameportError",
    "SchemaError",
    "ParsingError",
    "ExportError",
    "SinkError",
    "OptionsError",
    "UnsupportedOperationError",
]

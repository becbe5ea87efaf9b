"""
Frame: the immutable tabular container for frameport.

A ``Frame`` is an ordered tuple of column labels plus an ordered tuple
of rows, each row mapping exactly those columns, in that order, to a
scalar value. That is the central invariant, and ``Frame._from_rows``
is the only place it is checked: every factory (array, CSV, FWF,
pandas) funnels its raw rows through that gate exactly once.

Design rationale:
- **Factory-only construction**: ``Frame(...)`` raises ``TypeError``.
  Instances come from ``from_array``, ``from_csv``, ``from_fwf`` or
  ``from_pandas``, which either return a valid frame or raise before
  one exists.
- **Immutability**: there are no mutating methods, and ``to_array()``
  hands out copies of the rows, so a frame never changes after it is
  built and can be shared across readers without locking.
- **One adapter per call**: each factory/output method delegates to
  exactly one adapter from ``frameport.adapters``.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from frameport.adapters.base import RawTable
from frameport.adapters.delimited import CSVAdapter
from frameport.adapters.fixed_width import FWFAdapter
from frameport.adapters.markup import HTMLAdapter
from frameport.adapters.relational import SQLAdapter
from frameport.config import (
    ColumnSpec,
    CSVReadOptions,
    CSVWriteOptions,
    FWFOptions,
    HTMLOptions,
    SQLOptions,
    resolve_options,
)
from frameport.exceptions import SchemaError, UnsupportedOperationError
from frameport.layout_registry import FWFLayout

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    """True for scalar NaN/NaT/NA/None; containers are never "missing"."""
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


class Frame:
    """Immutable, schema-consistent collection of rows.

    Attributes:
        columns: Column labels, in order (read-only).
        shape: ``(num_rows, num_columns)``.
    """

    __slots__ = ("_columns", "_rows")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(
            "Frame cannot be constructed directly; use Frame.from_array(), "
            "Frame.from_csv(), Frame.from_fwf() or Frame.from_pandas()"
        )

    # -- Construction gate --------------------------------------------------

    @classmethod
    def _from_rows(
        cls,
        columns: Sequence[Hashable],
        rows: Iterable[Sequence[Any]],
        line_numbers: Sequence[int] | None = None,
        source: str = "",
    ) -> Frame:
        """Validate raw value rows against *columns* and build a frame.

        Args:
            columns: Column labels. Must be unique.
            rows: One sequence of values per row, positionally aligned
                with *columns*.
            line_numbers: Optional 1-based source lines, parallel to
                *rows*, used in error messages.
            source: Optional origin (e.g., a file path) for error messages.

        Raises:
            SchemaError: If a column label repeats or any row has a
                different number of values than there are columns.
        """
        columns = tuple(columns)
        seen: set[Hashable] = set()
        for name in columns:
            if name in seen:
                raise SchemaError(f"Duplicate column name: {name!r}")
            seen.add(name)

        width = len(columns)
        built: list[dict[Hashable, Any]] = []
        for i, values in enumerate(rows):
            values = list(values)
            if len(values) != width:
                line = line_numbers[i] if line_numbers else None
                where = f"line {line}" if line is not None else f"row {i}"
                origin = f" in {source}" if source else ""
                problem = "fewer" if len(values) < width else "more"
                raise SchemaError(
                    f"Row at {where}{origin} has {len(values)} values but the frame "
                    f"has {width} columns ({problem} values than columns)",
                    line=line,
                    row=i,
                )
            built.append(dict(zip(columns, values)))

        frame = object.__new__(cls)
        frame._columns = columns
        frame._rows = tuple(built)
        return frame

    @classmethod
    def _from_raw(cls, raw: RawTable) -> Frame:
        return cls._from_rows(raw.columns, raw.rows, raw.line_numbers, raw.source)

    # -- Factories ----------------------------------------------------------

    @classmethod
    def from_array(
        cls,
        rows: Iterable[Sequence[Any] | Mapping[Hashable, Any]],
        columns: Sequence[Hashable] | None = None,
    ) -> Frame:
        """Build a frame from a sequence of sequences or of mappings.

        The column order is *columns* when given, otherwise the keys of
        the first row (mapping) or its positions ``0..n-1`` (sequence).
        Every row is then re-keyed against that order **positionally**:
        a mapping row contributes its values in its own insertion order.

        Args:
            rows: Row data.
            columns: Canonical column order.

        Returns:
            A new Frame.

        Raises:
            SchemaError: If a row has fewer or more values than columns.

        Example::

            frame = Frame.from_array([
                {"a": 1, "b": 2, "c": 3},
                {"a": 4, "b": 5, "c": 6},
            ])
        """
        rows = list(rows)
        if columns is None:
            if not rows:
                columns = ()
            elif isinstance(rows[0], Mapping):
                columns = list(rows[0].keys())
            else:
                columns = list(range(len(rows[0])))

        values = [
            list(row.values()) if isinstance(row, Mapping) else list(row)
            for row in rows
        ]
        frame = cls._from_rows(columns, values)
        logger.debug("Built frame from array %s", frame.shape)
        return frame

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        options: CSVReadOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Frame:
        """Build a frame from a delimited text file.

        Args:
            path: Path to the CSV file.
            options: ``CSVReadOptions`` (or a dict of them).
            **overrides: Individual options, e.g. ``delimiter=";"``,
                ``enclosure="'"``, ``escape="\\\\"``, ``header=False``,
                ``trim=True``, ``encoding="latin-1"``.

        Raises:
            FileNotFoundError: If *path* does not exist.
            SchemaError: If a record's field count differs from the header's.
            ParsingError: If the file cannot be tokenized.
            OptionsError: If an option is unknown or invalid.
        """
        opts = resolve_options(CSVReadOptions, options, overrides)
        return cls._from_raw(CSVAdapter().load(path, opts))

    @classmethod
    def from_fwf(
        cls,
        path: str | Path,
        colspecs: FWFLayout | Iterable[ColumnSpec | Sequence[Any]],
        options: FWFOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Frame:
        """Build a frame from a fixed-width text file.

        Args:
            path: Path to the text file.
            colspecs: Ordered ``(name, start, width)`` triples, ColumnSpecs,
                or an ``FWFLayout``. A layout also supplies default options.
            options: ``FWFOptions`` (or a dict of them).
            **overrides: Individual options, e.g. ``trim=False``.

        Raises:
            FileNotFoundError: If *path* does not exist.
            SchemaError: If the column specs repeat names or overlap.
            OptionsError: If an option or column spec is invalid.
        """
        if isinstance(colspecs, FWFLayout):
            if options is None:
                options = colspecs.options
            colspecs = colspecs.columns
        opts = resolve_options(FWFOptions, options, overrides)
        return cls._from_raw(FWFAdapter().load(path, colspecs, opts))

    @classmethod
    def from_pandas(cls, df: pd.DataFrame) -> Frame:
        """Build a frame from a pandas DataFrame (the index is dropped).

        Missing values (``NaN``/``NaT``/``pd.NA``) become ``None``.

        Raises:
            SchemaError: If the DataFrame has duplicate column labels.
        """
        rows = (
            [None if _is_missing(value) else value for value in values]
            for values in df.astype(object).itertuples(index=False, name=None)
        )
        return cls._from_rows(list(df.columns), rows)

    # -- Outputs ------------------------------------------------------------

    def to_array(self) -> list[dict[Hashable, Any]]:
        """Return the rows as a list of new ``{column: value}`` dicts."""
        return [dict(row) for row in self._rows]

    def to_csv(
        self,
        path: str | Path,
        options: CSVWriteOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Frame:
        """Write the frame to a delimited text file.

        Args:
            path: Destination path.
            options: ``CSVWriteOptions`` (or a dict of them).
            **overrides: Individual options, e.g. ``overwrite=True``,
                ``delimiter="\\t"``, ``header=False``.

        Returns:
            ``self``, so calls can be chained.

        Raises:
            FileExistsError: If *path* exists and ``overwrite`` is not set.
            ExportError: If the write fails.
            OptionsError: If an option is unknown or invalid.
        """
        opts = resolve_options(CSVWriteOptions, options, overrides)
        CSVAdapter().save(path, self._columns, self._rows, opts)
        return self

    def to_fwf(self, *args: Any, **kwargs: Any) -> Frame:
        """Fixed-width output is not implemented.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(
            "Writing fixed-width files is not supported; use to_csv() instead"
        )

    def to_html(
        self,
        options: HTMLOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> str:
        """Render the frame as an HTML ``<table>`` string.

        Args:
            options: ``HTMLOptions`` (or a dict of them).
            **overrides: ``header=False``, ``css_class="grid"``,
                ``table_id="report"`` (``class`` / ``id`` also accepted
                through a dict).

        Raises:
            OptionsError: If an option is unknown or invalid.
        """
        opts = resolve_options(HTMLOptions, options, overrides)
        return HTMLAdapter().render(self._columns, self._rows, opts)

    def to_sql(
        self,
        connection: Any,
        table_name: str,
        options: SQLOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Insert the rows into *table_name* through a DB-API connection.

        The connection stays open and owned by the caller.

        Args:
            connection: An open DB-API 2.0 connection.
            table_name: Destination table.
            options: ``SQLOptions`` (or a dict of them).
            **overrides: ``batch_size=1000``, ``transactional=False``,
                ``paramstyle="format"``, ``quote_char="`"``.

        Raises:
            SinkError: If a batch fails to insert.
            OptionsError: If an option is unknown or invalid.
        """
        opts = resolve_options(SQLOptions, options, overrides)
        SQLAdapter().insert_into(connection, table_name, self._columns, self._rows, opts)

    def to_pandas(self) -> pd.DataFrame:
        """Return the rows as a pandas DataFrame with object dtype columns."""
        return pd.DataFrame(
            [list(row.values()) for row in self._rows],
            columns=list(self._columns),
            dtype=object,
        )

    # -- Read-only accessors ------------------------------------------------

    @property
    def columns(self) -> tuple[Hashable, ...]:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self._rows), len(self._columns))

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[Hashable, Any]]:
        return (dict(row) for row in self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self._columns == other._columns and self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Frame is immutable; cannot reassign {name!r}")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        rows, cols = self.shape
        return f"Frame(rows={rows}, columns={list(self._columns)!r})"

"""
Fixed-width text (FWF) adapter for frameport.

Each physical line is sliced into fields by an ordered list of
``ColumnSpec`` triples ``(name, start, width)``. There is no header row:
the column specs alone supply the column names.

Slicing rules:
- ``line[start:start + width]`` per spec, in the given order.
- A slice past the end of a short line yields ``""`` (not an error).
- Leading/trailing slack not covered by any spec is ignored.
- Empty lines (nothing left after removing the line terminator) are skipped.

There is no writer; ``Frame.to_fwf`` raises ``UnsupportedOperationError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from frameport.adapters.base import Loader, RawTable, check_source_file
from frameport.config import ColumnSpec, FWFOptions, check_colspecs
from frameport.exceptions import OptionsError

logger = logging.getLogger(__name__)

ColSpecLike = ColumnSpec | Sequence[Any]


def normalize_colspecs(colspecs: Iterable[ColSpecLike]) -> list[ColumnSpec]:
    """Turn ``(name, start, width)`` triples into validated ColumnSpecs.

    Checks that names are unique and that the specs are ordered by
    offset without overlapping. Full line coverage is not required.

    Raises:
        OptionsError: If a triple is malformed (wrong arity, negative offset).
        SchemaError: If names repeat or offsets go backwards / overlap.
    """
    specs: list[ColumnSpec] = []
    for i, spec in enumerate(colspecs):
        if isinstance(spec, ColumnSpec):
            specs.append(spec)
            continue
        if isinstance(spec, str) or len(spec) != 3:
            raise OptionsError(
                f"Column spec #{i} must be a (name, start, width) triple, got {spec!r}"
            )
        name, start, width = spec
        try:
            specs.append(ColumnSpec(name=name, start=start, width=width))
        except ValidationError as exc:
            raise OptionsError(f"Invalid column spec #{i} {spec!r}: {exc}") from exc

    check_colspecs(specs)
    return specs


class FWFAdapter(Loader):
    """Loads fixed-width text files."""

    def load(
        self,
        path: str | Path,
        colspecs: Iterable[ColSpecLike],
        options: FWFOptions | None = None,
    ) -> RawTable:
        """Read a fixed-width file.

        Args:
            path: Path to the text file.
            colspecs: Ordered ``(name, start, width)`` triples or ColumnSpecs.
            options: Trim and encoding settings. Defaults to ``FWFOptions()``.

        Returns:
            RawTable with one row per non-empty line.

        Raises:
            FileNotFoundError: If *path* does not exist or is not a file.
            SchemaError: If the column specs are inconsistent.
        """
        options = options or FWFOptions()
        specs = normalize_colspecs(colspecs)
        path = check_source_file(path)

        rows: list[list[Any]] = []
        line_numbers: list[int] = []
        with open(path, "r", encoding=options.encoding, newline="") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line:
                    continue
                values = [line[spec.start:spec.end] for spec in specs]
                if options.trim:
                    values = [v.strip() for v in values]
                rows.append(values)
                line_numbers.append(line_no)

        logger.info(
            "Read fixed-width %s (%d rows, %d cols)", path, len(rows), len(specs)
        )
        return RawTable(
            columns=[spec.name for spec in specs],
            rows=rows,
            line_numbers=line_numbers,
            source=str(path),
        )

"""
Delimited text (CSV) adapter for frameport.

Reading:
  Records are tokenized with the ``csv`` module rather than
  ``pandas.read_csv``: pandas pads short records with empty fields,
  which would hide ragged rows that must be reported. The loader keeps
  every value as a raw string and records the line each record starts
  on, so a ragged row can be reported by line number.

Writing:
  Rows are written through ``pandas.DataFrame.to_csv`` with minimal
  quoting: a field is quoted only when it contains the delimiter, the
  enclosure character or a line break, and enclosure characters inside
  a quoted field are doubled. Records end with RFC 4180 CRLF; the csv
  writer only quotes line-break characters that appear in its line
  terminator, so CRLF is what gets a bare ``\r`` inside a value quoted.

  The destination is never written in place. Output goes to a temporary
  file in the same directory which is then ``os.replace``d over the
  destination, so a failed write leaves either the old file or nothing.
"""

from __future__ import annotations

import csv
import logging
import os
import shutil
import tempfile
from collections.abc import Hashable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from frameport.adapters.base import Loader, RawTable, Saver, check_source_file
from frameport.config import CSVReadOptions, CSVWriteOptions
from frameport.exceptions import ExportError, ParsingError

logger = logging.getLogger(__name__)

# Mode for newly created files; mkstemp() would otherwise leave them at 0600.
_NEW_FILE_MODE = 0o644

# Both characters must be in the terminator for QUOTE_MINIMAL to quote them.
_LINE_TERMINATOR = "\r\n"


def _dialect_kwargs(options: CSVReadOptions | CSVWriteOptions) -> dict[str, Any]:
    return {
        "delimiter": options.delimiter,
        "quotechar": options.enclosure,
        "escapechar": options.escape,
        "doublequote": True,
    }


class CSVAdapter(Loader, Saver):
    """Loads and saves delimited text files."""

    # -- Read side ----------------------------------------------------------

    def load(self, path: str | Path, options: CSVReadOptions | None = None) -> RawTable:
        """Read a delimited text file.

        Blank lines are skipped. The first remaining record is the header
        unless ``options.header`` is False, in which case the columns are
        the positional indices ``0..n-1`` of the first record.

        Args:
            path: Path to the CSV file.
            options: Dialect and header settings. Defaults to ``CSVReadOptions()``.

        Returns:
            RawTable with string values and the starting line of each record.

        Raises:
            FileNotFoundError: If *path* does not exist or is not a file.
            ParsingError: If the tokenizer rejects the file (e.g., stray quotes).
        """
        options = options or CSVReadOptions()
        path = check_source_file(path)

        columns: list[Hashable] | None = None
        rows: list[list[Any]] = []
        line_numbers: list[int] = []

        with open(path, "r", encoding=options.encoding, newline="") as f:
            reader = csv.reader(f, strict=True, **_dialect_kwargs(options))
            last_line = 0
            try:
                for record in reader:
                    start_line = last_line + 1
                    last_line = reader.line_num
                    if not record:
                        continue
                    if options.trim:
                        record = [value.strip() for value in record]

                    if columns is None:
                        if options.header:
                            columns = list(record)
                            continue
                        columns = list(range(len(record)))

                    rows.append(record)
                    line_numbers.append(start_line)
            except csv.Error as exc:
                raise ParsingError(
                    f"Malformed CSV in {path} at line {reader.line_num}: {exc}",
                    line=reader.line_num,
                ) from exc

        logger.info(
            "Read CSV %s (%d rows, %d cols)",
            path,
            len(rows),
            len(columns or []),
        )
        return RawTable(
            columns=columns or [],
            rows=rows,
            line_numbers=line_numbers,
            source=str(path),
        )

    # -- Write side ---------------------------------------------------------

    def save(
        self,
        path: str | Path,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: CSVWriteOptions | None = None,
    ) -> None:
        """Write rows to a delimited text file, atomically.

        Args:
            path: Destination file path. Parent directories are created.
            columns: Column labels, in output order.
            rows: Row mappings keyed by *columns*.
            options: Dialect, header and overwrite settings.

        Raises:
            FileExistsError: If *path* exists and ``options.overwrite`` is False.
                The existing file is not touched.
            ExportError: If writing or replacing the file fails.
        """
        options = options or CSVWriteOptions()
        path = Path(path)

        if path.exists() and not options.overwrite:
            raise FileExistsError(
                f"Destination already exists: {path} (pass overwrite=True to replace it)"
            )

        df = pd.DataFrame(
            [[row[c] for c in columns] for row in rows],
            columns=list(columns),
            dtype=object,
        )

        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=options.encoding, newline="") as handle:
                df.to_csv(
                    handle,
                    index=False,
                    header=options.header,
                    quoting=csv.QUOTE_MINIMAL,
                    lineterminator=_LINE_TERMINATOR,
                    na_rep="",
                    sep=options.delimiter,
                    quotechar=options.enclosure,
                    escapechar=options.escape,
                    doublequote=True,
                )
            if path.exists():
                shutil.copymode(path, tmp_name)
            else:
                os.chmod(tmp_name, _NEW_FILE_MODE)
            os.replace(tmp_name, path)
        except Exception as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise ExportError(f"Failed to write {path.name} as csv: {exc}") from exc

        logger.info(
            "Exported CSV -> %s (%d rows, %d cols)",
            path,
            len(df),
            len(df.columns),
        )

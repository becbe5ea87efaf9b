"""
Adapter interfaces for frameport.

Each format implements only the capabilities it has:

- ``Loader``: file -> RawTable (CSV, FWF).
- ``Saver``: columns + rows -> file (CSV).
- ``Renderer``: columns + rows -> string (HTML).
- ``Sink``: columns + rows -> rows in a caller-owned destination (SQL).

Loaders return a ``RawTable`` rather than a ``Frame``: the frame's
private gate is the only place the row/column invariant is enforced,
so loaders just report what they read, plus where each row came from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class RawTable:
    """Unvalidated output from any loader.

    Attributes:
        columns: Column labels in order (header names, positional indices,
            or ColumnSpec names).
        rows: One list of raw values per record, in file order.
        line_numbers: 1-based source line of each row, parallel to *rows*.
            Used only for error messages.
        source: Human-readable origin (usually the file path).
    """
    columns: list[Hashable]
    rows: list[list[Any]] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)
    source: str = ""


class Loader(ABC):
    """Reads a file into a RawTable."""

    @abstractmethod
    def load(self, path: str | Path, *args: Any, **kwargs: Any) -> RawTable:
        """Read *path* and return its rows.

        Raises:
            FileNotFoundError: If *path* does not exist or is not a file.
        """


class Saver(ABC):
    """Writes columns and rows to a file."""

    @abstractmethod
    def save(
        self,
        path: str | Path,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: Any,
    ) -> None:
        """Write *rows* to *path*.

        Raises:
            FileExistsError: If the destination exists and may not be replaced.
        """


class Renderer(ABC):
    """Renders columns and rows to a string."""

    @abstractmethod
    def render(
        self,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: Any,
    ) -> str:
        """Return the rendered representation."""


class Sink(ABC):
    """Inserts rows into a destination the adapter does not own."""

    @abstractmethod
    def insert_into(
        self,
        connection: Any,
        table_name: str,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: Any,
    ) -> int:
        """Insert *rows* and return how many were written.

        Raises:
            SinkError: If any batch fails.
        """


def check_source_file(path: str | Path) -> Path:
    """Resolve *path* and make sure it is an existing regular file.

    Raises:
        FileNotFoundError: If *path* is missing or is not a file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise FileNotFoundError(f"Not a file: {path}")
    return path

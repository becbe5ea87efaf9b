"""
Relational sink (SQL) adapter for frameport.

Inserts rows into a destination table through any DB-API 2.0 connection
(``sqlite3``, ``psycopg``, ``pymysql``, ...). The connection is borrowed
from the caller: this adapter opens and closes its own cursor but never
closes the connection.

Statement shape:
  ``INSERT INTO "table" ("a", "b") VALUES (?, ?)``

- Values are always bound parameters, never formatted into the SQL text.
- Identifiers are quoted with ``quote_char`` (embedded quote characters
  doubled); a dotted table name such as ``main.users`` is quoted per part.
- Placeholders follow the driver's DB-API ``paramstyle``.

Batching and transactions:
  Rows are sent with ``cursor.executemany()`` in batches of
  ``batch_size``. With ``transactional=True`` (default) everything is
  committed once at the end and a failing batch rolls back the whole
  insert. With ``transactional=False`` each batch is committed on its
  own and only the failing batch is rolled back. Either way the failure
  surfaces as ``SinkError`` naming the batch; no row is skipped.

No schema validation is done against the destination; the database
rejects bad rows itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterator, Mapping, Sequence
from contextlib import closing
from typing import Any

from frameport.adapters.base import Sink
from frameport.config import SQLOptions
from frameport.exceptions import SinkError

logger = logging.getLogger(__name__)

# paramstyle -> placeholder for the i-th (0-based) column
_PLACEHOLDERS: dict[str, Callable[[int], str]] = {
    "qmark": lambda i: "?",
    "numeric": lambda i: f":{i + 1}",
    "named": lambda i: f":p{i}",
    "format": lambda i: "%s",
    "pyformat": lambda i: f"%(p{i})s",
}

# paramstyles that bind by name take one dict per row
_NAMED_STYLES = {"named", "pyformat"}


def quote_identifier(name: str, quote_char: str = '"') -> str:
    """Quote a single SQL identifier, doubling embedded quote characters."""
    escaped = name.replace(quote_char, quote_char * 2)
    return f"{quote_char}{escaped}{quote_char}"


def build_insert_sql(
    table_name: str,
    columns: Sequence[Hashable],
    paramstyle: str = "qmark",
    quote_char: str = '"',
) -> str:
    """Build a parameterized INSERT statement.

    Args:
        table_name: Destination table; dots separate schema qualifiers.
        columns: Column labels, in parameter order.
        paramstyle: DB-API paramstyle (``qmark``, ``numeric``, ``named``,
            ``format``, ``pyformat``).
        quote_char: Identifier quote character (``"`` or a backtick).

    Returns:
        The SQL text. It contains placeholders only, no values.
    """
    placeholder = _PLACEHOLDERS[paramstyle]
    table_sql = ".".join(quote_identifier(part, quote_char) for part in table_name.split("."))
    column_sql = ", ".join(quote_identifier(str(c), quote_char) for c in columns)
    values_sql = ", ".join(placeholder(i) for i in range(len(columns)))
    return f"INSERT INTO {table_sql} ({column_sql}) VALUES ({values_sql})"


def _batches(
    rows: Sequence[Mapping[Hashable, Any]],
    columns: Sequence[Hashable],
    batch_size: int,
    named: bool,
) -> Iterator[list[Any]]:
    """Yield parameter batches: tuples for positional styles, dicts for named ones."""
    for offset in range(0, len(rows), batch_size):
        chunk = rows[offset:offset + batch_size]
        if named:
            yield [{f"p{i}": row[c] for i, c in enumerate(columns)} for row in chunk]
        else:
            yield [tuple(row[c] for c in columns) for row in chunk]


def _rollback(connection: Any, table_name: str) -> None:
    """Roll back after a failed batch without masking the original error.

    A dead connection usually fails its rollback too; that failure is
    logged and the caller still raises SinkError for the batch.
    """
    try:
        connection.rollback()
    except Exception as exc:
        logger.warning("Rollback failed for %s: %s", table_name, exc)


class SQLAdapter(Sink):
    """Inserts rows into a relational table via a DB-API connection."""

    def insert_into(
        self,
        connection: Any,
        table_name: str,
        columns: Sequence[Hashable],
        rows: Sequence[Mapping[Hashable, Any]],
        options: SQLOptions | None = None,
    ) -> int:
        """Insert rows in batches of parameterized statements.

        Args:
            connection: An open DB-API 2.0 connection owned by the caller.
            table_name: Destination table name.
            columns: Column labels, used as the INSERT column list.
            rows: Row mappings keyed by *columns*.
            options: Batch size, transaction mode, paramstyle, quote char.

        Returns:
            Number of rows inserted.

        Raises:
            SinkError: If a batch fails (the driver error is chained), or
                if there are rows but no columns.
        """
        options = options or SQLOptions()
        if not rows:
            logger.info("No rows to insert into %s -- skipping", table_name)
            return 0
        if not columns:
            raise SinkError(f"Cannot insert {len(rows)} rows into {table_name}: no columns")

        sql = build_insert_sql(
            table_name, columns, options.paramstyle, options.quote_char
        )
        named = options.paramstyle in _NAMED_STYLES
        batch_size = options.batch_size
        inserted = 0

        with closing(connection.cursor()) as cursor:
            for batch_index, params in enumerate(_batches(rows, columns, batch_size, named)):
                first = batch_index * batch_size
                try:
                    cursor.executemany(sql, params)
                    if not options.transactional:
                        connection.commit()
                except Exception as exc:
                    _rollback(connection, table_name)
                    raise SinkError(
                        f"Failed to insert batch {batch_index} "
                        f"(rows {first}-{first + len(params) - 1}) into {table_name}: {exc}",
                        batch_index=batch_index,
                    ) from exc
                inserted += len(params)
                logger.debug(
                    "Inserted batch %d (%d rows) into %s", batch_index, len(params), table_name
                )

            if options.transactional:
                try:
                    connection.commit()
                except Exception as exc:
                    _rollback(connection, table_name)
                    raise SinkError(
                        f"Failed to commit {inserted} rows into {table_name}: {exc}"
                    ) from exc

        logger.info(
            "Inserted %d rows into %s (%d cols, batch_size=%d, transactional=%s)",
            inserted,
            table_name,
            len(columns),
            batch_size,
            options.transactional,
        )
        return inserted

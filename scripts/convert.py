"""
Demo script: convert input files to CSV, HTML and SQLite via the public API.

Usage:
    uv run python scripts/convert.py               # refuses to clobber existing outputs
    uv run python scripts/convert.py --overwrite   # replace existing outputs

CSV inputs are read with default options. Fixed-width inputs are read
with the layout YAML named next to them. Every input gets a CSV copy and
an HTML table under outputs/, and its rows are inserted into
outputs/frameport.sqlite (one table per input, all columns TEXT).
"""

from __future__ import annotations

import logging
import sqlite3
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CSV_INPUTS = [
    "inputs/prices.csv",
]

FWF_INPUTS = [
    # (data file, layout YAML)
    ("inputs/statement.txt", "inputs/layouts/statement.yaml"),
]

OUTPUT_ROOT = Path("outputs")
SQLITE_PATH = OUTPUT_ROOT / "frameport.sqlite"

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("convert")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _create_text_table(
    conn: sqlite3.Connection, table: str, columns: tuple, replace: bool
) -> None:
    """Create a table with one TEXT column per frame column, if missing."""
    from frameport.adapters.relational import quote_identifier

    if replace:
        conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(table)}")
    column_sql = ", ".join(f"{quote_identifier(str(c))} TEXT" for c in columns)
    conn.execute(f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} ({column_sql})")


def _export(frame, name: str, conn: sqlite3.Connection, overwrite: bool) -> None:
    csv_path = OUTPUT_ROOT / f"{name}.csv"
    html_path = OUTPUT_ROOT / f"{name}.html"

    frame.to_csv(csv_path, overwrite=overwrite)

    if html_path.exists() and not overwrite:
        log.warning("SKIP  %s  (exists; pass --overwrite)", html_path)
    else:
        html_path.write_text(frame.to_html(css_class=name), encoding="utf-8")

    _create_text_table(conn, name, frame.columns, replace=overwrite)
    frame.to_sql(conn, name)
    log.info("  %s: %d rows x %d cols", name, *frame.shape)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    from frameport import Frame, load_layout

    overwrite = "--overwrite" in sys.argv
    OUTPUT_ROOT.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(SQLITE_PATH)
    try:
        for input_path in CSV_INPUTS:
            if not Path(input_path).exists():
                log.warning("SKIP  %s  (file not found)", input_path)
                continue
            log.info("Processing: %s", input_path)
            frame = Frame.from_csv(input_path)
            _export(frame, Path(input_path).stem, conn, overwrite)

        for input_path, layout_path in FWF_INPUTS:
            if not Path(input_path).exists():
                log.warning("SKIP  %s  (file not found)", input_path)
                continue
            log.info("Processing: %s (layout %s)", input_path, layout_path)
            frame = Frame.from_fwf(input_path, load_layout(layout_path))
            _export(frame, Path(input_path).stem, conn, overwrite)
    finally:
        conn.close()

    log.info("All files processed.")


if __name__ == "__main__":
    main()

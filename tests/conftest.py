"""
Shared test fixtures for frameport tests.

Sample files are written into pytest's ``tmp_path`` by the fixtures
below, so the suite never depends on files checked into the repo.
"""

import sqlite3
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample data -- edit here if the shared samples need to change
# ---------------------------------------------------------------------------
SAMPLE_ROWS = [
    {"a": 1, "b": 2, "c": 3},
    {"a": 4, "b": 5, "c": 6},
]

SAMPLE_CSV = "name,city,amount\nAlice,Paris,10\nBob,Berlin,20\n"

# Columns: code (0-5), name (5-15), qty (15-20)
SAMPLE_FWF = "".join(
    f"{code:5}{name:10}{qty:5}\n"
    for code, name, qty in [
        ("A0001", "Widget", "00012"),
        ("A0002", "Gadget", "00300"),
        ("A0003", "Gizmo", "00004"),
    ]
)
SAMPLE_COLSPECS = [("code", 0, 5), ("name", 5, 10), ("qty", 15, 5)]


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (exercises several adapters end to end)",
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    """A small comma-separated file with a header row."""
    path = tmp_path / "people.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def fwf_file(tmp_path: Path) -> Path:
    """A small fixed-width file matching SAMPLE_COLSPECS."""
    path = tmp_path / "items.txt"
    path.write_text(SAMPLE_FWF, encoding="utf-8")
    return path


@pytest.fixture
def sqlite_conn():
    """In-memory SQLite connection standing in for a caller-owned DB handle."""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()

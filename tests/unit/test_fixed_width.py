"""
Unit tests for the fixed-width adapter (frameport.adapters.fixed_width).

Tests slicing by column specs, trimming, short lines, column-spec
validation, and layouts loaded from the registry.
"""

from __future__ import annotations

import pytest

from frameport import ColumnSpec, Frame
from frameport.adapters.fixed_width import FWFAdapter, normalize_colspecs
from frameport.exceptions import OptionsError, SchemaError
from frameport.layout_registry import FWFLayout

ITEM_SPECS = [("code", 0, 5), ("name", 5, 10), ("qty", 15, 5)]


def _write(tmp_path, text: str, name: str = "data.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8", newline="")
    return path


# ---------------------------------------------------------------------------
# Slicing
# ---------------------------------------------------------------------------

class TestLoad:
    """Tests for Frame.from_fwf() / FWFAdapter.load()."""

    def test_foobar(self, tmp_path):
        path = _write(tmp_path, "foobar\n")
        frame = Frame.from_fwf(path, [("a", 0, 3), ("b", 3, 3)])
        assert frame.to_array() == [{"a": "foo", "b": "bar"}]

    def test_sample_file(self, fwf_file):
        frame = Frame.from_fwf(fwf_file, ITEM_SPECS)
        assert frame.columns == ("code", "name", "qty")
        assert frame.to_array() == [
            {"code": "A0001", "name": "Widget", "qty": "00012"},
            {"code": "A0002", "name": "Gadget", "qty": "00300"},
            {"code": "A0003", "name": "Gizmo", "qty": "00004"},
        ]

    def test_no_trim(self, fwf_file):
        frame = Frame.from_fwf(fwf_file, ITEM_SPECS, trim=False)
        assert frame.to_array()[2]["name"] == "Gizmo     "

    def test_short_line_yields_empty_strings(self, tmp_path):
        """Slices past the end of a line are empty, not an error."""
        path = _write(tmp_path, "ab\n")
        frame = Frame.from_fwf(path, [("x", 0, 3), ("y", 3, 3), ("z", 10, 2)])
        assert frame.to_array() == [{"x": "ab", "y": "", "z": ""}]

    def test_uncovered_slack_ignored(self, tmp_path):
        path = _write(tmp_path, "##foo##bar##\n")
        frame = Frame.from_fwf(path, [("a", 2, 3), ("b", 7, 3)])
        assert frame.to_array() == [{"a": "foo", "b": "bar"}]

    def test_crlf_line_endings(self, tmp_path):
        path = _write(tmp_path, "foobar\r\nbazqux\r\n")
        frame = Frame.from_fwf(path, [("a", 0, 3), ("b", 3, 3)], trim=False)
        assert frame.to_array() == [{"a": "foo", "b": "bar"}, {"a": "baz", "b": "qux"}]

    def test_empty_lines_skipped(self, tmp_path):
        path = _write(tmp_path, "foobar\n\nbazqux\n")
        frame = Frame.from_fwf(path, [("a", 0, 3), ("b", 3, 3)])
        assert len(frame) == 2

    def test_no_trailing_newline(self, tmp_path):
        path = _write(tmp_path, "foobar")
        frame = Frame.from_fwf(path, [("a", 0, 3), ("b", 3, 3)])
        assert frame.to_array() == [{"a": "foo", "b": "bar"}]

    def test_column_spec_models(self, tmp_path):
        path = _write(tmp_path, "foobar\n")
        specs = [ColumnSpec(name="a", start=0, width=3), ColumnSpec(name="b", start=3, width=3)]
        frame = Frame.from_fwf(path, specs)
        assert frame.to_array() == [{"a": "foo", "b": "bar"}]

    def test_layout_supplies_columns_and_options(self, tmp_path):
        path = _write(tmp_path, " fo bar\n")
        layout = FWFLayout(
            name="demo",
            columns=[ColumnSpec(name="a", start=0, width=3), ColumnSpec(name="b", start=3, width=4)],
            options={"trim": False},
        )
        frame = Frame.from_fwf(path, layout)
        assert frame.to_array() == [{"a": " fo", "b": " bar"}]

    def test_override_beats_layout_options(self, tmp_path):
        path = _write(tmp_path, " fo bar\n")
        layout = FWFLayout(
            name="demo",
            columns=[ColumnSpec(name="a", start=0, width=3), ColumnSpec(name="b", start=3, width=4)],
            options={"trim": False},
        )
        frame = Frame.from_fwf(path, layout, trim=True)
        assert frame.to_array() == [{"a": "fo", "b": "bar"}]

    def test_line_numbers(self, tmp_path):
        path = _write(tmp_path, "foobar\n\nbazqux\n")
        raw = FWFAdapter().load(path, [("a", 0, 3)])
        assert raw.line_numbers == [1, 3]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Frame.from_fwf(tmp_path / "missing.txt", [("a", 0, 3)])


# ---------------------------------------------------------------------------
# Column spec validation
# ---------------------------------------------------------------------------

class TestNormalizeColspecs:
    """Tests for normalize_colspecs()."""

    def test_triples_become_models(self):
        specs = normalize_colspecs([("a", 0, 3), ("b", 3, 2)])
        assert [s.name for s in specs] == ["a", "b"]
        assert specs[1].end == 5

    def test_gap_allowed(self):
        specs = normalize_colspecs([("a", 0, 2), ("b", 5, 2)])
        assert len(specs) == 2

    def test_overlap_rejected(self):
        with pytest.raises(SchemaError, match="overlapping"):
            normalize_colspecs([("a", 0, 4), ("b", 3, 2)])

    def test_out_of_order_rejected(self):
        with pytest.raises(SchemaError):
            normalize_colspecs([("b", 5, 2), ("a", 0, 2)])

    def test_duplicate_name_rejected(self):
        with pytest.raises(SchemaError, match="Duplicate"):
            normalize_colspecs([("a", 0, 2), ("a", 2, 2)])

    def test_wrong_arity(self):
        with pytest.raises(OptionsError, match="triple"):
            normalize_colspecs([("a", 0)])

    def test_negative_width(self):
        with pytest.raises(OptionsError):
            normalize_colspecs([("a", 0, -1)])

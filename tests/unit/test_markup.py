"""
Unit tests for the HTML adapter (frameport.adapters.markup).

Tests table structure, header toggling, table attributes and escaping
of every user-controlled string.
"""

from __future__ import annotations

from frameport import Frame
from frameport.adapters.markup import HTMLAdapter
from frameport.config import HTMLOptions


class TestRender:
    """Tests for Frame.to_html()."""

    def test_full_table(self):
        html = Frame.from_array([{"a": 1, "b": 2}]).to_html()
        assert html == (
            "<table>\n"
            "  <thead>\n"
            "    <tr><th>a</th><th>b</th></tr>\n"
            "  </thead>\n"
            "  <tbody>\n"
            "    <tr><td>1</td><td>2</td></tr>\n"
            "  </tbody>\n"
            "</table>"
        )

    def test_one_row_per_record(self):
        frame = Frame.from_array([{"a": 1, "b": 2, "c": 3}, {"a": 4, "b": 5, "c": 6}])
        html = frame.to_html()
        assert html.count("<tr>") == 3
        assert "<th>a</th><th>b</th><th>c</th>" in html
        assert "<td>1</td><td>2</td><td>3</td>" in html
        assert "<td>4</td><td>5</td><td>6</td>" in html

    def test_no_header(self):
        html = Frame.from_array([{"a": 1}]).to_html(header=False)
        assert "<thead>" not in html
        assert "<th>" not in html
        assert "<td>1</td>" in html

    def test_attributes(self):
        html = Frame.from_array([{"a": 1}]).to_html(css_class="grid", table_id="report")
        assert html.startswith('<table id="report" class="grid">\n')

    def test_attribute_aliases_via_dict(self):
        html = Frame.from_array([{"a": 1}]).to_html({"class": "grid", "id": "report"})
        assert html.startswith('<table id="report" class="grid">')

    def test_alias_override_on_options_model(self):
        html = Frame.from_array([{"a": 1}]).to_html(HTMLOptions(css_class="old"), **{"class": "new"})
        assert html.startswith('<table class="new">')

    def test_no_attributes_by_default(self):
        assert Frame.from_array([{"a": 1}]).to_html().startswith("<table>\n")

    def test_no_inline_styling(self):
        html = Frame.from_array([{"a": 1}]).to_html()
        assert "style" not in html
        assert "border" not in html

    def test_none_renders_empty_cell(self):
        html = Frame.from_array([{"a": None, "b": "x"}]).to_html()
        assert "<td></td><td>x</td>" in html

    def test_empty_frame(self):
        html = Frame.from_array([], columns=["a"]).to_html()
        assert "<th>a</th>" in html
        assert "<td>" not in html
        assert html.endswith("  <tbody>\n  </tbody>\n</table>")

    def test_adapter_default_options(self):
        html = HTMLAdapter().render(["a"], [{"a": "v"}])
        assert "<td>v</td>" in html


class TestEscaping:
    """No input string reaches the markup unescaped."""

    def test_script_in_cell(self):
        html = Frame.from_array([{"a": "<script>"}]).to_html()
        assert "<td>&lt;script&gt;</td>" in html
        assert "<script>" not in html

    def test_ampersand_and_quotes(self):
        html = Frame.from_array([{"a": "Tom & \"Jerry\" 'n' co"}]).to_html()
        assert "<td>Tom &amp; &#34;Jerry&#34; &#39;n&#39; co</td>" in html

    def test_header_names_escaped(self):
        html = Frame.from_array([[1]], columns=["<b>bold</b>"]).to_html()
        assert "<th>&lt;b&gt;bold&lt;/b&gt;</th>" in html

    def test_attributes_escaped(self):
        html = HTMLAdapter().render(
            ["a"], [{"a": 1}], HTMLOptions(css_class='x" onclick="evil()')
        )
        assert 'class="x&#34; onclick=&#34;evil()"' in html
        assert 'onclick="' not in html

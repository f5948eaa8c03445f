"""Tests for Hebrew-aware ReportLab tables."""

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.platypus import Paragraph, Table

from pdf_hebrew.render.table import (
    HebrewTableCell,
    fragments_to_markup,
    hebrew_table,
    hebrew_table_cell,
)
from pdf_hebrew.text import Fragment, segment_to_fragments


class TestHebrewTableCell:
    def test_latin_cell_is_content_only(self) -> None:
        assert hebrew_table_cell("Hello") == {"content": "Hello"}

    def test_hebrew_cell_carries_options(self) -> None:
        cell = hebrew_table_cell("שלום", size=10, style="bold", rtl_font="HebrewFont", colspan=2)
        assert cell == {
            "content": "שלום",
            "hebrew_text": True,
            "size": 10,
            "style": ("bold",),
            "rtl_font": "HebrewFont",
            "ltr_font": None,
            "cell_opts": {"colspan": 2},
        }

    def test_none_content(self) -> None:
        assert hebrew_table_cell(None) == {"content": None}

    def test_flagged_cell_str(self) -> None:
        assert str(HebrewTableCell(42, hebrew_text=True)) == "42"
        assert str(HebrewTableCell(None)) == ""


class TestMarkup:
    def test_font_per_fragment(self) -> None:
        fragments = segment_to_fragments("שלום עולם", 10, None, "HebrewFont", "LatinFont")
        assert fragments_to_markup(fragments) == (
            '<font name="HebrewFont" size="10">םלוע</font>'
            '<font name="HebrewFont" size="10"> </font>'
            '<font name="HebrewFont" size="10">םולש</font>'
        )

    def test_latin_fragment_not_reversed(self) -> None:
        fragment = Fragment("abc", font="LatinFont", size=10)
        assert fragments_to_markup([fragment]) == '<font name="LatinFont" size="10">abc</font>'

    def test_styles_and_escaping(self) -> None:
        fragment = Fragment("a<b", font="LatinFont", size=10, styles=("bold", "italic"))
        assert fragments_to_markup([fragment]) == '<font name="LatinFont" size="10"><i><b>a&lt;b</b></i></font>'

    def test_line_break(self) -> None:
        assert fragments_to_markup([Fragment("a"), Fragment("\n"), Fragment("b")]) == "a<br/>b"

    def test_unknown_style_ignored(self) -> None:
        assert fragments_to_markup([Fragment("x", styles=("shadow",))]) == "x"


class TestHebrewTable:
    def table(self, data, reportlab_config, **kwargs) -> Table:
        return hebrew_table(data, config=reportlab_config, **kwargs)

    def test_hebrew_cells_become_paragraphs(self, reportlab_config) -> None:
        table = self.table([["Name", "שם מלא"]], reportlab_config)
        latin, hebrew = table._cellvalues[0]
        assert latin == "Name"
        assert isinstance(hebrew, Paragraph)
        assert hebrew.style.alignment == TA_RIGHT
        plain = hebrew.getPlainText()
        assert plain.index("אלמ") < plain.index("םש")

    def test_plain_cells_get_font_commands(self, reportlab_config) -> None:
        table = self.table([["Name", "Age"]], reportlab_config, size=9, style="bold")
        cell_style = table._cellStyles[0][0]
        assert cell_style.fontname == "Helvetica-Bold"
        assert cell_style.fontsize == 9

    def test_text_color_on_every_cell(self, reportlab_config) -> None:
        table = self.table([["a", "שלום"]], reportlab_config, text_color="ff0000")
        for cell_style in table._cellStyles[0]:
            assert cell_style.color.hexval() == "0xff0000"
        assert table._cellvalues[0][1].style.textColor.hexval() == "0xff0000"

    def test_color_object_accepted(self, reportlab_config) -> None:
        table = self.table([["a"]], reportlab_config, text_color=colors.blue)
        assert table._cellStyles[0][0].color.hexval() == colors.blue.hexval()

    def test_forced_hebrew_cell(self, reportlab_config) -> None:
        table = self.table([[HebrewTableCell("123", hebrew_text=True), HebrewTableCell("abc")]], reportlab_config)
        assert isinstance(table._cellvalues[0][0], Paragraph)
        assert table._cellvalues[0][1] == "abc"

    def test_cell_mapping_options(self, reportlab_config) -> None:
        cell = hebrew_table_cell("שלום", size=8)
        table = self.table([[cell, {"content": "plain"}]], reportlab_config)
        paragraph = table._cellvalues[0][0]
        assert paragraph.style.fontSize == 8
        assert table._cellvalues[0][1] == "plain"

    def test_cells_are_sanitized(self, reportlab_config) -> None:
        table = self.table([["a\u2014b", None]], reportlab_config)
        assert table._cellvalues[0] == ["a-b", ""]

    def test_table_draws(self, reportlab_config, pdf_canvas, tmp_path) -> None:
        table = self.table(
            [["Item", "פריט"], ["Price", "מחיר: 12.50"]],
            reportlab_config,
            colWidths=[100, 150],
            table_style=[("GRID", (0, 0), (-1, -1), 0.5, colors.grey)],
        )
        table.wrapOn(pdf_canvas, 400, 400)
        table.drawOn(pdf_canvas, 50, 600)
        pdf_canvas.save()
        assert (tmp_path / "out.pdf").read_bytes().startswith(b"%PDF")

"""Hebrew-aware ReportLab tables.

Cells that contain Hebrew are segmented like any other directional text and
turned into a ``Paragraph`` whose markup switches fonts per fragment. Other
cells stay plain strings and get the Latin font through the table style.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from pdf_hebrew.config import Config
from pdf_hebrew.fonts.registry import FontRegistry
from pdf_hebrew.text.sanitize import sanitize_text
from pdf_hebrew.text.script import contains_rtl, visual_order
from pdf_hebrew.text.segment import Fragment, normalize_styles, segment_to_fragments

_STYLE_TAGS = {"bold": "b", "italic": "i", "underline": "u", "strike": "strike"}


@dataclass
class HebrewTableCell:
    """Table cell text flagged as Hebrew regardless of its content."""

    text: Any
    hebrew_text: bool = False

    def __str__(self) -> str:
        return "" if self.text is None else str(self.text)


def hebrew_table_cell(
    text: Any,
    size: float = 12,
    style: str | Iterable[str] | None = None,
    rtl_font: str | None = None,
    ltr_font: str | None = None,
    **cell_opts: Any,
) -> dict[str, Any]:
    """Describe a table cell, carrying Hebrew rendering options when needed.

    Returns:
        ``{"content": text}`` for text without Hebrew; otherwise a mapping
        that also holds ``hebrew_text``, size, style, fonts and ``cell_opts``.
    """
    if not contains_rtl(str(text) if text is not None else ""):
        return {"content": text}
    return {
        "content": text,
        "hebrew_text": True,
        "size": size,
        "style": normalize_styles(style),
        "rtl_font": rtl_font,
        "ltr_font": ltr_font,
        "cell_opts": cell_opts,
    }


def fragments_to_markup(fragments: Sequence[Fragment]) -> str:
    """Render fragments as ReportLab paragraph markup, one font tag each.

    RTL fragments have their characters reversed, as in the canvas host.
    """
    parts: list[str] = []
    for fragment in fragments:
        if fragment.is_line_break:
            parts.append("<br/>")
            continue
        body = escape(visual_order(fragment.text) if fragment.is_rtl else fragment.text)
        for style in fragment.styles:
            tag = _STYLE_TAGS.get(style)
            if tag:
                body = f"<{tag}>{body}</{tag}>"
        attrs = []
        if fragment.font:
            attrs.append(f'name="{escape(fragment.font)}"')
        if fragment.size is not None:
            attrs.append(f'size="{fragment.size:g}"')
        if attrs:
            body = f"<font {' '.join(attrs)}>{body}</font>"
        parts.append(body)
    return "".join(parts)


def _to_color(value: Any) -> colors.Color:
    if isinstance(value, colors.Color):
        return value
    text = str(value)
    if not text.startswith("#"):
        text = f"#{text}"
    return colors.HexColor(text)


def hebrew_table(
    data: Sequence[Sequence[Any]],
    size: float = 12,
    style: str | Iterable[str] | None = None,
    rtl_font: str | None = None,
    ltr_font: str | None = None,
    *,
    text_color: Any = "000000",
    config: Config | None = None,
    registry: FontRegistry | None = None,
    table_style: Iterable[tuple[Any, ...]] = (),
    **table_opts: Any,
) -> Table:
    """Build a ReportLab Table with Hebrew cells in visual order.

    Cells may be plain values, :class:`HebrewTableCell` instances or mappings
    from :func:`hebrew_table_cell`. Every cell is sanitized.

    Args:
        data: Rows of cells.
        size: Default font size.
        style: Default style tags.
        rtl_font: Font for Hebrew words (config default when None).
        ltr_font: Font for other text (config default when None).
        text_color: Hex string or ReportLab color for every cell.
        config: Default fonts and line height.
        registry: Resolves styled faces; by default a new registry holding
            ``config.fonts``.
        table_style: Extra TableStyle commands appended after the font ones.
        **table_opts: Passed to ``Table`` (colWidths, rowHeights, ...).
    """
    config = config or Config()
    registry = registry or FontRegistry(config.fonts)
    color = _to_color(text_color)
    default_styles = normalize_styles(style)

    rows: list[list[Any]] = []
    commands: list[tuple[Any, ...]] = []
    for row_idx, row in enumerate(data):
        out_row: list[Any] = []
        for col_idx, cell in enumerate(row):
            cell_size = size
            cell_styles = default_styles
            cell_rtl = rtl_font or config.rtl_font
            cell_ltr = ltr_font or config.ltr_font
            forced = False

            if isinstance(cell, HebrewTableCell):
                raw = str(cell)
                forced = cell.hebrew_text
            elif isinstance(cell, dict) and "content" in cell:
                raw = "" if cell["content"] is None else str(cell["content"])
                forced = bool(cell.get("hebrew_text"))
                cell_size = cell.get("size") or size
                if cell.get("style"):
                    cell_styles = normalize_styles(cell["style"])
                cell_rtl = cell.get("rtl_font") or cell_rtl
                cell_ltr = cell.get("ltr_font") or cell_ltr
            else:
                raw = "" if cell is None else str(cell)

            text = sanitize_text(raw)
            pos = (col_idx, row_idx)
            commands.append(("TEXTCOLOR", pos, pos, color))

            if forced or contains_rtl(text):
                fragments = segment_to_fragments(
                    text, cell_size, cell_styles, cell_rtl, cell_ltr, config=config
                )
                para_style = ParagraphStyle(
                    f"hebrew-cell-{row_idx}-{col_idx}",
                    fontName=registry.resolve(cell_ltr),
                    fontSize=cell_size,
                    leading=cell_size * config.line_height_factor,
                    textColor=color,
                    alignment=TA_RIGHT,
                )
                out_row.append(Paragraph(fragments_to_markup(fragments), para_style))
            else:
                commands.append(("FONTNAME", pos, pos, registry.resolve(cell_ltr, cell_styles)))
                commands.append(("FONTSIZE", pos, pos, cell_size))
                out_row.append(text)
        rows.append(out_row)

    table = Table(rows, **table_opts)
    table.setStyle(TableStyle(commands + list(table_style)))
    return table

"""Rendering for pdf-hebrew.

This subpackage provides:
- Box options and the host renderer interface
- The ReportLab host implementation
- Shrink-to-fit sizing
- Directional text boxes and Hebrew tables
"""

from pdf_hebrew.render.box import hebrew_text_box, render_directional_box
from pdf_hebrew.render.fit import FitRequest, FitResult, choose_font_size, fit_and_render
from pdf_hebrew.render.host import HostRenderer, ReportLabRenderer, layout_fragments
from pdf_hebrew.render.options import BoxOptions, Direction, FontPair, Overflow
from pdf_hebrew.render.table import (
    HebrewTableCell,
    fragments_to_markup,
    hebrew_table,
    hebrew_table_cell,
)

__all__ = [
    "BoxOptions",
    "Direction",
    "Overflow",
    "FontPair",
    "HostRenderer",
    "ReportLabRenderer",
    "layout_fragments",
    "FitRequest",
    "FitResult",
    "choose_font_size",
    "fit_and_render",
    "render_directional_box",
    "hebrew_text_box",
    "HebrewTableCell",
    "hebrew_table",
    "hebrew_table_cell",
    "fragments_to_markup",
]

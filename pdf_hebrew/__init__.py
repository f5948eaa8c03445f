"""pdf-hebrew: mixed Hebrew/Latin text for PDF libraries without bidi support.

This library provides:
- A sanitizer for code points PDF font subsetting cannot handle
- Hebrew script classification and run segmentation into visual-order fragments
- Shrink-to-fit sizing driven by real (dry-run) layout
- ReportLab integration: text boxes, tables and font registration

Example:
    >>> from reportlab.pdfgen.canvas import Canvas
    >>> from pdf_hebrew import hebrew_text_box
    >>> c = Canvas("out.pdf")
    >>> hebrew_text_box(c, "שלום עולם", at=(50, 700), width=200, height=40)
    >>> c.save()
"""

from pdf_hebrew.config import Config
from pdf_hebrew.exceptions import (
    ConfigError,
    FontNotFoundError,
    HebrewPDFError,
    StrategyUnavailableError,
)
from pdf_hebrew.fonts import FontRegistry
from pdf_hebrew.render import (
    BoxOptions,
    Direction,
    FitRequest,
    FitResult,
    FontPair,
    HebrewTableCell,
    HostRenderer,
    Overflow,
    ReportLabRenderer,
    choose_font_size,
    fit_and_render,
    hebrew_table,
    hebrew_table_cell,
    hebrew_text_box,
    render_directional_box,
)
from pdf_hebrew.text import (
    Fragment,
    GlyphRun,
    contains_rtl,
    is_rtl_word,
    sanitize_text,
    segment_to_fragments,
)

__version__ = "0.1.0"

__all__ = [
    # Text core
    "sanitize_text",
    "is_rtl_word",
    "contains_rtl",
    "segment_to_fragments",
    "Fragment",
    "GlyphRun",
    # Rendering
    "BoxOptions",
    "Direction",
    "Overflow",
    "FontPair",
    "HostRenderer",
    "ReportLabRenderer",
    "render_directional_box",
    "hebrew_text_box",
    "FitRequest",
    "FitResult",
    "choose_font_size",
    "fit_and_render",
    # Tables
    "HebrewTableCell",
    "hebrew_table",
    "hebrew_table_cell",
    # Fonts and config
    "FontRegistry",
    "Config",
    # Exceptions
    "HebrewPDFError",
    "ConfigError",
    "FontNotFoundError",
    "StrategyUnavailableError",
    # Metadata
    "__version__",
]

"""Text processing for pdf-hebrew.

This subpackage provides:
- Character sanitizing
- Hebrew script classification
- Run segmentation into visual-order fragments
"""

from pdf_hebrew.text.sanitize import sanitize_text
from pdf_hebrew.text.script import contains_rtl, is_hebrew_char, is_rtl_word, visual_order
from pdf_hebrew.text.segment import (
    LINE_BREAK,
    Fragment,
    GlyphRun,
    normalize_styles,
    segment_to_fragments,
)

__all__ = [
    "sanitize_text",
    "is_hebrew_char",
    "is_rtl_word",
    "contains_rtl",
    "visual_order",
    "segment_to_fragments",
    "normalize_styles",
    "Fragment",
    "GlyphRun",
    "LINE_BREAK",
]

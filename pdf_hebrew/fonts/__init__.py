"""Font handling for pdf-hebrew."""

from pdf_hebrew.fonts.registry import FontRegistry, font_covers_hebrew, hebrew_coverage

__all__ = ["FontRegistry", "font_covers_hebrew", "hebrew_coverage"]

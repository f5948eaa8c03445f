"""Character sanitizer.

ReportLab's font subsetting either fails on or silently mis-renders a family
of invisible, typographic and control code points. ``sanitize_text`` folds
them into a small safe set before anything else looks at the text.

The rules run in a fixed order; later rules never produce characters that an
earlier rule removes, which keeps the function idempotent.
"""

from __future__ import annotations

import re
from typing import Any

# Zero-width, bidi controls, BOM, soft hyphen, word joiner, invisible math
# operators, deprecated format controls and the combining grapheme joiner.
INVISIBLE_CHARS = re.compile(
    "[\u034F\u061C\u00AD\u200B-\u200F\u202A-\u202E"
    "\u2060-\u2064\u2066-\u2069\u206A-\u206F\uFEFF]"
)

NBSP_CHARS = re.compile("[\u00A0\u2007-\u200A\u202F\u205F\u3000]")

DASH_CHARS = re.compile("[\u2010-\u2015\u2212\uFE58\uFE63\uFF0D]")

SMART_QUOTES_DOUBLE = re.compile("[\u201C-\u201F\u00AB\u00BB\u301D-\u301F]")
SMART_QUOTES_SINGLE = re.compile("[\u2018-\u201B\u2039\u203A]")

ELLIPSIS_CHAR = "\u2026"

ARROWS = (
    ("\u2192", "->"),
    ("\u2190", "<-"),
    ("\u2191", "^"),
    ("\u2193", "v"),
)

BULLET_CHARS = re.compile(
    "[\u2022\u2023\u2043\u204C\u204D\u2219\u25E6\u25AA\u25AB\u25CF\u25CB]"
)

# Line/paragraph separators, object replacement, replacement char, noncharacter.
MISC_PROBLEM_CHARS = re.compile("[\u2028\u2029\uFFFC\uFFFD\uFFFF]")


def sanitize_text(text: Any) -> Any:
    """Normalize text into a character set the PDF host can lay out.

    ``None`` is returned unchanged; any other non-string value is converted
    with ``str()`` first. Newlines are preserved because the segmenter
    splits lines on them.

    Args:
        text: Raw input text.

    Returns:
        The sanitized string, or None.
    """
    if text is None:
        return None
    text = str(text)

    text = INVISIBLE_CHARS.sub("", text)
    text = NBSP_CHARS.sub(" ", text)
    text = DASH_CHARS.sub("-", text)
    text = SMART_QUOTES_DOUBLE.sub('"', text)
    text = SMART_QUOTES_SINGLE.sub("'", text)
    text = text.replace(ELLIPSIS_CHAR, "...")
    for arrow, replacement in ARROWS:
        text = text.replace(arrow, replacement)
    text = BULLET_CHARS.sub("*", text)
    text = MISC_PROBLEM_CHARS.sub("", text)
    return text

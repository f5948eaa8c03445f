"""Script classification for Hebrew/Latin mixing.

Classification works on whole whitespace-delimited tokens: a token that
contains a single Hebrew code point is treated as Hebrew. Mixed tokens such as
``"ABC-123א"`` therefore land in the RTL run as a unit.
"""

from __future__ import annotations

import unicodedata

# Code points with Script=Hebrew: accents and points, letters, yod triangle
# and geresh/gershayim, and the alphabetic presentation forms.
HEBREW_RANGES: tuple[tuple[int, int], ...] = (
    (0x0591, 0x05C7),
    (0x05D0, 0x05EA),
    (0x05EF, 0x05F4),
    (0xFB1D, 0xFB36),
    (0xFB38, 0xFB3C),
    (0xFB3E, 0xFB3E),
    (0xFB40, 0xFB41),
    (0xFB43, 0xFB44),
    (0xFB46, 0xFB4F),
)


def is_hebrew_char(char: str) -> bool:
    """Return True if the single character belongs to the Hebrew script."""
    code = ord(char)
    if code < 0x0591:
        return False
    for start, end in HEBREW_RANGES:
        if start <= code <= end:
            return True
    return False


def is_rtl_word(token: str | None) -> bool:
    """Return True if the token contains at least one Hebrew code point."""
    if not token:
        return False
    return any(is_hebrew_char(char) for char in token)


def contains_rtl(text: str | None) -> bool:
    """Return True if any character of the text is Hebrew."""
    return is_rtl_word(text)


def visual_order(text: str) -> str:
    """Reverse a Hebrew word's characters for a left-to-right renderer.

    Points and cantillation marks (category Mn) stay attached to the letter
    they follow and move with it.
    """
    clusters: list[str] = []
    for char in text:
        if clusters and unicodedata.category(char) == "Mn":
            clusters[-1] += char
        else:
            clusters.append(char)
    return "".join(reversed(clusters))

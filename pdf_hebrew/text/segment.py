"""Run segmentation: turn mixed Hebrew/Latin text into visual-order fragments.

The PDF host lays fragments out strictly left to right in the order it gets
them. All reordering therefore happens here: Hebrew runs are emitted with
their words reversed, and punctuation that belongs to a run's edges is moved
to the side where it will appear once the run reads right to left.

Example:
    >>> [f.text for f in segment_to_fragments("Hello שלום עולם. World")]
    ['Hello ', 'עולם', ' ', 'שלום', '.', ' ', 'World ']
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pdf_hebrew.text.sanitize import sanitize_text
from pdf_hebrew.text.script import is_rtl_word

if TYPE_CHECKING:
    from pdf_hebrew.config import Config

LINE_BREAK = "\n"
RTL = "rtl"

_PUNCT = ".,:;!?\\-\\u05BE\\u05C3"
TRAILING_PUNCTUATION = re.compile(f"([{_PUNCT}]+)$")
LEADING_PUNCTUATION = re.compile(f"^([{_PUNCT}()\\[\\]{{}}]+)")

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")
_WS_SPLIT = re.compile(r"(\s+)")

Styles = tuple[str, ...]


@dataclass(frozen=True)
class Fragment:
    """One styled piece of text, in final left-to-right placement order.

    Attributes:
        text: Word, space, punctuation cluster or the line-break marker.
        font: Font identifier, resolved by the host.
        size: Font size.
        direction: "rtl" for Hebrew words and the spaces between them,
            None to inherit the host default.
        styles: Ordered style tags such as ("bold", "italic").
    """

    text: str
    font: str | None = None
    size: float | None = None
    direction: str | None = None
    styles: Styles = ()

    @property
    def is_line_break(self) -> bool:
        return self.text == LINE_BREAK

    @property
    def is_rtl(self) -> bool:
        return self.direction == RTL

    def to_dict(self) -> dict[str, object]:
        """Return the fragment as a plain mapping, omitting unset fields."""
        data: dict[str, object] = {"text": self.text}
        if self.font is not None:
            data["font"] = self.font
        if self.size is not None:
            data["size"] = self.size
        if self.direction is not None:
            data["direction"] = self.direction
        data["styles"] = list(self.styles)
        return data


@dataclass
class GlyphRun:
    """Consecutive Hebrew tokens of one line, collected before reversal."""

    words: list[str] = field(default_factory=list)
    leading_punctuation: str | None = None
    trailing_punctuation: str | None = None

    def __bool__(self) -> bool:
        return bool(self.words)

    def append(self, word: str) -> None:
        self.words.append(word)

    def clear(self) -> None:
        self.words.clear()
        self.leading_punctuation = None
        self.trailing_punctuation = None

    def split_punctuation(self) -> None:
        """Detach edge punctuation from the last and first words.

        A strip that would leave a word empty is skipped and the word is kept
        as it is.
        """
        match = TRAILING_PUNCTUATION.search(self.words[-1])
        if match and match.start() > 0:
            self.trailing_punctuation = match.group(1)
            self.words[-1] = self.words[-1][: match.start()]

        match = LEADING_PUNCTUATION.match(self.words[0])
        if match and match.end() < len(self.words[0]):
            self.leading_punctuation = match.group(1)
            self.words[0] = self.words[0][match.end() :]


def normalize_styles(style: str | Iterable[str] | None) -> Styles:
    """Normalize a style argument into an ordered, de-duplicated tuple.

    ``None`` and ``"normal"`` mean no style; a single tag becomes a
    one-element tuple.
    """
    if style is None:
        return ()
    if isinstance(style, str):
        tags: Iterable[str] = (style,)
    else:
        tags = style
    result: list[str] = []
    for tag in tags:
        if tag is None:
            continue
        tag = str(tag).strip().lower()
        if tag and tag != "normal" and tag not in result:
            result.append(tag)
    return tuple(result)


def split_lines(text: str) -> list[str]:
    """Split text into logical lines, dropping trailing empty lines."""
    lines = _LINE_SPLIT.split(text)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


class _Segmenter:
    """Accumulates fragments for one call of :func:`segment_to_fragments`."""

    def __init__(
        self,
        size: float,
        styles: Styles,
        rtl_font: str,
        ltr_font: str,
    ) -> None:
        self.size = size
        self.styles = styles
        self.rtl_font = rtl_font
        self.ltr_font = ltr_font
        self.fragments: list[Fragment] = []

    def ltr(self, text: str) -> None:
        self.fragments.append(Fragment(text, self.ltr_font, self.size, None, self.styles))

    def rtl(self, text: str) -> None:
        self.fragments.append(Fragment(text, self.rtl_font, self.size, RTL, self.styles))

    def line(self, line: str) -> None:
        run = GlyphRun()
        for token in _WS_SPLIT.split(line):
            if not token:
                continue
            if token.isspace():
                if token != " ":
                    self.ltr(token)
                continue
            if is_rtl_word(token):
                run.append(token)
                continue
            if run:
                self.flush(run)
                self.ltr(" ")
            self.ltr(f"{token} ")
        if run:
            self.flush(run)

    def flush(self, run: GlyphRun) -> None:
        run.split_punctuation()
        if run.leading_punctuation:
            self.ltr(run.leading_punctuation)

        words = run.words[::-1]
        for idx, word in enumerate(words):
            self.rtl(word)
            if idx < len(words) - 1:
                self.rtl(" ")

        if run.trailing_punctuation:
            self.ltr(run.trailing_punctuation)
        run.clear()


def segment_to_fragments(
    text: str | None,
    size: float | None = None,
    style: str | Iterable[str] | None = None,
    rtl_font: str | None = None,
    ltr_font: str | None = None,
    *,
    config: Config | None = None,
) -> list[Fragment]:
    """Segment text into fragments ordered for a left-to-right renderer.

    Each line is handled on its own. Hebrew tokens are gathered into runs;
    a run is flushed with its words reversed when a Latin token or the end of
    the line is reached. A line-break fragment separates consecutive lines.

    Args:
        text: Raw text; sanitized here.
        size: Font size for every fragment. Defaults to ``config.font_size``.
        style: Style tag or tags applied to every fragment.
        rtl_font: Font identifier for Hebrew words.
        ltr_font: Font identifier for everything else.
        config: Source of default fonts and size.

    Returns:
        Fragments in final placement order; empty for empty input.
    """
    if config is None:
        from pdf_hebrew.config import Config

        config = Config()

    text = sanitize_text(text)
    if not text:
        return []

    segmenter = _Segmenter(
        size=config.font_size if size is None else size,
        styles=normalize_styles(style),
        rtl_font=rtl_font or config.rtl_font,
        ltr_font=ltr_font or config.ltr_font,
    )

    lines = split_lines(text)
    for idx, line in enumerate(lines):
        segmenter.line(line)
        if idx < len(lines) - 1:
            segmenter.ltr(LINE_BREAK)
    return segmenter.fragments


def fragments_text(fragments: Iterable[Fragment]) -> str:
    """Concatenate fragment texts in emission order."""
    return "".join(fragment.text for fragment in fragments)

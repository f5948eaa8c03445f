"""Host renderer interface and its ReportLab implementation.

The fit engine and the box entry point talk to the PDF library only through
:class:`HostRenderer`. :class:`ReportLabRenderer` implements it on a
``reportlab.pdfgen.canvas.Canvas``: it places fragments strictly left to
right in the order given, wrapping greedily at fragment boundaries, exactly
like a renderer with no bidi knowledge.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics

from pdf_hebrew.config import Config
from pdf_hebrew.fonts.registry import FontRegistry
from pdf_hebrew.render.options import BoxOptions, Overflow
from pdf_hebrew.text.script import visual_order
from pdf_hebrew.text.segment import Fragment, Styles

if TYPE_CHECKING:
    from reportlab.pdfgen.canvas import Canvas

logger = logging.getLogger(__name__)

# Tolerance for float comparisons against box bounds.
EPSILON = 1e-6


@runtime_checkable
class HostRenderer(Protocol):
    """What the core needs from a PDF library.

    A host may additionally provide ``dry_run_layout(fragments, box) ->
    bool``, reporting overflow without drawing; see :func:`supports_dry_run`.
    """

    def measure_width(self, text: str, font: str, size: float) -> float: ...

    def draw_fragments(self, fragments: Sequence[Fragment], box: BoxOptions) -> None: ...

    def draw_plain_text_box(
        self,
        text: str,
        font: str,
        size: float,
        style: Styles,
        box: BoxOptions,
    ) -> None: ...


def supports_dry_run(host: object) -> bool:
    """Return True if the host can lay fragments out without drawing."""
    return callable(getattr(host, "dry_run_layout", None))


@dataclass
class PlacedFragment:
    """A fragment positioned on a line; ``x`` is relative to the line start."""

    fragment: Fragment
    font_name: str
    x: float
    width: float


@dataclass
class LayoutLine:
    """One visual line. ``width`` excludes trailing whitespace."""

    items: list[PlacedFragment] = field(default_factory=list)
    width: float = 0.0
    size: float = 0.0

    def height(self, line_height_factor: float) -> float:
        return self.size * line_height_factor


def layout_height(lines: Sequence[LayoutLine], line_height_factor: float, leading: float) -> float:
    """Total height of laid-out lines including leading between them."""
    if not lines:
        return 0.0
    total = sum(line.height(line_height_factor) for line in lines)
    return total + leading * (len(lines) - 1)


def layout_fragments(
    fragments: Sequence[Fragment],
    max_width: float | None,
    *,
    measure: Callable[[str, str, float], float],
    font_for: Callable[[Fragment], str],
    default_size: float,
    character_spacing: float = 0.0,
) -> list[LayoutLine]:
    """Break fragments into visual lines, greedily, left to right.

    A line ends at a line-break fragment or when the next non-blank fragment
    would push the line past ``max_width``. Blank fragments never start a
    wrapped line and do not count toward a line's width when trailing. A
    fragment wider than the box gets a line of its own.

    Args:
        fragments: Fragments in placement order.
        max_width: Available width, or None for no wrapping.
        measure: ``measure(text, font_name, size)`` without character spacing.
        font_for: Concrete font name for a fragment.
        default_size: Size for fragments that carry none.
        character_spacing: Extra advance per character.

    Returns:
        The laid-out lines; empty when there are no fragments.
    """

    def width_of(text: str, font_name: str, size: float) -> float:
        if not text:
            return 0.0
        return measure(text, font_name, size) + character_spacing * len(text)

    lines: list[LayoutLine] = []
    line = LayoutLine()
    cursor = 0.0

    def finish() -> None:
        nonlocal line, cursor
        if not line.size:
            line.size = default_size
        lines.append(line)
        line = LayoutLine()
        cursor = 0.0

    for fragment in fragments:
        size = fragment.size if fragment.size is not None else default_size
        if fragment.is_line_break:
            line.size = max(line.size, size)
            finish()
            continue

        font_name = font_for(fragment)
        advance = width_of(fragment.text, font_name, size)

        if fragment.text.isspace():
            line.items.append(PlacedFragment(fragment, font_name, cursor, advance))
            line.size = max(line.size, size)
            cursor += advance
            continue

        visible = fragment.text.rstrip()
        visible_width = advance if visible == fragment.text else width_of(visible, font_name, size)

        if (
            max_width is not None
            and line.items
            and cursor + visible_width > max_width + EPSILON
        ):
            finish()

        line.items.append(PlacedFragment(fragment, font_name, cursor, advance))
        line.size = max(line.size, size)
        line.width = cursor + visible_width
        cursor += advance

    if line.items:
        finish()
    return lines


class ReportLabRenderer:
    """HostRenderer backed by a ReportLab canvas.

    Args:
        canvas: Target canvas; coordinates are PDF points, origin bottom-left.
        registry: Font registry used to resolve styled faces.
        config: Supplies the line height factor and fonts to register.
    """

    def __init__(
        self,
        canvas: Canvas,
        registry: FontRegistry | None = None,
        config: Config | None = None,
    ) -> None:
        self.canvas = canvas
        self.config = config or Config()
        self.registry = registry or FontRegistry()
        for name, path in self.config.fonts.items():
            self.registry.register(name, path)
        if self.config.rtl_font in self.config.fonts:
            self.registry.check_hebrew(self.config.rtl_font)

    # -- measurement -------------------------------------------------------

    def measure_width(self, text: str, font: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, font, size)

    def font_for(self, fragment: Fragment) -> str:
        return self.registry.resolve(fragment.font or self.config.ltr_font, fragment.styles)

    def layout(self, fragments: Sequence[Fragment], box: BoxOptions) -> list[LayoutLine]:
        return layout_fragments(
            fragments,
            box.width,
            measure=self.measure_width,
            font_for=self.font_for,
            default_size=box.size if box.size is not None else self.config.font_size,
            character_spacing=box.character_spacing,
        )

    def overflows(self, lines: Sequence[LayoutLine], box: BoxOptions) -> bool:
        if box.width is not None and any(line.width > box.width + EPSILON for line in lines):
            return True
        if box.height is not None:
            height = layout_height(lines, self.config.line_height_factor, box.leading)
            if height > box.height + EPSILON:
                return True
        return False

    def dry_run_layout(self, fragments: Sequence[Fragment], box: BoxOptions) -> bool:
        """Lay fragments out without drawing; return True if they overflow."""
        return self.overflows(self.layout(fragments, box), box)

    # -- drawing -----------------------------------------------------------

    def _visible_lines(self, lines: list[LayoutLine], box: BoxOptions) -> list[LayoutLine]:
        if box.overflow != Overflow.TRUNCATE or box.height is None:
            return lines
        kept: list[LayoutLine] = []
        for line in lines:
            if layout_height(kept + [line], self.config.line_height_factor, box.leading) > (
                box.height + EPSILON
            ):
                break
            kept.append(line)
        if len(kept) < len(lines):
            logger.debug("Truncated %d of %d lines", len(lines) - len(kept), len(lines))
        return kept

    def _begin_box(self, box: BoxOptions) -> None:
        self.canvas.saveState()
        self.canvas.translate(*box.at)
        if box.rotation:
            self.canvas.rotate(box.rotation)

    def draw_fragments(self, fragments: Sequence[Fragment], box: BoxOptions) -> None:
        """Draw fragments inside the box, top-left anchored at ``box.at``.

        Every fragment of a line sits on one baseline, set by the tallest
        ascent on that line. RTL fragments are drawn with their characters
        reversed, since ReportLab places glyphs left to right.
        """
        lines = self._visible_lines(self.layout(fragments, box), box)
        factor = self.config.line_height_factor

        self._begin_box(box)
        try:
            top = 0.0
            for line in lines:
                drawn = [item for item in line.items if not item.fragment.text.isspace()]
                ascent = max(
                    (
                        pdfmetrics.getAscent(item.font_name, item.fragment.size or line.size)
                        for item in drawn
                    ),
                    default=0.0,
                )
                for item in drawn:
                    text = item.fragment.text
                    if item.fragment.is_rtl:
                        text = visual_order(text)
                    self.canvas.setFont(item.font_name, item.fragment.size or line.size)
                    self.canvas.drawString(
                        item.x,
                        top - ascent,
                        text,
                        charSpace=box.character_spacing,
                    )
                top -= line.height(factor) + box.leading
        finally:
            self.canvas.restoreState()

    def plain_lines(self, text: str, font_name: str, size: float, width: float | None) -> list[str]:
        if width is None:
            return text.split("\n")
        return simpleSplit(text, font_name, size, width)

    def plain_fits(self, text: str, font_name: str, size: float, box: BoxOptions) -> bool:
        lines = self.plain_lines(text, font_name, size, box.width)
        if box.width is not None:
            widest = max((self.measure_width(line, font_name, size) for line in lines), default=0.0)
            if widest > box.width + EPSILON:
                return False
        if box.height is not None:
            height = size * self.config.line_height_factor * len(lines)
            height += box.leading * max(len(lines) - 1, 0)
            if height > box.height + EPSILON:
                return False
        return True

    def shrink_plain_size(self, text: str, font_name: str, size: float, box: BoxOptions) -> float:
        """Largest size on the step grid at which plain text fits the box."""
        min_size = box.min_font_size if box.min_font_size is not None else self.config.min_font_size
        step = self.config.size_step
        count = int((size - min_size) / step + EPSILON) + 1 if size >= min_size else 0
        for idx in range(count):
            candidate = size - idx * step
            if self.plain_fits(text, font_name, candidate, box):
                return candidate
        return min_size

    def draw_plain_text_box(
        self,
        text: str,
        font: str,
        size: float,
        style: Styles,
        box: BoxOptions,
    ) -> None:
        """Draw single-direction text with ReportLab's own line splitting."""
        font_name = self.registry.resolve(font, style)
        if box.overflow == Overflow.SHRINK_TO_FIT and box.has_bounds:
            size = self.shrink_plain_size(text, font_name, size, box)
            logger.info("Plain text box shrunk to %.1f", size)

        lines = self.plain_lines(text, font_name, size, box.width)
        line_height = size * self.config.line_height_factor
        if box.overflow == Overflow.TRUNCATE and box.height is not None:
            fitting = 0
            while fitting < len(lines) and (
                line_height * (fitting + 1) + box.leading * fitting <= box.height + EPSILON
            ):
                fitting += 1
            lines = lines[:fitting]

        ascent = pdfmetrics.getAscent(font_name, size)
        self._begin_box(box)
        try:
            self.canvas.setFont(font_name, size)
            top = 0.0
            for line in lines:
                if line:
                    self.canvas.drawString(0, top - ascent, line, charSpace=box.character_spacing)
                top -= line_height + box.leading
        finally:
            self.canvas.restoreState()


def trial_box(box: BoxOptions, size: float) -> BoxOptions:
    """Box used for trial layouts: rotation and character spacing removed."""
    return replace(box, size=size, rotation=0.0, character_spacing=0.0)

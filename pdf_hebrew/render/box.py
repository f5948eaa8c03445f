"""Directional text box: the main rendering entry point."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from pdf_hebrew.config import Config
from pdf_hebrew.render.fit import FitResult, fit_and_render
from pdf_hebrew.render.host import HostRenderer, ReportLabRenderer
from pdf_hebrew.render.options import BoxOptions, Direction, Overflow
from pdf_hebrew.text.sanitize import sanitize_text
from pdf_hebrew.text.script import contains_rtl
from pdf_hebrew.text.segment import segment_to_fragments

if TYPE_CHECKING:
    from reportlab.pdfgen.canvas import Canvas

    from pdf_hebrew.fonts.registry import FontRegistry

PLAIN = "plain"
FIXED = "fixed"


def _coerce_options(options: BoxOptions | Mapping[str, Any] | None, overrides: dict[str, Any]) -> BoxOptions:
    if options is None or isinstance(options, Mapping):
        return BoxOptions.from_mapping(options, **overrides)
    if overrides:
        return replace(options, **overrides)
    return options


def render_directional_box(
    text: str | None,
    options: BoxOptions | Mapping[str, Any] | None = None,
    *,
    host: HostRenderer,
    config: Config | None = None,
    **overrides: Any,
) -> FitResult:
    """Render mixed Hebrew/Latin text into a box.

    With ``direction="auto"`` the box is RTL when the text contains Hebrew.
    Text without Hebrew in an LTR box is drawn with the host's plain text
    box. Everything else is segmented into visual-order fragments, either
    once at the requested size or through the shrink-to-fit search.

    Args:
        text: Raw text; sanitized before anything else.
        options: Box options, as a BoxOptions or a mapping of its fields.
        host: Renderer to draw with.
        config: Defaults for fonts, sizes and fitting.
        **overrides: Individual option fields, applied on top of ``options``.

    Returns:
        The size used and how it was chosen.
    """
    config = config or Config()
    box = _coerce_options(options, overrides).resolve(config)
    text = sanitize_text(text) or ""

    has_rtl = contains_rtl(text)
    direction = box.direction
    if direction == Direction.AUTO:
        direction = Direction.RTL if has_rtl else Direction.LTR

    if box.overflow == Overflow.SHRINK_TO_FIT:
        return fit_and_render(
            text,
            box.size,  # type: ignore[arg-type]
            box.min_font_size,  # type: ignore[arg-type]
            box,
            host=host,
            style=box.style,
            fonts=box.fonts,
            direction=direction,
            strategy=box.strategy,
            config=config,
        )

    if not has_rtl and direction == Direction.LTR:
        host.draw_plain_text_box(text, box.ltr_font, box.size, box.style, box)  # type: ignore[arg-type]
        return FitResult(box.size, True, PLAIN)

    fragments = segment_to_fragments(
        text, box.size, box.style, box.rtl_font, box.ltr_font, config=config
    )
    host.draw_fragments(fragments, box)
    return FitResult(box.size, True, FIXED)


def hebrew_text_box(
    canvas: Canvas,
    text: str | None,
    *,
    config: Config | None = None,
    registry: FontRegistry | None = None,
    **options: Any,
) -> FitResult:
    """Draw a directional text box straight onto a ReportLab canvas.

    Example:
        >>> from reportlab.pdfgen.canvas import Canvas
        >>> c = Canvas("out.pdf")
        >>> hebrew_text_box(c, "שלום World", at=(50, 700), width=200, height=50,
        ...                 overflow="shrink_to_fit", ltr_font="Helvetica")
    """
    config = config or Config()
    host = ReportLabRenderer(canvas, registry=registry, config=config)
    return render_directional_box(text, options, host=host, config=config)

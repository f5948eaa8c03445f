"""Shrink-to-fit sizing for mixed-direction text.

The engine walks candidate sizes from the requested size down to the minimum
in fixed steps, re-segments the text at each one and asks whether it fits.
Two ways of answering are supported:

* ``dry_run``: the host lays the fragments out for real without drawing and
  reports overflow. Preferred, because it is the same layout the final render
  uses.
* ``approximate``: sum fragment widths and estimate the height from the line
  count. Used when the host has no dry-run capability.

The first candidate that fits wins; if none does, the minimum size is used.
Only the chosen size is ever drawn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace

from pdf_hebrew.config import Config
from pdf_hebrew.exceptions import StrategyUnavailableError
from pdf_hebrew.render.host import HostRenderer, supports_dry_run, trial_box
from pdf_hebrew.render.options import BoxOptions, Direction, FontPair, Overflow
from pdf_hebrew.text.script import contains_rtl
from pdf_hebrew.text.segment import Fragment, normalize_styles, segment_to_fragments

logger = logging.getLogger(__name__)

DRY_RUN = "dry_run"
APPROXIMATE = "approximate"
NATIVE = "native"
UNBOUNDED = "unbounded"


@dataclass
class FitRequest:
    """Sizing state for one shrink-to-fit call."""

    initial_size: float
    min_size: float
    box_width: float
    box_height: float
    step: float = 0.5
    candidate: float | None = None

    def candidates(self) -> Iterator[float]:
        """Yield sizes from ``initial_size`` down to ``min_size`` inclusive."""
        if self.initial_size < self.min_size:
            return
        count = int((self.initial_size - self.min_size) / self.step + 1e-9) + 1
        for idx in range(count):
            self.candidate = self.initial_size - idx * self.step
            yield self.candidate


@dataclass(frozen=True)
class FitResult:
    """Outcome of a sizing search.

    Attributes:
        size: Chosen size; None when the host picked it natively.
        fitted: False when no candidate fit and the minimum was used.
        strategy: dry_run, approximate, native or unbounded.
        attempts: Number of candidates tried.
    """

    size: float | None
    fitted: bool
    strategy: str
    attempts: int = 0


def resolve_strategy(strategy: str | None, host: object) -> str:
    """Turn "auto"/None into a concrete strategy for this host."""
    if strategy in (None, "auto"):
        return DRY_RUN if supports_dry_run(host) else APPROXIMATE
    if strategy == DRY_RUN and not supports_dry_run(host):
        raise StrategyUnavailableError(
            f"{type(host).__name__} has no dry_run_layout; use 'approximate'"
        )
    if strategy not in (DRY_RUN, APPROXIMATE):
        raise ValueError(f"Unknown fit strategy: {strategy!r}")
    return strategy


def approximate_fits(
    fragments: Sequence[Fragment],
    size: float,
    request: FitRequest,
    host: HostRenderer,
    *,
    fallback_font: str,
    leading: float,
    line_height_factor: float,
    margin: float,
) -> bool:
    """Estimate whether fragments fit without laying them out.

    Width is the sum of all fragment widths; height is the line count times
    the line height plus leading between lines. Both must stay within
    ``margin`` of the box.
    """
    total_width = 0.0
    line_count = 1
    for fragment in fragments:
        if fragment.is_line_break:
            line_count += 1
            continue
        total_width += host.measure_width(fragment.text, fragment.font or fallback_font, size)

    total_height = line_height_factor * size * line_count + leading * (line_count - 1)
    return total_width <= request.box_width * margin and total_height <= request.box_height * margin


def choose_font_size(
    text: str | None,
    request: FitRequest,
    *,
    host: HostRenderer,
    box: BoxOptions,
    style: str | Iterable[str] | None = None,
    fonts: FontPair | None = None,
    strategy: str | None = None,
    config: Config | None = None,
) -> FitResult:
    """Find the largest candidate size at which the text fits the box.

    Nothing is drawn. Trial layouts ignore rotation and character spacing.

    Args:
        text: Raw text.
        request: Sizes and box dimensions to search.
        host: Renderer used to measure or dry-run.
        box: Box the text will be drawn in.
        style: Style tags for every fragment.
        fonts: RTL/LTR font pair; config defaults when None.
        strategy: "auto", "dry_run" or "approximate"; config default when None.
        config: Defaults for fonts, line height and margins.

    Returns:
        The chosen size, or ``request.min_size`` with ``fitted=False``.
    """
    config = config or Config()
    fonts = fonts or FontPair(rtl=config.rtl_font, ltr=config.ltr_font)
    styles = normalize_styles(style)
    chosen = resolve_strategy(strategy or config.fit_strategy, host)

    attempts = 0
    for candidate in request.candidates():
        attempts += 1
        fragments = segment_to_fragments(
            text, candidate, styles, fonts.rtl, fonts.ltr, config=config
        )
        if chosen == DRY_RUN:
            fits = not host.dry_run_layout(fragments, trial_box(box, candidate))  # type: ignore[attr-defined]
        else:
            fits = approximate_fits(
                fragments,
                candidate,
                request,
                host,
                fallback_font=fonts.rtl,
                leading=box.leading,
                line_height_factor=config.line_height_factor,
                margin=config.fit_margin,
            )
        logger.debug("Candidate size %.1f (%s): %s", candidate, chosen, "fits" if fits else "overflows")
        if fits:
            logger.info("Chose font size %.1f after %d attempt(s)", candidate, attempts)
            return FitResult(candidate, True, chosen, attempts)

    logger.debug("No candidate fit; falling back to minimum size %.1f", request.min_size)
    return FitResult(request.min_size, False, chosen, attempts)


def fit_and_render(
    text: str | None,
    initial_size: float,
    min_size: float,
    box: BoxOptions,
    *,
    host: HostRenderer,
    style: str | Iterable[str] | None = None,
    fonts: FontPair | None = None,
    direction: Direction | str = Direction.AUTO,
    strategy: str | None = None,
    config: Config | None = None,
) -> FitResult:
    """Choose a fitting size and render the text once at that size.

    Text without Hebrew in an LTR box goes to the host's plain text box with
    its own shrink-to-fit. A box without both width and height is drawn at
    ``initial_size``.

    Returns:
        How the size was chosen.
    """
    config = config or Config()
    fonts = fonts or FontPair(rtl=config.rtl_font, ltr=config.ltr_font)
    styles = normalize_styles(style)
    direction = Direction(direction)
    has_rtl = contains_rtl(text)
    if direction == Direction.AUTO:
        direction = Direction.RTL if has_rtl else Direction.LTR

    if not has_rtl and direction == Direction.LTR:
        host.draw_plain_text_box(
            text or "",
            fonts.ltr,
            initial_size,
            styles,
            replace(box, size=initial_size, overflow=Overflow.SHRINK_TO_FIT, min_font_size=min_size),
        )
        return FitResult(None, True, NATIVE)

    if not box.has_bounds:
        fragments = segment_to_fragments(text, initial_size, styles, fonts.rtl, fonts.ltr, config=config)
        host.draw_fragments(fragments, replace(box, size=initial_size))
        return FitResult(initial_size, True, UNBOUNDED)

    request = FitRequest(
        initial_size=initial_size,
        min_size=min_size,
        box_width=box.width,  # type: ignore[arg-type]
        box_height=box.height,  # type: ignore[arg-type]
        step=config.size_step,
    )
    result = choose_font_size(
        text,
        request,
        host=host,
        box=box,
        style=styles,
        fonts=fonts,
        strategy=strategy or box.strategy,
        config=config,
    )

    fragments = segment_to_fragments(text, result.size, styles, fonts.rtl, fonts.ltr, config=config)
    host.draw_fragments(fragments, replace(box, size=result.size))
    return result

"""Pytest configuration and shared fixtures for pdf-hebrew tests."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from reportlab.pdfgen.canvas import Canvas

from pdf_hebrew.config import Config
from pdf_hebrew.log import PACKAGE_LOGGER
from pdf_hebrew.render.host import layout_fragments, layout_height
from pdf_hebrew.render.options import BoxOptions
from pdf_hebrew.text.segment import Fragment

HEBREW_LETTERS = list(range(0x05D0, 0x05EB))
PUNCTUATION = [ord(c) for c in ".,:;!?-()[]{}\"'"]

# Every glyph of the test font advances 500 units on a 1000 unit em, so a
# string of n characters is n * size / 2 wide.
GLYPH_ADVANCE = 500


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 600))
    pen.lineTo((450, 600))
    pen.lineTo((450, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path, codepoints: Sequence[int], family: str = "TestHebrew") -> Path:
    """Write a minimal TrueType font mapping the given code points."""
    names = {cp: f"uni{cp:04X}" for cp in codepoints}
    glyph_order = [".notdef", "space", *names.values()]

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({0x20: "space", **names})

    glyphs = {name: _box_glyph() for name in glyph_order}
    glyphs["space"] = TTGlyphPen(None).glyph()
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (GLYPH_ADVANCE, 0) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable(
        {
            "familyName": family,
            "styleName": "Regular",
            "fullName": f"{family} Regular",
            "psName": f"{family}-Regular",
        }
    )
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200, fsType=0)
    builder.setupPost()
    builder.save(str(path))
    return path


@pytest.fixture(scope="session")
def hebrew_font_file(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A TrueType font covering the Hebrew alphabet, space and ASCII punctuation."""
    path = tmp_path_factory.mktemp("fonts") / "TestHebrew.ttf"
    return build_test_font(path, HEBREW_LETTERS + PUNCTUATION)


@pytest.fixture(scope="session")
def partial_font_file(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A TrueType font covering only the first five Hebrew letters."""
    path = tmp_path_factory.mktemp("fonts") / "PartialHebrew.ttf"
    return build_test_font(path, HEBREW_LETTERS[:5], family="PartialHebrew")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so caplog sees package records in every test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def config() -> Config:
    """Default configuration with explicit test font names."""
    return Config(rtl_font="HebrewFont", ltr_font="LatinFont")


@dataclass
class FakeHost:
    """HostRenderer double with deterministic metrics.

    Every character is ``size / 2`` wide. Draw calls are recorded instead of
    painted. ``dry_run_layout`` uses the library's own line layout.
    """

    line_height_factor: float = 1.2
    draws: list[tuple[list[Fragment], BoxOptions]] = field(default_factory=list)
    plain_draws: list[tuple[str, str, float, tuple[str, ...], BoxOptions]] = field(default_factory=list)
    dry_runs: list[float] = field(default_factory=list)
    measured: list[tuple[str, str, float]] = field(default_factory=list)

    def measure_width(self, text: str, font: str, size: float) -> float:
        self.measured.append((text, font, size))
        return len(text) * size / 2

    def dry_run_layout(self, fragments: Sequence[Fragment], box: BoxOptions) -> bool:
        self.dry_runs.append(box.size)
        lines = layout_fragments(
            fragments,
            box.width,
            measure=lambda text, font, size: len(text) * size / 2,
            font_for=lambda fragment: fragment.font or "",
            default_size=box.size,
            character_spacing=box.character_spacing,
        )
        if box.width is not None and any(line.width > box.width for line in lines):
            return True
        height = layout_height(lines, self.line_height_factor, box.leading)
        return box.height is not None and height > box.height

    def draw_fragments(self, fragments: Sequence[Fragment], box: BoxOptions) -> None:
        self.draws.append((list(fragments), box))

    def draw_plain_text_box(
        self,
        text: str,
        font: str,
        size: float,
        style: tuple[str, ...],
        box: BoxOptions,
    ) -> None:
        self.plain_draws.append((text, font, size, style, box))


class MeasureOnlyHost:
    """HostRenderer double without dry-run support."""

    def __init__(self) -> None:
        self.draws: list[tuple[list[Fragment], BoxOptions]] = []
        self.plain_draws: list[tuple[str, str, float, tuple[str, ...], BoxOptions]] = []

    def measure_width(self, text: str, font: str, size: float) -> float:
        return len(text) * size / 2

    def draw_fragments(self, fragments: Sequence[Fragment], box: BoxOptions) -> None:
        self.draws.append((list(fragments), box))

    def draw_plain_text_box(
        self,
        text: str,
        font: str,
        size: float,
        style: tuple[str, ...],
        box: BoxOptions,
    ) -> None:
        self.plain_draws.append((text, font, size, style, box))


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def measure_only_host() -> MeasureOnlyHost:
    return MeasureOnlyHost()


@pytest.fixture
def pdf_canvas(tmp_path: Path) -> Canvas:
    """A ReportLab canvas writing to a temporary file."""
    return Canvas(str(tmp_path / "out.pdf"))


class RecordingCanvas(Canvas):
    """Canvas that remembers every drawString call."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.strings: list[tuple[float, float, str, str, float]] = []

    def drawString(self, x, y, text, *args, **kwargs):  # noqa: N802
        self.strings.append((x, y, text, self._fontname, self._fontsize))
        return super().drawString(x, y, text, *args, **kwargs)

    @property
    def texts(self) -> list[str]:
        return [entry[2] for entry in self.strings]


@pytest.fixture
def recording_canvas(tmp_path: Path) -> RecordingCanvas:
    return RecordingCanvas(str(tmp_path / "recorded.pdf"))


@pytest.fixture
def reportlab_config(hebrew_font_file: Path) -> Config:
    """Config pairing the generated Hebrew font with built-in Helvetica."""
    return Config(
        rtl_font="TestHebrew",
        ltr_font="Helvetica",
        fonts={"TestHebrew": str(hebrew_font_file)},
    )

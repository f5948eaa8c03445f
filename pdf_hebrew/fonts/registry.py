"""Font registry: font identifiers to ReportLab fonts.

The text core only passes font identifiers around. This module is where an
identifier such as ``"GveretLevinHebrew"`` becomes a TrueType font registered
with ReportLab, and where a family plus a style set becomes a concrete face
name (``"Helvetica"`` + bold -> ``"Helvetica-Bold"``).
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path

from fontTools.ttLib import TTFont as FontToolsFont
from fontTools.ttLib import TTLibError
from reportlab.lib.fonts import tt2ps
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from pdf_hebrew.exceptions import FontNotFoundError

logger = logging.getLogger(__name__)

# Hebrew letters alef..tav; a Hebrew font must map all of them.
HEBREW_LETTERS = range(0x05D0, 0x05EB)

FONT_SUFFIXES = (".ttf",)


def hebrew_coverage(path: str | Path) -> float:
    """Return the share of Hebrew letters the font file maps to glyphs.

    Raises:
        FontNotFoundError: If the file is missing or not a readable font.
    """
    font_path = Path(path)
    if not font_path.is_file():
        raise FontNotFoundError(str(font_path), "no such file")
    try:
        font = FontToolsFont(str(font_path), lazy=True, fontNumber=0)
    except (TTLibError, OSError) as e:
        raise FontNotFoundError(str(font_path), f"unreadable font: {e}") from e
    try:
        cmap = font.getBestCmap() or {}
    finally:
        font.close()
    covered = sum(1 for code in HEBREW_LETTERS if code in cmap)
    return covered / len(HEBREW_LETTERS)


def font_covers_hebrew(path: str | Path) -> bool:
    """Return True if the font file has a glyph for every Hebrew letter."""
    return hebrew_coverage(path) >= 1.0


def _normalize_name(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


class FontRegistry:
    """Registers TrueType fonts with ReportLab and resolves styled faces.

    Args:
        fonts: Font identifier to TTF path, registered immediately.
        search_dirs: Directories searched by :meth:`find_font_file`.
            Defaults to the platform font directories.
    """

    def __init__(
        self,
        fonts: Mapping[str, str | Path] | None = None,
        search_dirs: Iterable[Path] | None = None,
    ) -> None:
        self._paths: dict[str, Path] = {}
        self._search_dirs = list(search_dirs) if search_dirs is not None else None
        for name, path in (fonts or {}).items():
            self.register(name, path)

    @staticmethod
    def _font_dirs() -> list[Path]:
        """Return the existing font directories for this platform."""
        home = Path.home()
        if sys.platform == "darwin":
            dirs = [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                home / "Library" / "Fonts",
            ]
        elif sys.platform.startswith("win"):
            windir = Path(os.environ.get("WINDIR", "C:/Windows"))
            dirs = [windir / "Fonts"]
            local = os.environ.get("LOCALAPPDATA")
            if local:
                dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        else:
            dirs = [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                home / ".local" / "share" / "fonts",
                home / ".fonts",
            ]
        return [d for d in dirs if d.exists()]

    @property
    def search_dirs(self) -> list[Path]:
        if self._search_dirs is None:
            return self._font_dirs()
        return self._search_dirs

    def is_registered(self, name: str) -> bool:
        return name in pdfmetrics.standardFonts or name in pdfmetrics.getRegisteredFontNames()

    def path_of(self, name: str) -> Path | None:
        """Return the file a font identifier was registered from, if any."""
        return self._paths.get(name)

    def find_font_file(self, name: str) -> Path:
        """Find a TrueType file whose stem matches the font name.

        Matching ignores case, spaces, dashes and underscores.

        Raises:
            FontNotFoundError: If no directory holds a matching file.
        """
        wanted = _normalize_name(name)
        for directory in self.search_dirs:
            for candidate in sorted(directory.rglob("*")):
                if candidate.suffix.lower() not in FONT_SUFFIXES:
                    continue
                if _normalize_name(candidate.stem) == wanted:
                    return candidate
        raise FontNotFoundError(name, "not found in font directories")

    def register(
        self,
        name: str,
        path: str | Path | None = None,
        *,
        bold: str | Path | None = None,
        italic: str | Path | None = None,
        bold_italic: str | Path | None = None,
    ) -> str:
        """Register a TrueType font (and optional styled faces) under a name.

        Without a path the font is looked up in the search directories.
        Registering a name that is already known to ReportLab is a no-op
        unless a path is given.

        Returns:
            The registered font name.

        Raises:
            FontNotFoundError: If the file does not exist or cannot be found.
        """
        if path is None:
            if self.is_registered(name):
                return name
            path = self.find_font_file(name)

        font_path = Path(path)
        if not font_path.is_file():
            raise FontNotFoundError(name, f"no such file: {font_path}")

        pdfmetrics.registerFont(TTFont(name, str(font_path)))
        self._paths[name] = font_path
        logger.info("Registered font %s from %s", name, font_path)

        faces = {"bold": bold, "italic": italic, "boldItalic": bold_italic}
        family = {"normal": name, "bold": name, "italic": name, "boldItalic": name}
        for face, face_path in faces.items():
            if face_path is None:
                continue
            face_name = f"{name}-{face[0].upper()}{face[1:]}"
            self.register(face_name, face_path)
            family[face] = face_name
        pdfmetrics.registerFontFamily(name, **family)
        return name

    def resolve(self, family: str, styles: Iterable[str] = ()) -> str:
        """Return the concrete face name for a family and style set.

        Families without the requested face fall back to their regular face.
        """
        styles = tuple(styles)
        bold = "bold" in styles
        italic = "italic" in styles
        if not bold and not italic:
            return family
        try:
            return tt2ps(family, int(bold), int(italic))
        except ValueError:
            logger.warning(
                "Font %s has no %s face; using the regular face",
                family,
                "+".join(s for s in ("bold", "italic") if s in styles),
            )
            return family

    def check_hebrew(self, name: str) -> bool:
        """Warn if a registered font lacks Hebrew letters.

        Built-in PDF fonts have no Hebrew glyphs at all.
        """
        path = self._paths.get(name)
        if path is None:
            if name in pdfmetrics.standardFonts:
                logger.warning("Font %s is a built-in PDF font without Hebrew glyphs", name)
                return False
            return True
        coverage = hebrew_coverage(path)
        if coverage < 1.0:
            logger.warning(
                "Font %s (%s) covers only %.0f%% of Hebrew letters",
                name,
                path,
                coverage * 100,
            )
            return False
        return True

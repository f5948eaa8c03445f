"""Box rendering options.

``BoxOptions`` replaces a free-form keyword bag with an explicit value. Every
field has a default; fonts, size and minimum size fall back to the
:class:`~pdf_hebrew.config.Config` in effect when left as None.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from pdf_hebrew.config import Config
from pdf_hebrew.text.segment import Styles, normalize_styles


class Direction(str, Enum):
    """Base direction of a box. AUTO picks RTL when the text has Hebrew."""

    AUTO = "auto"
    LTR = "ltr"
    RTL = "rtl"


class Overflow(str, Enum):
    """What to do when text does not fit the box.

    NONE draws everything, TRUNCATE drops the lines below the box and
    SHRINK_TO_FIT lowers the font size until the text fits.
    """

    NONE = "none"
    TRUNCATE = "truncate"
    SHRINK_TO_FIT = "shrink_to_fit"


@dataclass(frozen=True)
class FontPair:
    """Font identifiers for Hebrew runs and for everything else."""

    rtl: str
    ltr: str


@dataclass(frozen=True)
class BoxOptions:
    """Where and how a block of mixed-direction text is rendered.

    Attributes:
        at: Top-left corner (x, y) of the box in page coordinates.
        width: Box width; None means unbounded.
        height: Box height; None means unbounded.
        size: Font size (config default when None).
        style: Style tags applied to every fragment.
        rtl_font: Font for Hebrew runs (config default when None).
        ltr_font: Font for Latin text (config default when None).
        direction: auto, ltr or rtl.
        rotation: Rotation in degrees about ``at``, applied to the final
            render only.
        character_spacing: Extra space added after every character.
        leading: Extra space between lines.
        overflow: none, truncate or shrink_to_fit.
        min_font_size: Lower bound for shrink_to_fit (config default when None).
        strategy: Fit strategy override (config default when None).
    """

    at: tuple[float, float] = (0.0, 0.0)
    width: float | None = None
    height: float | None = None
    size: float | None = None
    style: Styles = ()
    rtl_font: str | None = None
    ltr_font: str | None = None
    direction: Direction = Direction.AUTO
    rotation: float = 0.0
    character_spacing: float = 0.0
    leading: float = 0.0
    overflow: Overflow = Overflow.TRUNCATE
    min_font_size: float | None = None
    strategy: str | None = None

    def __post_init__(self) -> None:
        # Accept loose inputs (lists, plain strings) and store canonical ones.
        object.__setattr__(self, "at", (float(self.at[0]), float(self.at[1])))
        object.__setattr__(self, "style", normalize_styles(self.style))
        object.__setattr__(self, "direction", Direction(self.direction))
        object.__setattr__(self, "overflow", Overflow(self.overflow))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None, **kwargs: Any) -> BoxOptions:
        """Build options from a mapping and/or keyword arguments.

        ``rotate`` is accepted as an alias of ``rotation``. Unknown keys raise
        TypeError, the same as for the constructor.
        """
        merged: dict[str, Any] = dict(options or {})
        merged.update(kwargs)
        if "rotate" in merged:
            merged.setdefault("rotation", merged.pop("rotate"))
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise TypeError(f"Unknown box option(s): {', '.join(unknown)}")
        return cls(**merged)

    def resolve(self, config: Config) -> BoxOptions:
        """Fill unset fonts and sizes from the config."""
        return replace(
            self,
            size=self.size if self.size is not None else config.font_size,
            rtl_font=self.rtl_font or config.rtl_font,
            ltr_font=self.ltr_font or config.ltr_font,
            min_font_size=(
                self.min_font_size if self.min_font_size is not None else config.min_font_size
            ),
            strategy=self.strategy or config.fit_strategy,
        )

    @property
    def fonts(self) -> FontPair:
        if self.rtl_font is None or self.ltr_font is None:
            raise ValueError("BoxOptions fonts are unresolved; call resolve() first")
        return FontPair(rtl=self.rtl_font, ltr=self.ltr_font)

    @property
    def has_bounds(self) -> bool:
        return self.width is not None and self.height is not None
